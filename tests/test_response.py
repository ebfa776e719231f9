"""Tests for InferenceResponse, FinishReason and TokenUsage."""

from __future__ import annotations

import pytest

from agentloop import FinishReason, InferenceResponse, Message, Role, TokenUsage

from conftest import text_response, tool_call, tool_call_response


class TestFinishReason:

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("stop", FinishReason.STOP),
            ("length", FinishReason.LENGTH),
            ("tool_calls", FinishReason.TOOL_CALLS),
            ("content_filter", FinishReason.OTHER),
            ("function_call", FinishReason.OTHER),
            (None, None),
        ],
    )
    def test_parse(self, raw, expected):
        assert FinishReason.parse(raw) is expected


class TestTokenUsage:

    def test_from_dict(self):
        usage = TokenUsage.from_dict({"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7})
        assert usage == TokenUsage(3, 4, 7)

    def test_missing_usage(self):
        assert TokenUsage.from_dict(None) is None
        assert TokenUsage.from_dict({}) is None

    def test_null_counts_become_zero(self):
        usage = TokenUsage.from_dict({"prompt_tokens": None, "total_tokens": 2})
        assert usage == TokenUsage(0, 0, 2)


class TestInferenceResponse:

    def test_text_accessors(self):
        response = InferenceResponse(text_response("Paris"))

        assert response.content == "Paris"
        assert response.role == "assistant"
        assert response.finish_reason is FinishReason.STOP
        assert response.tool_calls is None
        assert not response.has_tool_calls
        assert response.model == "gpt-4o-mini"
        assert response.id == "chatcmpl-test123"
        assert response.prompt_tokens == 10
        assert response.completion_tokens == 5
        assert response.total_tokens == 15
        assert response.succeeded
        assert str(response) == "Paris"

    def test_tool_call_accessors(self):
        response = InferenceResponse(tool_call_response(tool_call("weather", {"city": "SF"})))

        assert response.has_tool_calls
        assert response.finish_reason is FinishReason.TOOL_CALLS
        assert response.tool_calls[0]["function"]["name"] == "weather"
        assert response.content is None
        assert response.usage is None
        assert response.total_tokens is None
        assert not response.succeeded
        assert str(response) == ""

    def test_empty_tool_calls_list_is_no_tool_calls(self):
        raw = text_response("x")
        raw["choices"][0]["message"]["tool_calls"] = []
        assert not InferenceResponse(raw).has_tool_calls

    def test_no_choices(self):
        response = InferenceResponse({"id": "x"})

        assert response.message is None
        assert response.content is None
        assert response.role is None
        assert response.finish_reason is None
        assert response.tool_calls is None
        assert not response.succeeded

    def test_stop_with_empty_content_succeeds(self):
        assert InferenceResponse(text_response("")).succeeded

    def test_length_with_empty_content_fails(self):
        assert not InferenceResponse(text_response("", finish_reason="length")).succeeded

    def test_to_message(self):
        msg = InferenceResponse(text_response("hi")).to_message()
        assert msg == Message(role=Role.ASSISTANT, content="hi")

    def test_raw_access(self):
        response = InferenceResponse(text_response())
        assert response["object"] == "chat.completion"
        assert response.get("missing", "default") == "default"
        with pytest.raises(KeyError):
            response["missing"]
