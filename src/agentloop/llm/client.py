"""Built-in OpenAI-compatible httpx client with tenacity retry.

Provides a sync HTTP client for OpenAI-compatible chat completion APIs
(OpenAI itself, or a gateway such as Helicone's). Reads configuration
from a ClientConfig, constructor arguments, or environment variables.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import httpx
import tenacity

from agentloop.llm.errors import (
    LLMAuthError,
    LLMConfigError,
    LLMRateLimitError,
    LLMResponseError,
)
from agentloop.models.config import API_KEY_ENV, ClientConfig
from agentloop.models.message import ImageDetail, Message
from agentloop.models.response import InferenceResponse

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_AUTH_ERROR_STATUS_CODES = {401, 403}


def _is_retryable(exc: BaseException) -> bool:
    """Check if an exception is retryable.

    Retryable: 429, 500, 502, 503, 504, connection errors.
    Not retryable: 401, 403, 400, other client errors.
    """
    if isinstance(exc, LLMAuthError):
        return False
    if isinstance(exc, LLMRateLimitError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _RETRYABLE_STATUS_CODES
    return isinstance(exc, (httpx.ConnectError, httpx.ConnectTimeout))


def session_headers(
    session_id: str | int | None = None,
    session_name: str | None = None,
    account_id: str | int | None = None,
    account_name: str | None = None,
) -> dict[str, str]:
    """Build gateway tracking headers for a session and/or account.

    The values are opaque to this library; they are only attached to
    outgoing requests.
    """
    headers: dict[str, str] = {}
    if session_id is not None:
        headers["Helicone-Session-Id"] = str(session_id)
        headers["Helicone-Session-Name"] = session_name or f"Conversation #{session_id}"
    if account_id is not None:
        headers["Helicone-User-Id"] = str(account_id)
        headers["Helicone-Property-Account"] = account_name or str(account_id)
    return headers


class OpenAIClient:
    """Sync httpx client for OpenAI-compatible chat completions.

    Implements the InferenceClient protocol. Supports retry with exponential
    backoff for transient errors (429, 5xx). Fails immediately on
    authentication errors (401, 403).

    Usage::

        with OpenAIClient(api_key="sk-...", session_id="conv_123") as client:
            response = client.chat([Message.user("Hello")])
            print(response.content)
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        *,
        config: ClientConfig | None = None,
        session_id: str | int | None = None,
        session_name: str | None = None,
        account_id: str | int | None = None,
        account_name: str | None = None,
    ) -> None:
        """Initialize the OpenAI-compatible client.

        Args:
            api_key: API key. Falls back to config, then AGENTLOOP_API_KEY.
            base_url: API base URL. Falls back to config, then
                AGENTLOOP_BASE_URL, then the gateway default.
            default_model: Default model for chat requests.
            timeout: Request timeout in seconds.
            max_retries: Maximum number of attempts for retryable errors.
            config: Base configuration; explicit arguments override it.
                When omitted, one is read from the environment.
            session_id: Conversation/session id for gateway grouping.
            session_name: Human-readable session name.
            account_id: Account id for per-account cost tracking.
            account_name: Human-readable account name.

        Raises:
            LLMConfigError: If no API key is provided or found in environment.
        """
        overrides = {
            "api_key": api_key,
            "base_url": base_url,
            "default_model": default_model,
            "timeout": timeout,
            "max_retries": max_retries,
        }
        if config is None:
            config = ClientConfig.from_env(**overrides)
        else:
            config = config.model_copy(
                update={k: v for k, v in overrides.items() if v is not None}
            )
        if not config.api_key:
            raise LLMConfigError(
                f"No API key provided. Pass api_key= or set {API_KEY_ENV} "
                "environment variable."
            )
        self._config = config
        self._base_url = config.base_url.rstrip("/")
        self._default_model = config.default_model
        self._max_retries = config.max_retries
        self._client = httpx.Client(
            timeout=config.timeout,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {config.api_key}",
                **config.headers,
                **session_headers(session_id, session_name, account_id, account_name),
            },
        )

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def headers(self) -> dict[str, str]:
        return dict(self._client.headers)

    def add_headers(self, headers: Mapping[str, str]) -> None:
        """Attach additional headers to every subsequent request."""
        self._client.headers.update(headers)

    def chat(
        self,
        messages: Sequence[Message | dict],
        *,
        model: str | None = None,
        tools: list[dict] | None = None,
        tool_choice: str | dict | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        **kwargs: Any,
    ) -> InferenceResponse:
        """Send chat completion request with retry.

        Uses tenacity.Retrying programmatically (not as decorator) so that
        max_retries is configurable per-instance.

        Args:
            messages: Message objects or wire-format message dicts.
            model: Model to use. Falls back to default_model.
            tools: Tool declarations in OpenAI format. Omitted when empty.
            tool_choice: Tool selection strategy ("auto", "none", or a
                specific tool). Only sent together with tools.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens to generate.
            **kwargs: Additional payload parameters forwarded to the API.

        Returns:
            InferenceResponse wrapping the decoded response dict.

        Raises:
            LLMAuthError: On 401/403 (no retry).
            LLMRateLimitError: On 429 after all retries exhausted.
            LLMResponseError: On unexpected response format.
            httpx.HTTPStatusError: On other non-retryable HTTP errors.
        """
        payload: dict[str, Any] = {
            "model": model or self._default_model,
            "messages": [m.to_dict() if isinstance(m, Message) else m for m in messages],
        }
        if tools:
            payload["tools"] = tools
            if tool_choice is not None:
                payload["tool_choice"] = tool_choice
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens
        payload.update(kwargs)

        retryer = tenacity.Retrying(
            retry=tenacity.retry_if_exception(_is_retryable),
            wait=(
                tenacity.wait_exponential(multiplier=1, min=1, max=30)
                + tenacity.wait_random(0, 2)
            ),
            stop=tenacity.stop_after_attempt(self._max_retries),
            before_sleep=tenacity.before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return InferenceResponse(retryer(self._do_chat, payload))

    def _do_chat(self, payload: dict[str, Any]) -> dict:
        """Execute a single chat completion request (no retry)."""
        response = self._client.post(
            f"{self._base_url}/chat/completions",
            json=payload,
        )

        # Check for auth errors before raise_for_status
        if response.status_code in _AUTH_ERROR_STATUS_CODES:
            raise LLMAuthError(
                f"Authentication failed: HTTP {response.status_code} - "
                f"{response.text}"
            )

        if response.status_code == 429:
            retry_after_raw = response.headers.get("Retry-After")
            retry_after: float | None = None
            if retry_after_raw is not None:
                try:
                    retry_after = float(retry_after_raw)
                except (ValueError, TypeError):
                    pass
            raise LLMRateLimitError(
                f"Rate limited: HTTP 429 - {response.text}",
                retry_after=retry_after,
            )

        response.raise_for_status()

        data = response.json()
        if not isinstance(data, dict) or "choices" not in data:
            raise LLMResponseError(
                f"Unexpected response format: missing 'choices' key. "
                f"Response: {data}"
            )
        return data

    def ask(
        self,
        prompt: str,
        *,
        model: str | None = None,
        system_prompt: str | None = None,
        **kwargs: Any,
    ) -> str | None:
        """Single-turn convenience: send one user prompt, return the text."""
        messages: list[Message] = []
        if system_prompt:
            messages.append(Message.system(system_prompt))
        messages.append(Message.user(prompt))
        return self.chat(messages, model=model, **kwargs).content

    def ask_with_image(
        self,
        prompt: str,
        image_urls: str | Iterable[str],
        *,
        model: str | None = None,
        system_prompt: str | None = None,
        detail: ImageDetail | str = ImageDetail.AUTO,
        **kwargs: Any,
    ) -> str | None:
        """Single-turn convenience with one or more images (URLs or data URIs)."""
        messages: list[Message] = []
        if system_prompt:
            messages.append(Message.system(system_prompt))
        messages.append(Message.user_with_images(prompt, image_urls, detail=detail))
        return self.chat(messages, model=model, **kwargs).content

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> OpenAIClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()
