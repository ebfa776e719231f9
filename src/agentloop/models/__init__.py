"""Data models: configuration, conversation messages and model responses."""

from agentloop.models.config import DEFAULT_BASE_URL, DEFAULT_MODEL, ClientConfig
from agentloop.models.message import (
    ContentPart,
    ImageDetail,
    ImagePart,
    Message,
    Role,
    TextPart,
)
from agentloop.models.response import FinishReason, InferenceResponse, TokenUsage

__all__ = [
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "ContentPart",
    "ImageDetail",
    "ImagePart",
    "Message",
    "Role",
    "TextPart",
    "FinishReason",
    "InferenceResponse",
    "TokenUsage",
]
