"""Configuration models for agentloop.

ClientConfig holds connection settings for the OpenAI-compatible
inference client. It is an explicit value passed to constructors;
there is no process-wide configuration object.
"""

from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://ai-gateway.helicone.ai/v1"
DEFAULT_MODEL = "gpt-4o"

API_KEY_ENV = "AGENTLOOP_API_KEY"
BASE_URL_ENV = "AGENTLOOP_BASE_URL"
MODEL_ENV = "AGENTLOOP_MODEL"


class ClientConfig(BaseModel):
    """Connection settings for an OpenAI-compatible chat completion API."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    default_model: str = DEFAULT_MODEL
    timeout: float = 120.0
    max_retries: int = 3
    headers: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """Build a config from ``AGENTLOOP_*`` environment variables.

        Explicit keyword overrides win over the environment. Overrides
        set to None are ignored so callers can forward optional arguments
        unconditionally.
        """
        values: dict[str, Any] = {}
        api_key = os.environ.get(API_KEY_ENV)
        if api_key:
            values["api_key"] = api_key
        base_url = os.environ.get(BASE_URL_ENV)
        if base_url:
            values["base_url"] = base_url
        model = os.environ.get(MODEL_ENV)
        if model:
            values["default_model"] = model
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
