"""
Chat-model backend used by the interview components.

The question generator, answer analyzer and insight synthesizer only talk to
a ChatBackend. The production implementation goes through
core.api.openai_client; tests plug in a stub. When no backend is configured
(no OPENAI_API_KEY) the components use their deterministic fallbacks.
"""

from __future__ import annotations

from typing import Optional, Protocol

from core.api import openai_client
from exceptions.exceptions import ModelBackendError, ModelNotConfiguredError


class ChatBackend(Protocol):
    """
    Abstract backend interface for a single chat completion.

    Implementations MUST raise ModelBackendError for any failure (transport,
    status, empty reply) so that callers can degrade to their fallbacks.
    """

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        model: Optional[str] = None,
    ) -> str:
        ...


class OpenAIChatBackend:
    """ChatBackend implementation using the project-local openai_client.

    Only assembles the message list; prompt content and reply parsing
    belong to the callers.
    """

    def __init__(self, default_model: Optional[str] = None) -> None:
        self.default_model = default_model or openai_client.DEFAULT_MODEL

    def complete(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        temperature: float,
        max_tokens: Optional[int] = None,
        json_mode: bool = False,
        model: Optional[str] = None,
    ) -> str:
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            return openai_client.send_chat_request(
                messages,
                temperature=temperature,
                max_tokens=max_tokens,
                json_mode=json_mode,
                model=model or self.default_model,
            )
        except ModelNotConfiguredError as exc:
            raise ModelBackendError(exc.details, cause=exc) from exc
