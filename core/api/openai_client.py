"""
core.api.openai_client

Thin wrapper around the OpenAI Chat Completions API for the interviewer.

Used by:
  - core/interview/model_backend.py (OpenAIChatBackend)

The client is created lazily so that the server, the CLI and the tests can
run without OPENAI_API_KEY; in that case AI features are simply disabled.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from openai import OpenAI, OpenAIError

from configs.settings import settings
from exceptions.exceptions import ModelBackendError, ModelNotConfiguredError


# -------------------------------------------------------------------
# Client + config
# -------------------------------------------------------------------

_client: Optional[OpenAI] = None

# Default model (customizable via INTERVIEWER_OPENAI_MODEL)
DEFAULT_MODEL = settings.openai_model


def get_client() -> OpenAI:
    """Return the shared OpenAI client, creating it on first use."""
    global _client
    if _client is None:
        if not settings.has_openai_api_key:
            raise ModelNotConfiguredError()
        _client = OpenAI(
            api_key=settings.openai_api_key,
            base_url=settings.openai_base_url,
        )
    return _client


# -------------------------------------------------------------------
# Internal helpers
# -------------------------------------------------------------------


def extract_json_from_text(text: str) -> str:
    """
    Normalize model text output into a raw JSON string.

    Handles common patterns like Markdown ```json fenced blocks and
    extra prose around the JSON object by extracting the first JSON-like
    block from the text.
    """
    text = (text or "").strip()

    # Strip Markdown code fences if present.
    if text.startswith("```"):
        lines = text.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].startswith("```"):
            lines = lines[:-1]
        text = "\n".join(lines).strip()

    # Best-effort extraction of the first {...} block.
    if "{" in text and "}" in text:
        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end != -1 and end > start:
            return text[start : end + 1].strip()

    return text


# -------------------------------------------------------------------
# Public function
# -------------------------------------------------------------------


def send_chat_request(
    messages: List[Dict[str, str]],
    *,
    temperature: float,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
    model: Optional[str] = None,
) -> str:
    """
    Send a chat conversation to the OpenAI API and return the reply text.

    Parameters
    ----------
    messages : list of dict
        Chat messages, e.g. a system message followed by a user message.
    temperature : float
        Sampling temperature for this call.
    max_tokens : int, optional
        Output length cap; omitted from the request when None.
    json_mode : bool
        Ask for a JSON object reply (``response_format=json_object``).
    model : str, optional
        Override the default model name.

    Returns
    -------
    str
        The stripped text of the first choice.

    Raises
    ------
    ModelNotConfiguredError
        If OPENAI_API_KEY is not set.
    ModelBackendError
        If the API call fails or the response is empty.
    """
    client = get_client()

    request: Dict[str, object] = {
        "model": model or DEFAULT_MODEL,
        "messages": messages,
        "temperature": temperature,
    }
    if max_tokens is not None:
        request["max_tokens"] = max_tokens
    if json_mode:
        request["response_format"] = {"type": "json_object"}

    try:
        completion = client.chat.completions.create(**request)
    except OpenAIError as e:
        raise ModelBackendError(str(e), cause=e) from e

    if not completion.choices:
        raise ModelBackendError("Empty response from OpenAI API.")

    text = (completion.choices[0].message.content or "").strip()
    if not text:
        raise ModelBackendError("OpenAI API returned an empty message.")
    return text
