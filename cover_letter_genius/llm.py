"""Single-shot calls to the Gemini ``generateContent`` REST endpoint."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

import httpx

from .config import Settings, load_settings
from .errors import MalformedResponseError, UpstreamError

logger = logging.getLogger(__name__)

_OPEN_FENCE = re.compile(r"^```(?:json)?\s*")
_CLOSE_FENCE = re.compile(r"\s*```$")


def strip_json_fence(text: str) -> str:
    """Remove a ```json ... ``` wrapper if the model added one."""
    text = text.strip()
    text = _OPEN_FENCE.sub("", text, count=1)
    return _CLOSE_FENCE.sub("", text, count=1)


def _first_text_part(data: Any) -> str:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        text = None
    if not isinstance(text, str) or not text:
        raise MalformedResponseError("Invalid response structure from AI API.")
    return text


def call_model(
    prompt: str,
    api_key: str,
    model_name: str,
    *,
    settings: Optional[Settings] = None,
) -> Any:
    """Send ``prompt`` as a single-turn request and return the parsed JSON answer.

    No retries. A JSON syntax error in the model's text is not wrapped: the
    ``json.JSONDecodeError`` reaches the caller as-is.
    """
    settings = settings or load_settings()
    url = f"{settings.gemini_base_url}/models/{model_name}:generateContent"
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    headers = {"Content-Type": "application/json", "x-goog-api-key": api_key}

    logger.debug("LLM call: model=%s, prompt_len=%d", model_name, len(prompt))
    with httpx.Client(timeout=settings.gemini_timeout) as client:
        response = client.post(url, json=payload, headers=headers)

    if not response.is_success:
        logger.error("AI API Error: %s %s", response.status_code, response.text)
        raise UpstreamError(response.status_code, response.text)

    try:
        data = response.json()
    except ValueError:
        raise MalformedResponseError("Invalid response structure from AI API.")

    return json.loads(strip_json_fence(_first_text_part(data)))
