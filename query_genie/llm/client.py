"""OpenAI-compatible chat-completion client."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..core.config import get_cached_settings
from ..core.exceptions import TransportError, UpstreamError

logger = logging.getLogger(__name__)

UPSTREAM_FALLBACK_MESSAGE = "OpenAI API error"

__all__ = ["UPSTREAM_FALLBACK_MESSAGE", "call_chat_completion"]


def _upstream_error(data: dict[str, Any]) -> UpstreamError | None:
    error = data.get("error")
    if not error:
        return None
    if isinstance(error, dict):
        return UpstreamError(error.get("message") or UPSTREAM_FALLBACK_MESSAGE, error.get("code"))
    return UpstreamError(str(error))


def call_chat_completion(
    messages: list[dict[str, str]],
    api_key: str,
    model: str | None = None,
) -> str:
    """Send a single chat-completion request and return the generated text.

    There is exactly one attempt; failures raise TransportError (network,
    unreadable response) or UpstreamError (service returned an error payload).

    Args:
        messages: Ordered role/content messages
        api_key: Bearer credential for the endpoint
        model: Model to use (defaults to settings.openai_model)
    """
    settings = get_cached_settings()
    effective_model = model or settings.openai_model
    payload = {"model": effective_model, "messages": messages}

    logger.debug(f"Calling chat completions with model={effective_model}, messages={len(messages)}")

    try:
        response = httpx.post(
            settings.chat_completions_url,
            json=payload,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=settings.request_timeout,
        )
    except httpx.TimeoutException as e:
        logger.error(f"Chat completion timed out after {settings.request_timeout}s")
        raise TransportError(f"LLM request timed out after {settings.request_timeout}s") from e
    except httpx.HTTPError as e:
        logger.error(f"Chat completion transport error: {e}")
        raise TransportError(str(e) or "Failed to reach the LLM service") from e

    try:
        data = response.json()
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse response as JSON: {response.text[:200]}")
        if response.is_error:
            raise TransportError(f"LLM request failed with status {response.status_code}") from e
        raise TransportError("LLM returned invalid JSON") from e

    if isinstance(data, dict):
        upstream = _upstream_error(data)
        if upstream is not None:
            logger.error(f"Upstream error ({response.status_code}): {upstream}")
            raise upstream

    if response.is_error:
        logger.error(f"HTTP error: {response.status_code} - {response.text[:200]}")
        raise TransportError(f"LLM request failed with status {response.status_code}")

    if not isinstance(data, dict):
        logger.error(f"Unexpected response type: {type(data)}")
        raise TransportError("LLM response is not a dictionary")

    choices = data.get("choices")
    if not choices or not isinstance(choices, list):
        logger.error(f"Missing or invalid 'choices' in response: {data}")
        raise TransportError("LLM response missing 'choices' array")

    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    if not message or not isinstance(message, dict):
        logger.error(f"Missing or invalid 'message' in choice: {choices[0]}")
        raise TransportError("LLM response missing message content")

    content = message.get("content")
    if content is None:
        content = ""
    if not isinstance(content, str):
        logger.error(f"Unexpected content type in message: {type(content)}")
        raise TransportError("LLM response content is not text")
    logger.debug(f"Chat completion response length: {len(content)} chars")

    return content
