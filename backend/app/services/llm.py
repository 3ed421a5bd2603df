"""
LLM client.

Thin wrapper around Google Gemini: send a list of role-tagged chat messages,
get back the model's JSON reply as a Python object. Every failure mode
(missing key, transport error, malformed JSON) surfaces as LLMServiceError so
callers can decide whether to fall back to defaults.
"""

import json
from typing import Any

import google.generativeai as genai

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger("llm", "AI")


class LLMServiceError(Exception):
    """Raised when the LLM provider cannot produce a usable reply."""


def configure_gemini() -> bool:
    """
    Configure the Gemini API with the API key.

    Returns True if configured successfully, False otherwise.
    """
    if not settings.GEMINI_API_KEY:
        logger.warning("GEMINI_API_KEY not set - AI features will return defaults")
        return False

    genai.configure(api_key=settings.GEMINI_API_KEY)
    return True


def _to_gemini_contents(messages: list[dict]) -> tuple[str, list[dict]]:
    """Split chat messages into a system instruction and Gemini content turns."""
    system_parts: list[str] = []
    contents: list[dict] = []

    for message in messages:
        role = message.get("role")
        content = message.get("content", "")
        if role == "system":
            system_parts.append(content)
        elif role == "assistant":
            contents.append({"role": "model", "parts": [content]})
        else:
            contents.append({"role": "user", "parts": [content]})

    return "\n\n".join(system_parts), contents


def call_llm(messages: list[dict], expect_json: bool = True) -> Any:
    """
    Send chat messages to the configured model.

    Args:
        messages: [{"role": "system" | "user" | "assistant", "content": str}, ...]
        expect_json: Ask for a JSON object and decode it; otherwise return raw text

    Returns:
        The decoded JSON value, or the stripped reply text

    Raises:
        LLMServiceError: if the provider is unavailable or the reply is unusable
    """
    if not configure_gemini():
        raise LLMServiceError("LLM provider is not configured")

    system_instruction, contents = _to_gemini_contents(messages)
    generation_config = {"response_mime_type": "application/json"} if expect_json else None

    try:
        model = genai.GenerativeModel(
            settings.LLM_MODEL,
            system_instruction=system_instruction or None,
            generation_config=generation_config,
        )
        logger.info(f"Sending {len(contents)} message(s) to {settings.LLM_MODEL}")
        response = model.generate_content(
            contents,
            request_options={"timeout": settings.LLM_TIMEOUT_SECONDS},
        )
        response_text = response.text.strip()
    except Exception as e:
        logger.error(f"LLM request failed: {e}")
        raise LLMServiceError(str(e)) from e

    if not expect_json:
        return response_text

    try:
        return json.loads(response_text)
    except json.JSONDecodeError as e:
        logger.error(f"LLM returned invalid JSON: {response_text[:200]}")
        raise LLMServiceError("LLM returned invalid JSON") from e


def clamp_score(value: Any, default: int = 0) -> int:
    """Coerce an LLM-provided score into the 0-100 range."""
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return default
    return max(0, min(100, score))


def as_text(value: Any, default: str = "") -> str:
    """Coerce an LLM-provided field into a string for text columns and responses."""
    if value is None or value == "":
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def as_text_list(value: Any) -> list[str]:
    """Coerce an LLM-provided list into a list of non-empty strings."""
    if not isinstance(value, list):
        return []
    return [text for text in (as_text(item) for item in value) if text]
