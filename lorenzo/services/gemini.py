"""
Gemini service: wraps Google Generative AI chat calls.

Model: GEMINI_MODEL (default: gemini-pro)

Every call replays the full transcript through `start_chat(history=...)` and
sends the composed message. Generation and safety settings are fixed. There
is no retry or fallback: any failure (missing key, quota, network, blocked or
empty response, timeout) is raised as UpstreamFailure.
"""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Awaitable, Callable

import google.generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from lorenzo.config import settings
from lorenzo.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

# (history, message) -> reply text
CompletionFn = Callable[[list[dict], str], Awaitable[str]]

GENERATION_CONFIG = genai.GenerationConfig(
    temperature=0.9,
    top_k=1,
    top_p=1,
    max_output_tokens=1000,
)

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


@lru_cache(maxsize=1)
def _get_model() -> genai.GenerativeModel:
    """Configure the client once and build the model handle."""
    if not settings.api_key:
        raise UpstreamFailure("API_KEY is not configured")
    genai.configure(api_key=settings.api_key)
    return genai.GenerativeModel(
        settings.gemini_model,
        generation_config=GENERATION_CONFIG,
        safety_settings=SAFETY_SETTINGS,
    )


def _send(history: list[dict], message: str) -> str:
    chat = _get_model().start_chat(history=history)
    response = chat.send_message(message)
    return response.text


async def complete_chat(history: list[dict], message: str) -> str:
    """
    Send `message` with `history` as prior context and return the reply text.

    The SDK call is blocking, so it runs in a worker thread bounded by
    UPSTREAM_TIMEOUT_SECONDS.
    """
    logger.debug(
        "Gemini request (%s): %d history turns, %d chars",
        settings.gemini_model,
        len(history),
        len(message),
    )
    try:
        text = await asyncio.wait_for(
            asyncio.to_thread(_send, history, message),
            timeout=settings.upstream_timeout_seconds,
        )
    except UpstreamFailure:
        raise
    except asyncio.TimeoutError as exc:
        logger.error(
            "Gemini call timed out after %.0f s", settings.upstream_timeout_seconds
        )
        raise UpstreamFailure("Gemini call timed out") from exc
    except Exception as exc:
        logger.error("Gemini call failed: %s", exc)
        raise UpstreamFailure(f"Gemini call failed: {exc}") from exc

    logger.debug("Gemini response:\n%s", text)
    return text


def get_completion() -> CompletionFn:
    """FastAPI dependency: the completion function used by /chat."""
    return complete_chat
