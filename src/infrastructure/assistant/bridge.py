"""Assistant bridge to a remote chat-completion endpoint.

Takes a transcript (oldest first, ending with the newest user message) and
returns exactly one reply string. It never raises: a missing credential
yields the simulated reply after a short delay, and every failure of the
remote call collapses into ``APOLOGY_REPLY``.
"""

import asyncio
from typing import Any, Optional, Sequence

import httpx
import structlog

from core.config import is_usable_ai_key, settings
from domain.entities.chat import ChatMessage

logger = structlog.get_logger()

SIMULATED_REPLY = (
    "I'm a simulated AI assistant. To get real responses, please configure the "
    "AI_API_KEY in your .env file with a valid OpenAI or Gemini API key. For now, "
    "I can tell you that I think your question is interesting!"
)

APOLOGY_REPLY = (
    "Sorry, I'm having trouble connecting to my brain right now. "
    "Please try again later."
)


class AssistantResponseError(Exception):
    """The completion endpoint answered with an error or an unusable body."""


def _extract_reply(data: Any) -> str:
    if not isinstance(data, dict):
        raise AssistantResponseError("Response body is not a JSON object")

    error = data.get("error")
    if error:
        message = error.get("message") if isinstance(error, dict) else str(error)
        raise AssistantResponseError(message or "Unknown error")

    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as exc:
        raise AssistantResponseError("Response has no completion choice") from exc

    if not isinstance(content, str):
        raise AssistantResponseError("Completion content is not text")
    return content


class AssistantBridge:
    """Stateless pass-through to the completion API."""

    def __init__(
        self,
        api_key: str = settings.ai_api_key,
        api_url: str = settings.assistant_api_url,
        model: str = settings.assistant_model,
        fallback_delay: float = settings.assistant_fallback_delay,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._enabled = is_usable_ai_key(api_key)
        self._api_url = api_url
        self._model = model
        self._fallback_delay = fallback_delay
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return self._enabled

    async def reply(self, transcript: Sequence[ChatMessage]) -> str:
        """Return one assistant reply for the given transcript."""
        if not self._enabled:
            await asyncio.sleep(self._fallback_delay)
            return SIMULATED_REPLY

        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(
                    self._api_url,
                    headers={"Authorization": f"Bearer {self._api_key}"},
                    json={
                        "model": self._model,
                        "messages": [message.to_dict() for message in transcript],
                    },
                )
            return _extract_reply(response.json())
        except (httpx.HTTPError, ValueError, AssistantResponseError) as exc:
            logger.error(
                "assistant_request_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                transcript_length=len(transcript),
            )
            return APOLOGY_REPLY
