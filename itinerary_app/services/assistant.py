"""
Travel Assistant - Q&A over the itinerary and notes-to-entries parsing.

Both calls go to the configured LLM once, without retries. Failures are
reported as an AssistantReply carrying the error; ask() and auto_format()
turn that into the fixed fallback text shown to the user.
"""
import json
import logging
from typing import Optional, Sequence

from pydantic import BaseModel

from ..config import settings
from ..models.itinerary import DayPlan
from .llm_client import LLMClient, get_llm_client, parse_json_response

logger = logging.getLogger(__name__)

FALLBACK_ANSWER = "Unable to contact travel assistant. Please check your connection."
EMPTY_ANSWER = "Sorry, I couldn't generate a response."
EMPTY_ENTRIES = "[]"

ASSISTANT_SYSTEM_PROMPT = """You are a helpful travel assistant for a trip to {destination}.
Provide a concise, helpful answer. If suggesting locations, include addresses if known.
Keep the tone friendly and practical."""

FORMAT_SCHEMA = "{ time: string, title: string, type: 'activity'|'food'|'transport', address: string, description: string }"


class AssistantReply(BaseModel):
    """Either generated text or the reason the call failed."""
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def serialize_itinerary(days: Sequence[DayPlan]) -> str:
    """Itinerary as compact JSON with the front end's field names."""
    return json.dumps(
        [day.model_dump(mode="json", by_alias=True, exclude_none=True) for day in days],
        ensure_ascii=False,
    )


def parse_entries(text: str) -> list[dict]:
    """
    Best-effort parse of an auto_format() reply.

    Accepts a bare array, a fenced block, or an object wrapping the array.
    Anything unreadable yields an empty list.
    """
    data = parse_json_response(text or "")
    if isinstance(data, dict):
        data = next((value for value in data.values() if isinstance(value, list)), [data])
    if not isinstance(data, list):
        return []
    return [entry for entry in data if isinstance(entry, dict)]


class TravelAssistant:
    """Thin wrapper around the LLM for the two assistant features."""

    def __init__(self, llm: Optional[LLMClient] = None):
        self.llm = llm or get_llm_client()

    async def query(self, prompt: str, days: Sequence[DayPlan]) -> AssistantReply:
        """Ask a free-text question with the itinerary as context."""
        messages = [
            {"role": "system", "content": ASSISTANT_SYSTEM_PROMPT.format(destination=settings.trip_destination)},
            {"role": "user", "content": f"Here is the user's current itinerary JSON: {serialize_itinerary(days)}\n\nUser Question: {prompt}"}
        ]
        try:
            text = await self.llm.chat(messages)
        except Exception as e:
            logger.error(f"Travel assistant error: {e}")
            return AssistantReply(error=str(e) or type(e).__name__)
        return AssistantReply(text=text)

    async def ask(self, prompt: str, days: Sequence[DayPlan]) -> str:
        reply = await self.query(prompt, days)
        if not reply.ok:
            return FALLBACK_ANSWER
        return reply.text or EMPTY_ANSWER

    async def request_format(self, raw_text: str) -> AssistantReply:
        """Ask for the notes as a JSON array of partial entries."""
        messages = [
            {"role": "user", "content": (
                "Parse the following unstructured travel notes into a JSON array of objects "
                f"fitting this schema: {FORMAT_SCHEMA}. Raw text: {raw_text}. Return ONLY JSON."
            )}
        ]
        try:
            text = await self.llm.chat(messages, json_mode=True)
        except Exception as e:
            logger.error(f"Auto-format error: {e}")
            return AssistantReply(error=str(e) or type(e).__name__)
        return AssistantReply(text=text)

    async def auto_format(self, raw_text: str) -> str:
        reply = await self.request_format(raw_text)
        if not reply.ok:
            return EMPTY_ENTRIES
        return reply.text or EMPTY_ENTRIES


# Global assistant instance
assistant: Optional[TravelAssistant] = None


def get_assistant() -> TravelAssistant:
    """Get or create the global travel assistant."""
    global assistant
    if assistant is None:
        assistant = TravelAssistant()
    return assistant
