"""
Mock LLM Client - Offline stand-in for the travel assistant.
Answers from the itinerary embedded in the prompt; no network access.
"""
import json
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

_TIME_PREFIX = re.compile(r"^\s*(\d{1,2}[:：]\d{2}|早上|上午|中午|下午|晚上|Morning|Lunch|Afternoon|Dinner|Evening)\s*[-—:：]?\s*", re.IGNORECASE)
_ITINERARY_MARKER = "Here is the user's current itinerary JSON:"

_TYPE_KEYWORDS = {
    "food": ("餐", "吃", "饭", "restaurant", "dinner", "lunch", "breakfast", "cafe"),
    "transport": ("高铁", "地铁", "机场", "车站", "train", "flight", "metro", "taxi"),
}


class MockLLMClient:
    """Deterministic replies shaped like the real assistant's."""

    def __init__(self):
        self.model = "mock-offline"

    async def chat(
        self,
        messages: list[dict],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> str:
        user_msg = next((m["content"] for m in reversed(messages) if m["role"] == "user"), "")

        if json_mode:
            return json.dumps(self._format_notes(user_msg), ensure_ascii=False)
        return self._answer(user_msg)

    def _answer(self, user_msg: str) -> str:
        """Summarize the itinerary found in the prompt."""
        days = self._extract_itinerary(user_msg)
        if not days:
            return "I couldn't find an itinerary to look at yet."

        lines = ["Here is a quick overview of your trip:"]
        for day in days:
            titles = [item.get("title", "") for item in day.get("items", [])]
            label = f"{day.get('date', '')} {day.get('weekday', '')}".strip()
            lines.append(f"- {label}: {', '.join(titles) if titles else 'nothing planned yet'}")
        warnings = [
            item["warning"]
            for day in days
            for item in day.get("items", [])
            if item.get("warning")
        ]
        if warnings:
            lines.append("Watch out: " + " ".join(warnings))
        return "\n".join(lines)

    def _extract_itinerary(self, user_msg: str) -> list:
        if _ITINERARY_MARKER not in user_msg:
            return []
        payload = user_msg.split(_ITINERARY_MARKER, 1)[1].strip().split("\n", 1)[0]
        try:
            data = json.loads(payload)
        except json.JSONDecodeError:
            logger.warning("Mock assistant could not read itinerary context")
            return []
        return data if isinstance(data, list) else []

    def _format_notes(self, user_msg: str) -> list[dict]:
        """One entry per non-empty note line."""
        raw = user_msg.split("Raw text:", 1)[-1]
        raw = raw.rsplit("Return ONLY JSON.", 1)[0]
        entries = []
        for line in raw.splitlines():
            line = line.strip().strip(".")
            if not line:
                continue
            time_label = ""
            match = _TIME_PREFIX.match(line)
            if match:
                time_label = match.group(1)
                line = line[match.end():].strip()
            entries.append({
                "time": time_label,
                "title": line,
                "type": self._guess_type(line),
                "address": "",
                "description": "",
            })
        return entries

    def _guess_type(self, text: str) -> str:
        lowered = text.lower()
        for item_type, keywords in _TYPE_KEYWORDS.items():
            if any(word in lowered for word in keywords):
                return item_type
        return "activity"
