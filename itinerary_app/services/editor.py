"""
Item Editor - Per-entry view-model.

Holds a draft copy of one entry, tracks whether it is being displayed or
edited, and applies the deletion confirmation policy before asking the
store to remove anything.
"""
import logging
import time
from enum import Enum
from typing import Callable, Optional

from ..config import settings
from ..models.itinerary import TravelItem
from .links import MapProvider, build_map_url
from .store import Days, ItineraryStore

logger = logging.getLogger(__name__)

DELETE_PROMPT = "确定要删除这个行程吗？"

EDITABLE_FIELDS = (
    "time",
    "title",
    "type",
    "description",
    "location_name",
    "address",
    "warning",
    "cost",
    "tips",
)


class EditorMode(str, Enum):
    """Lifecycle of an entry on screen."""
    DISPLAY = "display"
    EDITING = "editing"
    REMOVED = "removed"


def requires_confirmation(item: TravelItem) -> bool:
    """Unedited placeholder entries are deleted without asking."""
    return not item.is_new


def split_tips(text: str) -> list[str]:
    return text.split("\n")


def join_tips(tips: Optional[list[str]]) -> str:
    return "\n".join(tips or [])


class ItemEditor:
    """Edit buffer and state machine for one entry of one day."""

    def __init__(self, store: ItineraryStore, day_id: str, item: TravelItem):
        self.store = store
        self.day_id = day_id
        self.item_id = item.id
        self.committed = item
        self.draft = item
        self.mode = EditorMode.EDITING if item.is_new else EditorMode.DISPLAY
        self._copied_until = 0.0
        self._unsubscribe = store.subscribe(self._on_store_change)

    @property
    def is_editing(self) -> bool:
        return self.mode == EditorMode.EDITING

    @property
    def is_removed(self) -> bool:
        return self.mode == EditorMode.REMOVED

    def _on_store_change(self, days: Days) -> None:
        day = next((d for d in days if d.id == self.day_id), None)
        current = day.find_item(self.item_id) if day else None
        if current is None:
            self._close()
        elif current is not self.committed:
            self.committed = current
            self.draft = current

    def _close(self) -> None:
        self.mode = EditorMode.REMOVED
        self._unsubscribe()

    def begin_edit(self) -> None:
        if self.mode == EditorMode.DISPLAY:
            self.mode = EditorMode.EDITING

    def set_field(self, name: str, value) -> None:
        """Change one draft field. The store is not touched."""
        self.update_draft(**{name: value})

    def update_draft(self, **fields) -> None:
        """
        Change several draft fields at once.

        Raises:
            ValueError: unknown field, or a value the item model rejects
                (e.g. a null title). The draft is left as it was.
        """
        unknown = [name for name in fields if name not in EDITABLE_FIELDS]
        if unknown:
            raise ValueError(f"Field '{unknown[0]}' is not editable")
        if not self.is_editing:
            return
        self.draft = TravelItem.model_validate({**self.draft.model_dump(), **fields})

    @property
    def tips_text(self) -> str:
        """Draft tips as one line per tip."""
        return join_tips(self.draft.tips)

    def set_tips_text(self, text: str) -> None:
        self.set_field("tips", split_tips(text))

    def save(self) -> None:
        """Commit the draft to the store and go back to display."""
        if not self.is_editing:
            return
        self.store.update_item(self.day_id, self.draft)
        # The store may already have closed us if the entry vanished meanwhile
        if not self.is_removed:
            self.mode = EditorMode.DISPLAY

    def cancel(self) -> None:
        """Drop the draft and go back to display."""
        if not self.is_editing:
            return
        self.draft = self.committed
        self.mode = EditorMode.DISPLAY

    def delete(self, confirm: Callable[[str], bool]) -> bool:
        """
        Delete the entry, asking confirm(prompt) first unless it is an
        untouched placeholder.

        Returns:
            True if the entry was removed
        """
        if self.is_removed:
            return False
        if requires_confirmation(self.committed) and not confirm(DELETE_PROMPT):
            return False
        self.store.delete_item(self.day_id, self.item_id)
        if not self.is_removed:
            self._close()
        return True

    def map_query(self) -> str:
        return self.committed.address or self.committed.title

    def map_url(self, provider: MapProvider) -> str:
        return build_map_url(provider, self.map_query())

    def mark_copied(self, now: Optional[float] = None) -> Optional[str]:
        """Return the address to copy and start the acknowledgment window."""
        if not self.committed.address:
            return None
        now = time.monotonic() if now is None else now
        self._copied_until = now + settings.copy_ack_seconds
        return self.committed.address

    def is_copied(self, now: Optional[float] = None) -> bool:
        now = time.monotonic() if now is None else now
        return now < self._copied_until

    def to_state_dict(self) -> dict:
        return {
            "day_id": self.day_id,
            "item_id": self.item_id,
            "mode": self.mode.value,
            "draft": self.draft.to_display_dict(),
            "tips_text": self.tips_text,
            "copied": self.is_copied(),
        }


class EditorRegistry:
    """Live editors keyed by (day id, item id)."""

    def __init__(self, store: ItineraryStore):
        self.store = store
        self._editors: dict[tuple[str, str], ItemEditor] = {}

    def get(self, day_id: str, item_id: str) -> Optional[ItemEditor]:
        """Get the editor for an entry, opening one if the entry exists."""
        key = (day_id, item_id)
        editor = self._editors.get(key)
        if editor is not None and not editor.is_removed:
            return editor
        self._editors.pop(key, None)

        item = self.store.find_item(day_id, item_id)
        if item is None:
            return None
        editor = ItemEditor(self.store, day_id, item)
        self._editors[key] = editor
        return editor
