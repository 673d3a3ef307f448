"""
Itinerary Store - Single source of truth for the day plans.

The collection is an immutable tuple of DayPlan snapshots. Every change is
produced by a pure reducer and swapped in as a new value, so subscribers can
detect changes by identity alone. Reducers return the input collection object
untouched when the target day or item does not exist.
"""
import logging
import time
import uuid
from typing import Callable, Iterable, Optional

from ..models.itinerary import (
    DayPlan,
    TravelItem,
    ItemType,
    NEW_ITEM_TITLE,
    NEW_ITEM_TIME,
    NEW_ITEM_DESCRIPTION,
)
from ..models.seed import INITIAL_PLAN

logger = logging.getLogger(__name__)

Days = tuple[DayPlan, ...]
Subscriber = Callable[[Days], None]


def all_item_ids(days: Days) -> set[str]:
    """Every item id across every day."""
    return {item.id for day in days for item in day.items}


def generate_item_id(day_id: str, existing_ids: Iterable[str] = ()) -> str:
    """Build '<day>-<epoch ms>-<random>' and retry until it is unused."""
    taken = set(existing_ids)
    while True:
        candidate = f"{day_id}-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
        if candidate not in taken:
            return candidate


def new_item(day_id: str, existing_ids: Iterable[str] = ()) -> TravelItem:
    """Placeholder entry appended by the add operation."""
    return TravelItem(
        id=generate_item_id(day_id, existing_ids),
        time=NEW_ITEM_TIME,
        title=NEW_ITEM_TITLE,
        type=ItemType.ACTIVITY,
        description=NEW_ITEM_DESCRIPTION,
        tips=[],
    )


def _replace_day(days: Days, day_id: str, transform: Callable[[DayPlan], DayPlan]) -> Days:
    """Apply transform to the matching day; keep identity if nothing changed."""
    changed = False
    result = []
    for day in days:
        if day.id == day_id:
            updated = transform(day)
            if updated is not day:
                changed = True
            result.append(updated)
        else:
            result.append(day)
    return tuple(result) if changed else days


def update_item(days: Days, day_id: str, updated_item: TravelItem) -> Days:
    """Replace the item with updated_item.id inside the given day."""
    def transform(day: DayPlan) -> DayPlan:
        if day.find_item(updated_item.id) is None:
            return day
        items = [updated_item if item.id == updated_item.id else item for item in day.items]
        return day.model_copy(update={"items": items})

    return _replace_day(days, day_id, transform)


def add_item(days: Days, day_id: str, item: TravelItem) -> Days:
    """Append item to the end of the given day."""
    def transform(day: DayPlan) -> DayPlan:
        return day.model_copy(update={"items": [*day.items, item]})

    return _replace_day(days, day_id, transform)


def delete_item(days: Days, day_id: str, item_id: str) -> Days:
    """Remove the item with item_id from the given day."""
    def transform(day: DayPlan) -> DayPlan:
        if day.find_item(item_id) is None:
            return day
        return day.model_copy(update={"items": [item for item in day.items if item.id != item_id]})

    return _replace_day(days, day_id, transform)


class ItineraryStore:
    """Owns the current itinerary value and notifies subscribers on change."""

    def __init__(self, days: Optional[Iterable[DayPlan]] = None):
        self._days: Days = tuple(INITIAL_PLAN if days is None else days)
        self._subscribers: list[Subscriber] = []
        self.version = 0

    @property
    def days(self) -> Days:
        return self._days

    def get_day(self, day_id: str) -> Optional[DayPlan]:
        return next((day for day in self._days if day.id == day_id), None)

    def find_item(self, day_id: str, item_id: str) -> Optional[TravelItem]:
        day = self.get_day(day_id)
        return day.find_item(item_id) if day else None

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a change listener. Returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _commit(self, new_days: Days) -> bool:
        if new_days is self._days:
            return False
        self._days = new_days
        self.version += 1
        for callback in list(self._subscribers):
            callback(new_days)
        return True

    def update_item(self, day_id: str, updated_item: TravelItem) -> bool:
        """Replace an item. Returns False when the day or item is unknown."""
        changed = self._commit(update_item(self._days, day_id, updated_item))
        if not changed:
            logger.debug(f"update ignored: {day_id}/{updated_item.id} not found")
        return changed

    def add_item(self, day_id: str) -> Optional[TravelItem]:
        """Append a placeholder item. Returns it, or None for an unknown day."""
        item = new_item(day_id, all_item_ids(self._days))
        if not self._commit(add_item(self._days, day_id, item)):
            logger.debug(f"add ignored: day {day_id} not found")
            return None
        logger.info(f"Added item {item.id} to {day_id}")
        return item

    def delete_item(self, day_id: str, item_id: str) -> bool:
        """Remove an item. Returns False when the day or item is unknown."""
        changed = self._commit(delete_item(self._days, day_id, item_id))
        if changed:
            logger.info(f"Deleted item {item_id} from {day_id}")
        else:
            logger.debug(f"delete ignored: {day_id}/{item_id} not found")
        return changed


# Global store instance
store: Optional[ItineraryStore] = None


def get_store() -> ItineraryStore:
    """Get or create the global itinerary store."""
    global store
    if store is None:
        store = ItineraryStore()
    return store


def reset_store(days: Optional[Iterable[DayPlan]] = None) -> ItineraryStore:
    """Replace the global store with a freshly seeded one."""
    global store
    store = ItineraryStore(days)
    return store
