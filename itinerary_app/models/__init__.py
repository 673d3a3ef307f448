"""Data models for the itinerary app."""
from .itinerary import (
    TravelItem,
    DayPlan,
    ItemType,
    NEW_ITEM_TITLE,
    CHECKLIST_DAY_ID,
)
from .seed import INITIAL_PLAN

__all__ = [
    "TravelItem",
    "DayPlan",
    "ItemType",
    "NEW_ITEM_TITLE",
    "CHECKLIST_DAY_ID",
    "INITIAL_PLAN",
]
