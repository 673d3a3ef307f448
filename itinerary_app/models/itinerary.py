"""
Itinerary models - Days and the timeline entries inside them.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


# Title given to freshly added entries; marks an entry the user has not edited yet
NEW_ITEM_TITLE = "新行程"
NEW_ITEM_TIME = "待定"
NEW_ITEM_DESCRIPTION = "点击编辑添加详细信息"

# Id of the pre-trip checklist day
CHECKLIST_DAY_ID = "pre-trip"


class ItemType(str, Enum):
    """Category of a timeline entry. Only affects styling."""
    ACTIVITY = "activity"
    FOOD = "food"
    TRANSPORT = "transport"
    HOTEL = "hotel"
    NOTE = "note"


ITEM_TYPE_ACCENTS = {
    ItemType.FOOD: "orange",
    ItemType.ACTIVITY: "primary",
    ItemType.TRANSPORT: "blue",
    ItemType.HOTEL: "indigo",
    ItemType.NOTE: "stone",
}


class TravelItem(BaseModel):
    """A single entry on a day's timeline."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Unique within the owning day")
    time: str = Field(..., description="Free-text time label, e.g. 'Dinner'")
    title: str = Field(..., description="Display name")
    type: ItemType = Field(default=ItemType.ACTIVITY, description="Entry category")
    description: Optional[str] = None
    location_name: Optional[str] = Field(None, alias="locationName")
    address: Optional[str] = Field(None, description="Used for navigation")
    warning: Optional[str] = Field(None, description="Highlighted conflict, e.g. a closing day")
    cost: Optional[str] = None
    tips: Optional[list[str]] = Field(None, description="One tip per entry, blanks allowed")

    @property
    def is_new(self) -> bool:
        """True while the entry still carries the placeholder title."""
        return self.title == NEW_ITEM_TITLE

    @property
    def accent(self) -> str:
        return ITEM_TYPE_ACCENTS[self.type]

    def visible_tips(self) -> list[str]:
        """Tips with blank lines dropped."""
        return [tip for tip in (self.tips or []) if tip.strip() != ""]

    def to_display_dict(self) -> dict:
        """Convert to display-friendly dictionary."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        data["accent"] = self.accent
        data["visible_tips"] = self.visible_tips()
        data["has_location"] = bool(self.address or self.location_name)
        return data


class DayPlan(BaseModel):
    """One day of the trip, or the pre-trip checklist."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Stable day identifier")
    date: str = Field(..., description="Display label, e.g. '12月21日'")
    weekday: str = Field(..., description="Display label, e.g. '周六'")
    items: list[TravelItem] = Field(
        default_factory=list,
        description="Entries in itinerary order"
    )

    @property
    def is_checklist(self) -> bool:
        return self.id == CHECKLIST_DAY_ID

    def find_item(self, item_id: str) -> Optional[TravelItem]:
        return next((item for item in self.items if item.id == item_id), None)

    def to_display_dict(self) -> dict:
        """Convert to display-friendly dictionary."""
        return {
            "id": self.id,
            "date": self.date,
            "weekday": self.weekday,
            "is_checklist": self.is_checklist,
            "add_label": "添加新待办" if self.is_checklist else "添加新行程",
            "items": [item.to_display_dict() for item in self.items],
        }
