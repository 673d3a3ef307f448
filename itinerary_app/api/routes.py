"""
API Routes for the itinerary app.
"""
from fastapi import APIRouter, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel
from typing import Optional

from ..config import settings
from ..models.itinerary import DayPlan, TravelItem, ItemType
from ..services.assistant import get_assistant, parse_entries
from ..services.editor import (
    DELETE_PROMPT,
    EditorRegistry,
    ItemEditor,
    requires_confirmation,
    split_tips,
)
from ..services.links import MapProvider, build_map_url, map_links
from ..services.store import ItineraryStore, get_store


router = APIRouter(prefix="/api", tags=["itinerary"])


# Request/Response Models
class DraftUpdate(BaseModel):
    time: Optional[str] = None
    title: Optional[str] = None
    type: Optional[ItemType] = None
    description: Optional[str] = None
    location_name: Optional[str] = None
    address: Optional[str] = None
    warning: Optional[str] = None
    cost: Optional[str] = None
    tips_text: Optional[str] = None


class AskRequest(BaseModel):
    prompt: str


class AskResponse(BaseModel):
    answer: str


class FormatRequest(BaseModel):
    raw_text: str


class FormatResponse(BaseModel):
    raw: str
    entries: list[dict]


# Editors follow the store they were opened against
_registry: Optional[EditorRegistry] = None


def get_registry() -> EditorRegistry:
    global _registry
    store = get_store()
    if _registry is None or _registry.store is not store:
        _registry = EditorRegistry(store)
    return _registry


def _require_day(store: ItineraryStore, day_id: str) -> DayPlan:
    day = store.get_day(day_id)
    if day is None:
        raise HTTPException(status_code=404, detail="Day not found")
    return day


def _require_item(store: ItineraryStore, day_id: str, item_id: str) -> TravelItem:
    item = _require_day(store, day_id).find_item(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item


def _require_editor(day_id: str, item_id: str) -> ItemEditor:
    editor = get_registry().get(day_id, item_id)
    if editor is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return editor


# Endpoints

@router.get("/trip")
async def get_trip():
    """Trip header plus every day."""
    days = get_store().days
    return {
        "title": settings.trip_title,
        "dates": settings.trip_dates,
        "destination": settings.trip_destination,
        "total_days": sum(1 for day in days if not day.is_checklist),
        "days": [day.to_display_dict() for day in days],
    }


@router.get("/days")
async def list_days():
    return {"days": [day.to_display_dict() for day in get_store().days]}


@router.get("/days/{day_id}")
async def get_day(day_id: str):
    return _require_day(get_store(), day_id).to_display_dict()


@router.post("/days/{day_id}/items", status_code=201)
async def add_item(day_id: str):
    """Append a placeholder entry; its editor starts in editing mode."""
    store = get_store()
    _require_day(store, day_id)
    item = store.add_item(day_id)
    editor = get_registry().get(day_id, item.id)
    return {"item": item.to_display_dict(), "editor": editor.to_state_dict()}


@router.put("/days/{day_id}/items/{item_id}")
async def update_item(day_id: str, item_id: str, item: TravelItem):
    """Replace an entry wholesale."""
    if item.id != item_id:
        raise HTTPException(status_code=400, detail="Item id does not match the path")
    store = get_store()
    _require_item(store, day_id, item_id)
    store.update_item(day_id, item)
    return {"item": store.find_item(day_id, item_id).to_display_dict()}


@router.delete("/days/{day_id}/items/{item_id}")
async def delete_item(day_id: str, item_id: str, confirmed: bool = False):
    """Delete an entry. Edited entries need confirmed=true."""
    store = get_store()
    item = _require_item(store, day_id, item_id)
    if requires_confirmation(item) and not confirmed:
        raise HTTPException(
            status_code=409,
            detail={"message": "Confirmation required", "prompt": DELETE_PROMPT}
        )
    store.delete_item(day_id, item_id)
    return {"deleted": item_id}


@router.get("/days/{day_id}/items/{item_id}/links")
async def get_links(day_id: str, item_id: str):
    """Copy text and map deep links for an entry."""
    item = _require_item(get_store(), day_id, item_id)
    return {
        "copy_text": item.address,
        "links": map_links(item.address or item.title),
    }


@router.get("/days/{day_id}/items/{item_id}/navigate/{provider}")
async def navigate(day_id: str, item_id: str, provider: MapProvider):
    """Redirect to the chosen map app."""
    item = _require_item(get_store(), day_id, item_id)
    return RedirectResponse(build_map_url(provider, item.address or item.title))


@router.get("/editor/{day_id}/{item_id}")
@router.post("/editor/{day_id}/{item_id}")
async def open_editor(day_id: str, item_id: str):
    return _require_editor(day_id, item_id).to_state_dict()


@router.post("/editor/{day_id}/{item_id}/edit")
async def begin_edit(day_id: str, item_id: str):
    editor = _require_editor(day_id, item_id)
    editor.begin_edit()
    return editor.to_state_dict()


@router.patch("/editor/{day_id}/{item_id}/draft")
async def update_draft(day_id: str, item_id: str, request: DraftUpdate):
    """Stage field changes on the draft only."""
    editor = _require_editor(day_id, item_id)
    if not editor.is_editing:
        raise HTTPException(status_code=400, detail="Item is not being edited")
    changes = request.model_dump(exclude_unset=True)
    tips_text = changes.pop("tips_text", None)
    if tips_text is not None:
        changes["tips"] = split_tips(tips_text)
    try:
        editor.update_draft(**changes)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid draft: {e}")
    return editor.to_state_dict()


@router.post("/editor/{day_id}/{item_id}/save")
async def save_draft(day_id: str, item_id: str):
    editor = _require_editor(day_id, item_id)
    editor.save()
    return editor.to_state_dict()


@router.post("/editor/{day_id}/{item_id}/cancel")
async def cancel_draft(day_id: str, item_id: str):
    editor = _require_editor(day_id, item_id)
    editor.cancel()
    return editor.to_state_dict()


@router.post("/editor/{day_id}/{item_id}/copy")
async def copy_address(day_id: str, item_id: str):
    """Return the address for the clipboard and flag the acknowledgment."""
    editor = _require_editor(day_id, item_id)
    text = editor.mark_copied()
    if text is None:
        raise HTTPException(status_code=400, detail="Item has no address")
    return {"text": text, "copied": True, "ack_seconds": settings.copy_ack_seconds}


@router.post("/assistant/ask", response_model=AskResponse)
async def ask_assistant(request: AskRequest):
    """Free-text question about the current itinerary."""
    answer = await get_assistant().ask(request.prompt, get_store().days)
    return AskResponse(answer=answer)


@router.post("/assistant/format", response_model=FormatResponse)
async def format_notes(request: FormatRequest):
    """Turn unstructured notes into candidate entries."""
    raw = await get_assistant().auto_format(request.raw_text)
    return FormatResponse(raw=raw, entries=parse_entries(raw))
