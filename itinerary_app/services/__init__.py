"""Services for the itinerary app."""
from .llm_client import LLMClient
from .store import ItineraryStore, get_store
from .editor import ItemEditor, EditorRegistry, EditorMode
from .assistant import TravelAssistant, get_assistant

__all__ = [
    "LLMClient",
    "ItineraryStore",
    "get_store",
    "ItemEditor",
    "EditorRegistry",
    "EditorMode",
    "TravelAssistant",
    "get_assistant",
]
