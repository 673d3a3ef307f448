"""Travel itinerary viewer/editor service."""
