"""Travel itinerary reconciliation: flights, hotels and activity pricing."""

__version__ = "0.1.0"
