"""Repository layer for database CRUD operations."""

from .completion_repository import TripCompletionRepository
from .location_repository import LocationHistoryRepository
from .trip_repository import TripRepository

__all__ = ["LocationHistoryRepository", "TripCompletionRepository", "TripRepository"]
