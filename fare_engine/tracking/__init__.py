from .models import TrackedDistance, TrackingFlag, TripFix
from .reducer import GPSDistanceReducer, trip_duration_minutes

__all__ = [
    "GPSDistanceReducer",
    "TrackedDistance",
    "TrackingFlag",
    "TripFix",
    "trip_duration_minutes",
]
