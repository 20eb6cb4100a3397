"""GPS distance reducer.

Turns an ordered sequence of fixes into a single tracked distance. Each
consecutive segment passes through a tiered jump filter instead of one hard
cutoff, because the location source throttles sampling under load and a
single 200m cutoff discards legitimate highway and throttled segments.
"""

import logging
from collections.abc import Sequence

from fare_engine.core.exceptions import InsufficientGPSDataError
from fare_engine.geo.distance import Coordinate, haversine_distance_km, straight_line_km
from fare_engine.settings import TrackingSettings

from .models import TrackedDistance, TrackingFlag, TripFix

logger = logging.getLogger(__name__)


def trip_duration_minutes(fixes: Sequence[TripFix]) -> int:
    """Minutes between first and last fix, never less than one."""
    if len(fixes) < 2:
        return 1
    elapsed = (fixes[-1].recorded_at - fixes[0].recorded_at).total_seconds()
    return max(1, round(elapsed / 60))


class GPSDistanceReducer:
    """Reduces a trip's fixes to a tracked distance.

    Stateless: the same fixes always produce the same result.
    """

    def __init__(self, settings: TrackingSettings | None = None) -> None:
        self.settings = settings or TrackingSettings()

    def reduce(
        self,
        fixes: Sequence[TripFix],
        start: Coordinate | None = None,
        end: Coordinate | None = None,
        trip_id: str | None = None,
    ) -> TrackedDistance:
        """Compute tracked distance for one trip.

        Args:
            fixes: Fixes ordered by recorded_at
            start: Trip start coordinate (pickup), used for the stationary
                check and tracking validation
            end: Trip end coordinate (drop-off)
            trip_id: Only used for error details

        Raises:
            InsufficientGPSDataError: fewer than two fixes and the trip was
                not stationary
        """
        if len(fixes) < 2:
            if self._is_stationary(start, end):
                logger.info(
                    f"Stationary trip with {len(fixes)} fix(es); "
                    f"billing minimum {self.settings.stationary_distance_km}km"
                )
                return TrackedDistance(
                    distance_km=self.settings.stationary_distance_km,
                    fixes_used=len(fixes),
                    duration_minutes=self.settings.stationary_duration_minutes,
                    stationary=True,
                    straight_line_km=straight_line_km(start, end),  # type: ignore[arg-type]
                )
            raise InsufficientGPSDataError(len(fixes), trip_id=trip_id)

        total_km = 0.0
        used: set[int] = set()
        discarded = 0

        for i in range(1, len(fixes)):
            prev = fixes[i - 1]
            curr = fixes[i]
            segment_km = haversine_distance_km(
                prev.latitude, prev.longitude, curr.latitude, curr.longitude
            )
            elapsed_s = (curr.recorded_at - prev.recorded_at).total_seconds()

            if self._keep_segment(segment_km, elapsed_s):
                total_km += segment_km
                used.update((i - 1, i))
            else:
                discarded += 1
                logger.debug(
                    f"Discarded GPS jump of {segment_km:.3f}km over {elapsed_s:.0f}s "
                    f"at fix {i}"
                )

        if discarded:
            logger.info(f"Discarded {discarded} of {len(fixes) - 1} segments as GPS jumps")

        reference_start = start or fixes[0].coordinate
        reference_end = end or fixes[-1].coordinate
        straight_km = straight_line_km(reference_start, reference_end)
        flags = self._validate(total_km, straight_km)

        return TrackedDistance(
            distance_km=total_km,
            fixes_used=len(used),
            duration_minutes=trip_duration_minutes(fixes),
            straight_line_km=straight_km,
            flags=flags,
        )

    def _keep_segment(self, segment_km: float, elapsed_s: float) -> bool:
        s = self.settings
        if segment_km < s.normal_segment_km:
            return True

        speed_kmh = segment_km / (elapsed_s / 3600) if elapsed_s > 0 else float("inf")

        if segment_km < s.highway_segment_km and speed_kmh < s.highway_max_speed_kmh:
            return True
        if (
            segment_km < s.throttled_segment_km
            and elapsed_s > s.throttled_min_gap_seconds
            and speed_kmh < s.throttled_max_speed_kmh
        ):
            return True
        return False

    def _is_stationary(self, start: Coordinate | None, end: Coordinate | None) -> bool:
        if start is None or end is None:
            return False
        return straight_line_km(start, end) < self.settings.stationary_threshold_km

    def _validate(self, gps_km: float, straight_km: float) -> tuple[TrackingFlag, ...]:
        if straight_km < self.settings.stationary_threshold_km:
            return ()

        ratio = gps_km / straight_km
        if ratio < self.settings.incomplete_ratio:
            logger.warning(
                f"Tracking incomplete: GPS distance {gps_km:.2f}km is {ratio:.0%} of "
                f"straight-line {straight_km:.2f}km"
            )
            return (TrackingFlag.TRACKING_INCOMPLETE,)
        if ratio > self.settings.erratic_ratio:
            logger.warning(
                f"Erratic tracking: GPS distance {gps_km:.2f}km is {ratio:.0%} of "
                f"straight-line {straight_km:.2f}km"
            )
            return (TrackingFlag.ERRATIC_TRACKING,)
        return ()
