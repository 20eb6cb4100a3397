from datetime import timedelta

import pytest

from fare_engine.tracking.health import GPSHealthStatus, check_gps_health
from tests.factories import HOSUR, T0, make_fix, straight_path


@pytest.mark.unit
class TestGPSHealth:
    def test_no_points(self):
        health = check_gps_health([], now=T0)
        assert health.status == GPSHealthStatus.NO_POINTS
        assert health.fix_count == 0
        assert health.minutes_since_last_fix is None

    def test_recent_fix_is_ok(self):
        fixes = straight_path(HOSUR, 0.5)
        now = fixes[-1].recorded_at + timedelta(minutes=1)

        health = check_gps_health(fixes, now=now)

        assert health.status == GPSHealthStatus.OK
        assert health.fix_count == len(fixes)
        assert health.minutes_since_last_fix == pytest.approx(1.0)

    def test_stale_after_threshold(self):
        fixes = [make_fix(HOSUR, T0)]
        health = check_gps_health(fixes, now=T0 + timedelta(minutes=6))
        assert health.status == GPSHealthStatus.STALE

    def test_custom_threshold(self):
        fixes = [make_fix(HOSUR, T0)]
        health = check_gps_health(fixes, now=T0 + timedelta(minutes=6), stale_after_minutes=10)
        assert health.status == GPSHealthStatus.OK
