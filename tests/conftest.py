
import pytest

from fare_engine.config import FareConfig
from fare_engine.db.database import init_database
from fare_engine.geo.zones import ZoneRings, load_zone_rings
from fare_engine.pricing.rates import RateTable, load_rate_table
from fare_engine.settings import DeadheadSettings, EngineSettings, TrackingSettings
from tests.factories import CONFIG_DIR



@pytest.fixture
def temp_sqlite_db(tmp_path):
    """Temporary SQLite database for persistence tests."""
    return tmp_path / "test_fare_engine.db"


@pytest.fixture
def session_factory(temp_sqlite_db):
    return init_database(f"sqlite:///{temp_sqlite_db}")


@pytest.fixture
def rate_table() -> RateTable:
    """Sample rate cards shipped in config/rates.json."""
    return load_rate_table(CONFIG_DIR / "rates.json")


@pytest.fixture
def zone_rings() -> ZoneRings:
    """Hosur inner (7.74km) and outer (15km) rings."""
    return load_zone_rings(CONFIG_DIR / "zones.json")


@pytest.fixture
def fare_config(rate_table, zone_rings) -> FareConfig:
    return FareConfig(
        rate_table=rate_table,
        zone_rings=zone_rings,
        engine=EngineSettings(),
        tracking=TrackingSettings(),
        deadhead=DeadheadSettings(),
    )
