"""Per-request fare configuration."""

import logging
from dataclasses import dataclass, field

from fare_engine.geo.zones import ZoneRings, load_zone_rings
from fare_engine.pricing.rates import RateTable, load_rate_table
from fare_engine.settings import DeadheadSettings, EngineSettings, Settings, TrackingSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FareConfig:
    """Everything FareEngine needs, passed explicitly to each calculation."""

    rate_table: RateTable
    zone_rings: ZoneRings
    engine: EngineSettings = field(default_factory=EngineSettings)
    tracking: TrackingSettings = field(default_factory=TrackingSettings)
    deadhead: DeadheadSettings = field(default_factory=DeadheadSettings)


def load_fare_config(settings: Settings) -> FareConfig:
    """Read the rate table and zone rings named in settings."""
    rate_table = load_rate_table(settings.engine.rate_table_path)
    zone_rings = load_zone_rings(settings.engine.zones_path)
    logger.debug(
        f"Fare config ready: deadhead={settings.deadhead.strategy}/"
        f"{settings.deadhead.charge_mode}, default direction "
        f"{settings.engine.default_trip_direction}"
    )
    return FareConfig(
        rate_table=rate_table,
        zone_rings=zone_rings,
        engine=settings.engine,
        tracking=settings.tracking,
        deadhead=settings.deadhead,
    )
