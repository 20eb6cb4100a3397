import pytest

from fare_engine.config import load_fare_config
from fare_engine.settings import EngineSettings, Settings
from tests.factories import CONFIG_DIR


@pytest.mark.unit
class TestLoadFareConfig:
    def test_loads_files_named_in_settings(self):
        settings = Settings(
            engine=EngineSettings(
                rate_table_path=str(CONFIG_DIR / "rates.json"),
                zones_path=str(CONFIG_DIR / "zones.json"),
            )
        )

        config = load_fare_config(settings)

        assert config.rate_table.lookup("sedan", "outstation") is not None
        assert config.zone_rings.inner.radius_km == 7.74
        assert config.deadhead is settings.deadhead
        assert config.tracking is settings.tracking

    def test_missing_file(self, tmp_path):
        settings = Settings(
            engine=EngineSettings(
                rate_table_path=str(tmp_path / "missing.json"),
                zones_path=str(CONFIG_DIR / "zones.json"),
            )
        )
        with pytest.raises(FileNotFoundError):
            load_fare_config(settings)
