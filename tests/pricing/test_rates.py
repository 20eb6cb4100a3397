import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fare_engine.pricing.rates import PlatformFee, RateCard, RateSlab, RateTable, load_rate_table
from fare_engine.trip import BookingType


@pytest.mark.unit
class TestRateSlab:
    def test_display_label_default(self):
        assert RateSlab(coverage_km=100, flat_fare=Decimal("2200")).display_label == "100km slab"

    def test_display_label_custom(self):
        slab = RateSlab(coverage_km=40, flat_fare=Decimal("1200"), label="4hr/40km")
        assert slab.display_label == "4hr/40km"

    def test_included_hours_unset_by_default(self):
        assert RateSlab(coverage_km=40, flat_fare=Decimal("1200")).included_hours is None

    def test_coverage_must_be_positive(self):
        with pytest.raises(ValidationError):
            RateSlab(coverage_km=0, flat_fare=Decimal("100"))


@pytest.mark.unit
class TestRateCard:
    def test_slabs_must_ascend(self):
        with pytest.raises(ValidationError):
            RateCard(
                vehicle_type="sedan",
                booking_type="outstation",
                slabs=[
                    RateSlab(coverage_km=100, flat_fare=Decimal("2200")),
                    RateSlab(coverage_km=80, flat_fare=Decimal("1800")),
                ],
            )

    def test_duplicate_coverage_rejected(self):
        with pytest.raises(ValidationError):
            RateCard(
                vehicle_type="sedan",
                booking_type="outstation",
                slabs=[
                    RateSlab(coverage_km=80, flat_fare=Decimal("1800")),
                    RateSlab(coverage_km=80, flat_fare=Decimal("1900")),
                ],
            )

    def test_largest_slab(self):
        card = RateCard(
            vehicle_type="sedan",
            booking_type="outstation",
            slabs=[
                RateSlab(coverage_km=20, flat_fare=Decimal("600")),
                RateSlab(coverage_km=40, flat_fare=Decimal("1000")),
            ],
        )
        assert card.largest_slab.coverage_km == 40
        assert RateCard(vehicle_type="sedan", booking_type="airport").largest_slab is None

    def test_surge_below_one_rejected(self):
        with pytest.raises(ValidationError):
            RateCard(vehicle_type="sedan", booking_type="regular", surge_multiplier=0.9)


@pytest.mark.unit
class TestPlatformFee:
    def test_default_fixed_ten(self):
        fee = PlatformFee()
        assert fee.fee_type == "fixed"
        assert fee.amount == Decimal("10")

    def test_percentage_capped(self):
        with pytest.raises(ValidationError):
            PlatformFee(fee_type="percentage", amount=Decimal("120"))


@pytest.mark.unit
class TestRateTable:
    def test_lookup(self, rate_table):
        card = rate_table.lookup("sedan", BookingType.OUTSTATION)
        assert card is not None
        assert card.largest_slab.coverage_km == 120

    def test_lookup_accepts_strings(self, rate_table):
        assert rate_table.lookup("sedan", "airport").airport_surcharge == Decimal("150")

    def test_rental_packages_carry_hours(self, rate_table):
        slabs = rate_table.lookup("sedan", "rental").slabs
        assert [(s.label, s.included_hours) for s in slabs] == [("4hr/40km", 4), ("8hr/80km", 8)]

    def test_lookup_missing(self, rate_table):
        assert rate_table.lookup("hatchback", "outstation") is None

    def test_duplicate_cards_rejected(self):
        card = {"vehicle_type": "sedan", "booking_type": "regular", "per_km_rate": "15"}
        with pytest.raises(ValidationError):
            RateTable.model_validate({"cards": [card, card]})

    def test_load_rate_table(self, tmp_path):
        path = tmp_path / "rates.json"
        path.write_text(
            json.dumps(
                {
                    "cards": [
                        {
                            "vehicle_type": "suv",
                            "booking_type": "rental",
                            "slabs": [{"coverage_km": 40, "flat_fare": "1500"}],
                        }
                    ]
                }
            )
        )

        table = load_rate_table(path)

        card = table.lookup("suv", "rental")
        assert card.slabs[0].flat_fare == Decimal("1500")
        assert card.per_km_rate is None
