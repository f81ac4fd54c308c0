"""Tests for registering assets brought forward from a previous system."""

from datetime import date

import pytest

from ppe_engine.core.aggregation.period import accumulated_depreciation_total
from ppe_engine.core.assets.asset import Asset, AssetStatus
from ppe_engine.core.depreciation.opening import carrying_amount_split, register_opening_asset
from ppe_engine.core.depreciation.unit import calculate_depreciation


@pytest.fixture
def opening_truck():
    return register_opening_asset(
        company_id="company-1",
        description="Delivery truck",
        cost=12000.0,
        purchase_date="2022-01-01",
        useful_life_years=5,
        as_of=date(2024, 1, 15),
        asset_id="truck-ob",
    )


class TestRegisterOpeningAsset:
    def test_accumulated_seeded_from_calculator(self, opening_truck):
        # 744 days -> 24 months at 200
        assert opening_truck.accumulated_depreciation == pytest.approx(4800)
        assert opening_truck.carrying_amount == pytest.approx(7200)
        assert opening_truck.status is AssetStatus.ACTIVE

    def test_flagged_as_opening(self, opening_truck):
        assert opening_truck.is_opening
        assert opening_truck.description == "Delivery truck [opening]"

    def test_seed_is_rounded_to_cents(self):
        asset = register_opening_asset("company-1", "Printer", 1000.0, date(2023, 1, 1), 3, date(2023, 6, 1))
        expected = calculate_depreciation(1000.0, date(2023, 1, 1), 3, date(2023, 6, 1)).accumulated_depreciation
        assert asset.accumulated_depreciation == round(expected, 2)
        assert asset.id

    def test_bought_after_as_of_starts_at_zero(self):
        asset = register_opening_asset("company-1", "Lathe", 5000.0, date(2024, 3, 1), 10, date(2024, 1, 1))
        assert asset.accumulated_depreciation == 0.0

    def test_seeded_balance_feeds_accumulated_aggregate(self, opening_truck, laptop):
        assert accumulated_depreciation_total([opening_truck, laptop]) == pytest.approx(5800)

    def test_tag_read_back_from_row(self):
        asset = Asset.from_row({"id": "a", "cost": 10, "purchase_date": "2020-01-01", "description": "Shelf [OPENING]"})
        assert asset.is_opening


class TestCarryingAmountSplit:
    def test_split(self, opening_truck, laptop, old_press):
        split = carrying_amount_split([opening_truck, laptop, old_press])
        assert split == {"opening": pytest.approx(7200), "during_year": pytest.approx(2000)}

    def test_drafts_and_disposals_excluded(self, opening_truck, old_press):
        draft = Asset(id="d", cost=500, purchase_date=date(2024, 1, 1), status="draft", description="Desk [opening]")
        split = carrying_amount_split([opening_truck, old_press, draft])
        assert split["opening"] == pytest.approx(7200)
        assert split["during_year"] == 0.0

    def test_empty(self):
        assert carrying_amount_split([]) == {"opening": 0.0, "during_year": 0.0}
