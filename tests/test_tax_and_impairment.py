"""Tests for VAT-inclusive acquisitions and impairment previews."""

from datetime import date

import pytest

from ppe_engine.config.params import AccountCodes, EngineSettings
from ppe_engine.core.assets.asset import Asset
from ppe_engine.core.impairment.assets import build_impairment_entries, preview_asset_impairment
from ppe_engine.core.ledger.journal_entry import total_credits, total_debits
from ppe_engine.core.tax.tax_splitter import split_vat
from ppe_engine.core.tax.vat_journal_builder import acquire_asset, build_acquisition_entries


class TestSplitVat:
    def test_fully_claimable(self):
        assert split_vat(1150.0, 0.15) == {
            "tax_base": 1000.0,
            "vat_claimable": 150.0,
            "vat_non_claimable": 0.0,
        }

    def test_partly_claimable(self):
        info = split_vat(1150.0, 0.15, non_claimable_ratio=0.4)
        assert info["vat_claimable"] == pytest.approx(90.0)
        assert info["vat_non_claimable"] == pytest.approx(60.0)

    def test_parts_add_back_to_gross(self):
        info = split_vat(100.0, 0.15, non_claimable_ratio=0.3)
        assert sum(info.values()) == pytest.approx(100.0)

    def test_rounding_modes(self):
        assert split_vat(100.0, 0.15)["tax_base"] == 86.96
        floored = split_vat(100.0, 0.15, rounding="floor")
        assert floored["tax_base"] == 86.95
        assert floored["vat_claimable"] == 13.05

    @pytest.mark.parametrize("gross", [0, -10])
    def test_non_positive_gross(self, gross):
        assert split_vat(gross, 0.15) == {
            "tax_base": 0.0,
            "vat_claimable": 0.0,
            "vat_non_claimable": 0.0,
        }


class TestAcquisition:
    def test_entries_balance_to_gross(self):
        info = split_vat(1150.0, 0.15, non_claimable_ratio=0.4)
        entries = build_acquisition_entries(date(2024, 3, 1), "1500", "1100", info, "1400")
        assert [(e.dr_account, e.cr_account, e.dr_amount) for e in entries] == [
            ("1500", "1100", 1060.0),
            ("1400", "1100", 90.0),
        ]
        assert total_debits(entries) == pytest.approx(1150.0)
        assert total_credits(entries) == pytest.approx(1150.0)

    def test_acquire_asset_capitalises_non_claimable_vat(self):
        acq = acquire_asset(
            company_id="company-1",
            description="Forklift",
            gross_amount=1150.0,
            purchase_date="2024-03-01",
            useful_life_years=5,
            vat_rate=0.15,
            non_claimable_ratio=0.4,
            asset_id="forklift",
        )
        assert acq.asset.id == "forklift"
        assert acq.asset.cost == pytest.approx(1060.0)
        assert acq.asset.purchase_date == date(2024, 3, 1)
        assert acq.asset.accumulated_depreciation == 0
        assert acq.entries[0].description == "Asset Purchase - Forklift"
        assert total_debits(acq.entries) == pytest.approx(1150.0)

    def test_acquire_asset_generates_id(self):
        acq = acquire_asset("company-1", "Desk", 575.0, date(2024, 3, 1), 10, vat_rate=0.15)
        assert acq.asset.id
        assert acq.asset.cost == pytest.approx(500.0)

    def test_vat_rate_and_codes_from_settings(self):
        settings = EngineSettings(vat_rate=0.25, account_codes=AccountCodes(fixed_asset=("1510", "Machinery")))
        acq = acquire_asset("company-1", "Press", 1250.0, date(2024, 3, 1), 10, settings=settings)
        assert acq.asset.cost == pytest.approx(1000.0)
        assert acq.tax_info["vat_claimable"] == pytest.approx(250.0)
        assert acq.entries[0].dr_account == "1510"

    def test_vat_rate_from_environment(self, monkeypatch):
        monkeypatch.setenv("PPE_VAT_RATE", "0.2")
        acq = acquire_asset("company-1", "Desk", 600.0, date(2024, 3, 1), 10)
        assert acq.asset.cost == pytest.approx(500.0)


class TestImpairmentPreview:
    def test_only_losses_reported(self, register):
        preview = preview_asset_impairment(
            register, {"truck": 6000.0, "laptop": 2500.0, "press": 1.0}
        )
        assert [i.asset_id for i in preview.items] == ["truck"]
        item = preview.items[0]
        assert item.carrying_amount == pytest.approx(7200)
        assert item.impairment_loss == pytest.approx(1200)
        assert preview.summary() == {"total_impairment": pytest.approx(1200), "count": 1}

    def test_missing_recoverable_amount_is_not_an_impairment(self, register):
        preview = preview_asset_impairment(register, {})
        assert preview.count == 0
        assert preview.total_impairment == 0

    def test_impairment_entries(self, register):
        preview = preview_asset_impairment(register, {"truck": 6000.0})
        entries = build_impairment_entries(preview, "2024-12-31")
        assert [(e.dr_account, e.cr_account, e.dr_amount) for e in entries] == [("5650", "1540", 1200.0)]
        assert entries[0].date == date(2024, 12, 31)

    def test_draft_asset_not_tested(self, register):
        draft = Asset(id="quote", cost=900, purchase_date=date(2024, 5, 1), useful_life_years=3, status="draft")
        preview = preview_asset_impairment(register + [draft], {"quote": 100.0})
        assert preview.count == 0
