# ===============================================
# ppe_engine/core/tax/vat_journal_builder.py
# ===============================================

import uuid
from dataclasses import dataclass
from typing import List, Optional

from ppe_engine.config.params import AccountCodes, EngineSettings
from ppe_engine.core.assets.asset import Asset
from ppe_engine.core.ledger.journal_entry import JournalEntry, ensure_balanced, make_entry_pair
from ppe_engine.core.tax.tax_splitter import split_vat


def build_acquisition_entries(
    date,
    asset_account: str,
    counter_account: str,
    tax_info: dict,
    vat_account: str,
    description: str = "",
) -> List[JournalEntry]:
    """
    Acquisition entries for a VAT-inclusive purchase.

    tax_info is the result of split_vat:
        {
            "tax_base": amount excluding VAT,
            "vat_claimable": claimable input VAT,
            "vat_non_claimable": non-claimable input VAT
        }

    - tax base + non-claimable VAT -> asset cost (Dr asset)
    - claimable VAT -> VAT input (Dr vat_account)
    - everything is paid from counter_account (Cr)
    """

    entries = []

    capitalised = round(tax_info["tax_base"] + tax_info["vat_non_claimable"], 2)
    if capitalised > 0:
        entries += make_entry_pair(date, asset_account, counter_account, capitalised, description)

    if tax_info["vat_claimable"] > 0:
        entries += make_entry_pair(date, vat_account, counter_account, tax_info["vat_claimable"], description)

    ensure_balanced(entries)
    return entries


@dataclass
class Acquisition:
    asset: Asset
    entries: List[JournalEntry]
    tax_info: dict


def acquire_asset(
    company_id: str,
    description: str,
    gross_amount: float,
    purchase_date,
    useful_life_years: float,
    vat_rate: Optional[float] = None,
    non_claimable_ratio: float = 0.0,
    codes: Optional[AccountCodes] = None,
    asset_id: Optional[str] = None,
    settings: Optional[EngineSettings] = None,
) -> Acquisition:
    """
    Register a purchase: the new Asset carries the capitalised cost and the
    entries debit exactly gross_amount.

    vat_rate and codes fall back to the engine settings (environment when
    no settings are given).
    """
    settings = settings or EngineSettings.from_env()
    if vat_rate is None:
        vat_rate = settings.vat_rate
    codes = codes or settings.account_codes

    tax_info = split_vat(gross_amount, vat_rate, non_claimable_ratio)
    capitalised = round(tax_info["tax_base"] + tax_info["vat_non_claimable"], 2)

    asset = Asset(
        id=asset_id or str(uuid.uuid4()),
        cost=capitalised,
        purchase_date=purchase_date,
        useful_life_years=useful_life_years,
        company_id=company_id,
        description=description,
    )

    entries = build_acquisition_entries(
        asset.purchase_date,
        codes.fixed_asset[0],
        codes.bank[0],
        tax_info,
        codes.vat_input[0],
        description=f"Asset Purchase - {description}",
    )
    return Acquisition(asset=asset, entries=entries, tax_info=tax_info)

# ppe_engine/core/tax/vat_journal_builder.py end
