# ================================
# ppe_engine/core/depreciation/posting.py
# ================================

import logging
from dataclasses import dataclass
from typing import List, Optional

import pandas as pd

from ppe_engine.config.params import AccountCodes
from ppe_engine.core.assets.asset import Asset, coerce_date
from ppe_engine.core.depreciation.unit import DepreciationUnit
from ppe_engine.core.errors import PersistError
from ppe_engine.core.ledger.journal_entry import JournalEntry, entries_to_df, make_entry_pair

logger = logging.getLogger(__name__)


async def update_asset_depreciation(store, asset_id: str, accumulated_depreciation: float) -> None:
    """
    Write a recomputed accumulated depreciation to the asset record.

    Not transactional with reads of other assets. A failed write is always
    raised to the caller as PersistError.
    """
    if accumulated_depreciation < 0:
        raise ValueError(f"accumulated depreciation must not be negative ({accumulated_depreciation})")

    try:
        await store.update_accumulated_depreciation(asset_id, accumulated_depreciation)
    except PersistError:
        logger.error("Error updating asset depreciation for %s", asset_id, exc_info=True)
        raise
    except Exception as exc:
        logger.error("Error updating asset depreciation for %s", asset_id, exc_info=True)
        raise PersistError(f"Could not update asset {asset_id}: {exc}") from exc


def suggest_monthly_amount(asset: Asset) -> float:
    return round(DepreciationUnit(asset).monthly_depreciation, 2)


def build_depreciation_entries(
    asset: Asset,
    amount: float,
    posting_date,
    codes: Optional[AccountCodes] = None,
) -> List[JournalEntry]:
    codes = codes or AccountCodes()
    return make_entry_pair(
        coerce_date(posting_date),
        codes.depreciation_expense[0],
        codes.accumulated_depreciation[0],
        amount,
        f"Depreciation - {asset.description or asset.id}",
    )


@dataclass
class DepreciationPosting:
    asset_id: str
    amount: float
    accumulated_depreciation: float
    entries: List[JournalEntry]

    def to_df(self) -> pd.DataFrame:
        return entries_to_df(self.entries)


async def post_depreciation(
    store,
    asset: Asset,
    amount: float,
    posting_date,
    codes: Optional[AccountCodes] = None,
) -> DepreciationPosting:
    """
    Post one period of depreciation for an asset.

    Builds Dr Depreciation Expense / Cr Accumulated Depreciation for the
    amount actually posted. The amount is capped at the remaining carrying
    amount so the journal and the stored balance agree.
    """
    if not amount or amount <= 0:
        raise ValueError("Enter a positive depreciation amount")

    posted = min(amount, asset.cost - asset.accumulated_depreciation)
    if posted <= 0:
        raise ValueError(f"Asset {asset.id} is already fully depreciated")

    entries = build_depreciation_entries(asset, posted, posting_date, codes)
    new_accumulated = asset.accumulated_depreciation + posted

    await update_asset_depreciation(store, asset.id, new_accumulated)
    logger.info(
        "Depreciation posted for %s: %.2f (accumulated %.2f)",
        asset.id, posted, new_accumulated,
        extra={"operation": "post_depreciation", "asset_id": asset.id, "company_id": asset.company_id},
    )

    return DepreciationPosting(
        asset_id=asset.id,
        amount=posted,
        accumulated_depreciation=new_accumulated,
        entries=entries,
    )

# ================================
# END posting.py
# ================================
