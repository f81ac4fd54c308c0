# ================================
# ppe_engine/core/depreciation/disposal.py
# ================================

from dataclasses import dataclass, replace
from typing import List, Optional

from ppe_engine.config.params import AccountCodes
from ppe_engine.core.assets.asset import Asset, AssetStatus, coerce_date
from ppe_engine.core.ledger.journal_entry import JournalEntry, ensure_balanced, make_entry_pair


@dataclass
class DisposalResult:
    asset: Asset
    net_book_value: float
    proceeds: float
    gain_loss: float
    entries: List[JournalEntry]


def dispose_asset(
    asset: Asset,
    proceeds: float,
    disposal_date,
    codes: Optional[AccountCodes] = None,
) -> DisposalResult:
    """
    Derecognise an asset on sale or scrapping.

    NBV is cost less the persisted accumulated depreciation. The asset
    account is credited for the full cost across the entries below.
    """
    if proceeds < 0:
        raise ValueError(f"proceeds must not be negative ({proceeds})")

    codes = codes or AccountCodes()
    when = coerce_date(disposal_date)
    label = f"Asset Disposal - {asset.description or asset.id}"

    accumulated = min(asset.accumulated_depreciation, asset.cost)
    nbv = asset.cost - accumulated
    gain_loss = round(proceeds - nbv, 2)

    asset_acc = codes.fixed_asset[0]
    entries = []

    # A) accumulated depreciation
    if accumulated > 0:
        entries += make_entry_pair(when, codes.accumulated_depreciation[0], asset_acc, accumulated, label)

    # B) proceeds against the remaining book value
    recovered = min(proceeds, nbv)
    if recovered > 0:
        entries += make_entry_pair(when, codes.bank[0], asset_acc, recovered, label)

    # C) gain / loss
    if gain_loss > 0:
        entries += make_entry_pair(when, codes.bank[0], codes.gain_on_sale[0], gain_loss, label)
    elif gain_loss < 0:
        entries += make_entry_pair(when, codes.loss_on_sale[0], asset_acc, -gain_loss, label)

    ensure_balanced(entries)

    disposed = replace(asset, status=AssetStatus.DISPOSED, disposal_date=when)
    return DisposalResult(
        asset=disposed,
        net_book_value=nbv,
        proceeds=proceeds,
        gain_loss=gain_loss,
        entries=entries,
    )

# ================================
# END disposal.py
# ================================
