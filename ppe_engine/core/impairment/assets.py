# ================================
# ppe_engine/core/impairment/assets.py
# ================================

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ppe_engine.config.params import AccountCodes
from ppe_engine.core.assets.asset import Asset, coerce_date
from ppe_engine.core.ledger.journal_entry import JournalEntry, make_entry_pair


@dataclass
class ImpairmentItem:
    asset_id: str
    description: str
    carrying_amount: float
    recoverable_amount: float
    impairment_loss: float


@dataclass
class ImpairmentPreview:
    items: List[ImpairmentItem] = field(default_factory=list)

    @property
    def total_impairment(self) -> float:
        return sum(i.impairment_loss for i in self.items)

    @property
    def count(self) -> int:
        return len(self.items)

    def summary(self) -> dict:
        return {"total_impairment": self.total_impairment, "count": self.count}


def preview_asset_impairment(
    assets: Iterable[Asset],
    recoverables: Dict[str, float],
) -> ImpairmentPreview:
    """
    Compare each held asset's carrying amount with its recoverable amount.
    Only assets with a recoverable amount below carrying amount are returned.
    """
    preview = ImpairmentPreview()

    for a in assets:
        if not a.is_held:
            continue

        carrying = a.carrying_amount
        recoverable = float(recoverables.get(a.id, 0.0) or 0.0)

        # no recoverable amount given -> nothing to test
        if not 0 < recoverable < carrying:
            continue

        preview.items.append(
            ImpairmentItem(
                asset_id=a.id,
                description=a.description,
                carrying_amount=carrying,
                recoverable_amount=recoverable,
                impairment_loss=round(carrying - recoverable, 2),
            )
        )

    return preview


def build_impairment_entries(
    preview: ImpairmentPreview,
    period_end,
    codes: Optional[AccountCodes] = None,
) -> List[JournalEntry]:
    codes = codes or AccountCodes()
    when = coerce_date(period_end)

    entries = []
    for item in preview.items:
        entries += make_entry_pair(
            when,
            codes.impairment_loss[0],
            codes.accumulated_depreciation[0],
            item.impairment_loss,
            f"Impairment - {item.description or item.asset_id}",
        )
    return entries
