# ================================
# ppe_engine/core/assets/asset.py
# ================================

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Optional

import pandas as pd

from ppe_engine.core.errors import InvalidAssetError

# register-wide marker for balances brought forward from a previous system
OPENING_TAG = "[opening]"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    DRAFT = "draft"
    DISPOSED = "disposed"

    @classmethod
    def parse(cls, value) -> "AssetStatus":
        if isinstance(value, cls):
            return value
        text = str(value or "active").strip().lower()
        # sold / scrapped are both a disposal as far as the register goes
        if text in ("disposed", "sold", "scrapped"):
            return cls.DISPOSED
        if text == "draft":
            return cls.DRAFT
        if text == "active":
            return cls.ACTIVE
        raise InvalidAssetError(f"Unknown asset status: {value!r}")


def coerce_date(value) -> date:
    """
    Normalise a date, datetime or ISO string to a calendar date.
    Calendar dates only: a datetime keeps its date part and drops the time.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value:
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise InvalidAssetError(f"Invalid date: {value!r}") from exc
    raise InvalidAssetError(f"Invalid date: {value!r}")


@dataclass
class Asset:
    """
    One fixed asset on the register.

    cost and purchase_date are fixed at acquisition. accumulated_depreciation
    is the persisted balance, written by the posting step and only ever read
    back by the accumulated-depreciation aggregate.
    """

    id: str
    cost: float
    purchase_date: date
    useful_life_years: Optional[float] = None
    status: AssetStatus = AssetStatus.ACTIVE
    accumulated_depreciation: float = 0.0
    company_id: Optional[str] = None
    description: str = ""
    disposal_date: Optional[date] = None

    def __post_init__(self):
        self.cost = float(self.cost or 0.0)
        if self.cost < 0:
            raise InvalidAssetError(f"Asset {self.id}: cost must not be negative ({self.cost})")

        self.purchase_date = coerce_date(self.purchase_date)
        if self.disposal_date is not None:
            self.disposal_date = coerce_date(self.disposal_date)

        self.status = AssetStatus.parse(self.status)
        self.accumulated_depreciation = float(self.accumulated_depreciation or 0.0)

    @property
    def is_disposed(self) -> bool:
        return self.status is AssetStatus.DISPOSED

    @property
    def is_draft(self) -> bool:
        return self.status is AssetStatus.DRAFT

    @property
    def is_held(self) -> bool:
        return self.status is AssetStatus.ACTIVE

    @property
    def is_opening(self) -> bool:
        return OPENING_TAG in self.description.lower()

    @property
    def is_depreciable(self) -> bool:
        return bool(self.useful_life_years) and self.useful_life_years > 0

    @property
    def carrying_amount(self) -> float:
        return max(0.0, self.cost - self.accumulated_depreciation)

    @classmethod
    def from_row(cls, row: dict) -> "Asset":
        """Build an Asset from a fixed_assets table row."""
        life = row.get("useful_life_years")
        return cls(
            id=str(row["id"]),
            cost=float(row.get("cost") or 0.0),
            purchase_date=row.get("purchase_date"),
            useful_life_years=float(life) if life not in (None, "") else None,
            status=row.get("status") or "active",
            accumulated_depreciation=float(row.get("accumulated_depreciation") or 0.0),
            company_id=row.get("company_id"),
            description=row.get("description") or "",
            disposal_date=row.get("disposal_date") or None,
        )


ASSET_COLUMNS = [
    "id", "company_id", "description", "cost", "purchase_date",
    "useful_life_years", "status", "accumulated_depreciation", "disposal_date",
]


def assets_to_df(assets) -> pd.DataFrame:
    """
    Flatten assets into a DataFrame for aggregation.
    Date columns come out as datetime64 so they compare against pd.Timestamp.
    """
    rows = [
        {
            "id": a.id,
            "company_id": a.company_id,
            "description": a.description,
            "cost": a.cost,
            "purchase_date": a.purchase_date,
            "useful_life_years": a.useful_life_years,
            "status": a.status.value,
            "accumulated_depreciation": a.accumulated_depreciation,
            "disposal_date": a.disposal_date,
        }
        for a in assets
    ]

    df = pd.DataFrame(rows, columns=ASSET_COLUMNS)
    df["cost"] = df["cost"].astype(float)
    df["accumulated_depreciation"] = df["accumulated_depreciation"].astype(float)
    df["useful_life_years"] = pd.to_numeric(df["useful_life_years"], errors="coerce")
    df["purchase_date"] = pd.to_datetime(df["purchase_date"])
    df["disposal_date"] = pd.to_datetime(df["disposal_date"])
    return df

# ================================
# END asset.py
# ================================
