# ===== ppe_engine/core/depreciation/unit.py =====

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ppe_engine.config.params import DAYS_PER_MONTH
from ppe_engine.core.assets.asset import Asset, coerce_date
from ppe_engine.core.errors import InvalidAssetError

ALGORITHM_VERSION = "straight-line/monthly-30.44/v1"


@dataclass(frozen=True)
class DepreciationResult:
    annual_depreciation: float
    accumulated_depreciation: float
    net_book_value: float
    months_depreciated: int
    algorithm: str = ALGORITHM_VERSION

    @property
    def monthly_depreciation(self) -> float:
        return self.annual_depreciation / 12


def calculate_depreciation(
    cost: float,
    purchase_date,
    useful_life_years: Optional[float],
    evaluation_date,
) -> DepreciationResult:
    """
    Straight-line depreciation for one asset as of evaluation_date.

    Elapsed time is counted in whole 30.44-day months from the purchase
    date. Accumulated depreciation never exceeds cost. Before the purchase
    date nothing has been depreciated and net book value is reported as 0.
    A useful life that is zero, negative or missing depreciates nothing.
    """
    if cost < 0:
        raise InvalidAssetError(f"cost must not be negative ({cost})")

    purchased = coerce_date(purchase_date)
    evaluated = coerce_date(evaluation_date)

    depreciable = bool(useful_life_years) and useful_life_years > 0
    annual = cost / useful_life_years if depreciable else 0.0

    # ① not started yet
    if evaluated < purchased:
        return DepreciationResult(
            annual_depreciation=annual,
            accumulated_depreciation=0.0,
            net_book_value=0.0,
            months_depreciated=0,
        )

    # ② non-depreciable: book value stays at cost
    if not depreciable:
        return DepreciationResult(
            annual_depreciation=0.0,
            accumulated_depreciation=0.0,
            net_book_value=cost,
            months_depreciated=0,
        )

    # ③ elapsed whole months
    days = (evaluated - purchased).days
    months = max(0, math.floor(days / DAYS_PER_MONTH))

    monthly = annual / 12
    accumulated = min(monthly * months, cost)

    return DepreciationResult(
        annual_depreciation=annual,
        accumulated_depreciation=accumulated,
        net_book_value=cost - accumulated,
        months_depreciated=months,
    )


@dataclass
class DepreciationUnit:
    """
    Calculator bound to one registered asset.
    Each call recomputes from the asset's cost and purchase date; nothing is cached.
    """

    asset: Asset

    def result_at(self, evaluation_date: date) -> DepreciationResult:
        return calculate_depreciation(
            self.asset.cost,
            self.asset.purchase_date,
            self.asset.useful_life_years,
            evaluation_date,
        )

    @property
    def monthly_depreciation(self) -> float:
        if not self.asset.is_depreciable:
            return 0.0
        return self.asset.cost / self.asset.useful_life_years / 12

    def increment_between(self, start: date, end: date) -> float:
        """Depreciation accrued after start up to end (never negative)."""
        before = self.result_at(start).accumulated_depreciation
        after = self.result_at(end).accumulated_depreciation
        return max(0.0, after - before)

    def is_fully_depreciated(self, evaluation_date: date) -> bool:
        res = self.result_at(evaluation_date)
        return res.months_depreciated > 0 and res.net_book_value <= 0

# ===== end unit.py =====
