# ===========================================
# ppe_engine/core/reporting/ppe_statement.py
# Monthly PPE roll-forward for one fiscal year
# ===========================================

from calendar import monthrange
from datetime import date, timedelta
from typing import Iterable, List, Optional

import pandas as pd

from ppe_engine.config.params import EngineSettings
from ppe_engine.core.assets.asset import Asset
from ppe_engine.core.depreciation.unit import DepreciationUnit

SCHEDULE_COLUMNS = [
    "month",
    "opening_cost",
    "opening_acc_dep",
    "opening_nbv",
    "additions",
    "disposals_cost",
    "disposals_acc_dep",
    "depreciation",
    "closing_cost",
    "closing_acc_dep",
    "closing_nbv",
]


def fiscal_months(fiscal_year: int, fiscal_start_month: int = 1) -> List[tuple]:
    """
    (label, first day, last day) for each month of the fiscal year.
    Fiscal year Y starts on (Y, fiscal_start_month, 1); months before the
    start month fall in calendar year Y + 1.
    """
    months = []
    for i in range(12):
        month = (fiscal_start_month - 1 + i) % 12 + 1
        year = fiscal_year + 1 if month < fiscal_start_month else fiscal_year
        first = date(year, month, 1)
        last = date(year, month, monthrange(year, month)[1])
        months.append((first.strftime("%B %Y"), first, last))
    return months


class PPEStatementBuilder:
    """
    Build the PPE movement schedule from the asset register.

    Opening balances, additions, disposals and depreciation are all derived
    from the assets themselves (cost, purchase and disposal dates) through
    the as-of depreciation calculator.
    """

    def __init__(self, assets: Iterable[Asset]):
        self.assets = [a for a in assets if not a.is_draft]

    # -----------------------------------------
    # helpers
    # -----------------------------------------
    @staticmethod
    def _disposed_by(a: Asset, when: date) -> bool:
        return a.is_disposed and a.disposal_date is not None and a.disposal_date < when

    @staticmethod
    def _acc_dep(a: Asset, when: date) -> float:
        return DepreciationUnit(a).result_at(when).accumulated_depreciation

    def _opening(self, fy_start: date) -> tuple:
        prev_end = fy_start - timedelta(days=1)
        opening = [
            a for a in self.assets
            if a.purchase_date < fy_start and not self._disposed_by(a, fy_start)
        ]
        cost = sum(a.cost for a in opening)
        acc_dep = sum(self._acc_dep(a, prev_end) for a in opening)
        return cost, acc_dep

    def _month_depreciation(self, first: date, last: date) -> float:
        start_ref = first - timedelta(days=1)
        total = 0.0

        for a in self.assets:
            if a.purchase_date > last:
                continue
            if self._disposed_by(a, first):
                continue

            unit = DepreciationUnit(a)
            if unit.is_fully_depreciated(start_ref):
                continue

            limit = last
            if a.is_disposed and a.disposal_date is not None and a.disposal_date <= last:
                limit = a.disposal_date

            total += unit.increment_between(start_ref, limit)

        return total

    # -----------------------------------------
    # schedule
    # -----------------------------------------
    def build(self, fiscal_year: int, fiscal_start_month: int = 1) -> pd.DataFrame:
        months = fiscal_months(fiscal_year, fiscal_start_month)
        running_cost, running_acc_dep = self._opening(months[0][1])

        rows = []
        for label, first, last in months:
            additions = sum(
                a.cost for a in self.assets if first <= a.purchase_date <= last
            )

            disposals = [
                a for a in self.assets
                if a.is_disposed and a.disposal_date is not None and first <= a.disposal_date <= last
            ]
            disposals_cost = sum(a.cost for a in disposals)
            disposals_acc_dep = sum(self._acc_dep(a, a.disposal_date) for a in disposals)

            depreciation = self._month_depreciation(first, last)

            opening_cost = running_cost
            opening_acc_dep = running_acc_dep

            running_cost = running_cost + additions - disposals_cost
            running_acc_dep = running_acc_dep + depreciation - disposals_acc_dep

            rows.append({
                "month": label,
                "opening_cost": opening_cost,
                "opening_acc_dep": opening_acc_dep,
                "opening_nbv": opening_cost - opening_acc_dep,
                "additions": additions,
                "disposals_cost": disposals_cost,
                "disposals_acc_dep": disposals_acc_dep,
                "depreciation": depreciation,
                "closing_cost": running_cost,
                "closing_acc_dep": running_acc_dep,
                "closing_nbv": running_cost - running_acc_dep,
            })

        return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def build_ppe_schedule(
    assets: Iterable[Asset],
    fiscal_year: int,
    fiscal_start_month: Optional[int] = None,
    settings: Optional[EngineSettings] = None,
) -> pd.DataFrame:
    """Schedule for fiscal_year; the start month defaults to the configured fiscal calendar."""
    if fiscal_start_month is None:
        fiscal_start_month = (settings or EngineSettings.from_env()).fiscal_start_month
    return PPEStatementBuilder(assets).build(fiscal_year, fiscal_start_month)

# ============== end ppe_engine/core/reporting/ppe_statement.py
