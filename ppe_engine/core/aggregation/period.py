# ===========================================
# ppe_engine/core/aggregation/period.py
# Depreciation figures for the financial statements
# ===========================================

import logging
from datetime import date
from typing import Iterable

import numpy as np
import pandas as pd

from ppe_engine.config.params import DAYS_PER_YEAR
from ppe_engine.core.aggregation.result import AggregateResult, fetch_assets
from ppe_engine.core.assets.asset import Asset, AssetStatus, assets_to_df, coerce_date
from ppe_engine.core.assets.store import AssetFilter

logger = logging.getLogger(__name__)


# -----------------------------------------
# 1. Pure aggregates over an asset population
# -----------------------------------------
def _held(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["status"] == AssetStatus.ACTIVE.value]


def total_ppe_cost(assets: Iterable[Asset], as_of) -> float:
    """Sum of cost over held assets purchased on or before as_of."""
    df = assets_to_df(assets)
    if df.empty:
        return 0.0

    cutoff = pd.Timestamp(coerce_date(as_of))
    held = _held(df)
    held = held[held["purchase_date"] <= cutoff]
    return float(held["cost"].sum())


def depreciation_expense(assets: Iterable[Asset], start, end) -> float:
    """
    Depreciation expense (a flow) for the window [start, end].

    Uses a daily rate of cost / (life * 365.25) over the days the asset was
    held inside the window. This is a period approximation and does not go
    through the monthly as-of calculator.
    """
    df = assets_to_df(assets)
    if df.empty:
        return 0.0

    start_ts = pd.Timestamp(coerce_date(start))
    end_ts = pd.Timestamp(coerce_date(end))

    live = _held(df)
    live = live[(live["useful_life_years"] > 0) & (live["purchase_date"] <= end_ts)]
    if live.empty:
        return 0.0

    daily = live["cost"] / (live["useful_life_years"] * DAYS_PER_YEAR)
    effective_start = live["purchase_date"].where(live["purchase_date"] > start_ts, start_ts)
    effective_days = (end_ts - effective_start).dt.days

    contribution = np.where(effective_days > 0, daily * effective_days, 0.0)
    return float(contribution.sum())


def accumulated_depreciation_total(assets: Iterable[Asset]) -> float:
    """Sum of the persisted accumulated_depreciation over assets not disposed."""
    df = assets_to_df(assets)
    if df.empty:
        return 0.0
    return float(_held(df)["accumulated_depreciation"].fillna(0.0).sum())


# -----------------------------------------
# 2. Store-backed aggregates (explicit result)
# -----------------------------------------
async def total_ppe_as_of_result(store, company_id: str, as_of) -> AggregateResult:
    cutoff = coerce_date(as_of)
    fetched = await fetch_assets(
        store, company_id, AssetFilter(exclude_disposed=True, purchased_on_or_before=cutoff)
    )
    if fetched.error is not None:
        return AggregateResult(error=fetched.error)
    return AggregateResult(value=total_ppe_cost(fetched.assets, cutoff))


async def depreciation_expense_result(store, company_id: str, start, end) -> AggregateResult:
    period_end = coerce_date(end)
    fetched = await fetch_assets(
        store, company_id, AssetFilter(exclude_disposed=True, purchased_on_or_before=period_end)
    )
    if fetched.error is not None:
        return AggregateResult(error=fetched.error)
    return AggregateResult(value=depreciation_expense(fetched.assets, start, period_end))


async def accumulated_depreciation_result(store, company_id: str, as_of) -> AggregateResult:
    # as_of is not a filter here: the persisted balances are trusted as current
    logger.debug("accumulated depreciation read for %s as of %s", company_id, as_of)
    fetched = await fetch_assets(store, company_id, AssetFilter(exclude_disposed=True))
    if fetched.error is not None:
        return AggregateResult(error=fetched.error)
    return AggregateResult(value=accumulated_depreciation_total(fetched.assets))


# -----------------------------------------
# 3. Statement-facing aggregates: a failed fetch reports 0
# -----------------------------------------
async def calculate_total_ppe_as_of(store, company_id: str, as_of: date) -> float:
    result = await total_ppe_as_of_result(store, company_id, as_of)
    return result.or_zero("calculate_total_ppe_as_of", company_id)


async def calculate_depreciation_expense_for_period(store, company_id: str, start: date, end: date) -> float:
    result = await depreciation_expense_result(store, company_id, start, end)
    return result.or_zero("calculate_depreciation_expense_for_period", company_id)


async def calculate_accumulated_depreciation_as_of(store, company_id: str, as_of: date) -> float:
    result = await accumulated_depreciation_result(store, company_id, as_of)
    return result.or_zero("calculate_accumulated_depreciation_as_of", company_id)

# ============== end ppe_engine/core/aggregation/period.py
