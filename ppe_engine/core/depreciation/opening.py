# ================================
# ppe_engine/core/depreciation/opening.py
# ================================

import logging
import uuid
from typing import Dict, Iterable, Optional

from ppe_engine.core.assets.asset import OPENING_TAG, Asset, coerce_date
from ppe_engine.core.depreciation.unit import calculate_depreciation

logger = logging.getLogger(__name__)


def register_opening_asset(
    company_id: str,
    description: str,
    cost: float,
    purchase_date,
    useful_life_years: Optional[float],
    as_of,
    asset_id: Optional[str] = None,
) -> Asset:
    """
    Bring an asset already in use onto the register.

    The accumulated balance is seeded from the as-of calculator at as_of
    (normally the day before the first fiscal year kept in this system),
    rounded to cents. No acquisition entries are produced.
    """
    as_of = coerce_date(as_of)
    seeded = calculate_depreciation(cost, purchase_date, useful_life_years, as_of)

    asset = Asset(
        id=asset_id or str(uuid.uuid4()),
        cost=cost,
        purchase_date=purchase_date,
        useful_life_years=useful_life_years,
        accumulated_depreciation=round(seeded.accumulated_depreciation, 2),
        company_id=company_id,
        description=f"{description} {OPENING_TAG}".strip(),
    )
    logger.info(
        "Opening asset %s registered with accumulated %.2f as of %s",
        asset.id, asset.accumulated_depreciation, as_of,
        extra={"operation": "register_opening_asset", "asset_id": asset.id, "company_id": company_id},
    )
    return asset


def carrying_amount_split(assets: Iterable[Asset]) -> Dict[str, float]:
    """Carrying amount of held assets, split into opening and during-year."""
    opening = 0.0
    during_year = 0.0

    for a in assets:
        if not a.is_held:
            continue
        if a.is_opening:
            opening += a.carrying_amount
        else:
            during_year += a.carrying_amount

    return {"opening": opening, "during_year": during_year}

# ================================
# END opening.py
# ================================
