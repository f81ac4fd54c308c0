# ================================
# ppe_engine/core/aggregation/result.py
# ================================

import logging
from dataclasses import dataclass
from typing import List, Optional

from ppe_engine.core.assets.asset import Asset
from ppe_engine.core.assets.store import AssetFilter
from ppe_engine.core.errors import FetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AggregateResult:
    """Either an aggregate value or the FetchError that prevented it."""

    value: Optional[float] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> float:
        if self.error is not None:
            raise self.error
        return self.value

    def or_zero(self, operation: str, company_id: Optional[str] = None) -> float:
        """
        Report a failed fetch as 0.

        Financial statements render a zero line instead of failing. The
        failure is logged, not raised.
        """
        if self.error is not None:
            logger.warning(
                "%s: asset fetch failed, reporting 0",
                operation,
                exc_info=(type(self.error), self.error, self.error.__traceback__),
                extra={"operation": operation, "company_id": company_id},
            )
            return 0.0
        return self.value


@dataclass(frozen=True)
class FetchResult:
    assets: Optional[List[Asset]] = None
    error: Optional[FetchError] = None


async def fetch_assets(store, company_id: str, filters: AssetFilter) -> FetchResult:
    """One list_assets call; any failure comes back as a FetchError value."""
    try:
        assets = await store.list_assets(company_id, filters)
    except FetchError as exc:
        return FetchResult(error=exc)
    except Exception as exc:
        err = FetchError(f"list_assets failed for company {company_id}: {exc}")
        err.__cause__ = exc
        return FetchResult(error=err)
    return FetchResult(assets=list(assets or []))

# ================================
# END result.py
# ================================
