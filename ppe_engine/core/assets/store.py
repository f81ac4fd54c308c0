# ================================
# ppe_engine/core/assets/store.py
# ================================

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Dict, List, Optional, Protocol

import pandas as pd

from ppe_engine.core.assets.asset import Asset, assets_to_df
from ppe_engine.core.errors import PersistError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssetFilter:
    exclude_disposed: bool = True
    purchased_on_or_before: Optional[date] = None

    def matches(self, asset: Asset) -> bool:
        if asset.is_draft:
            return False
        if self.exclude_disposed and asset.is_disposed:
            return False
        if self.purchased_on_or_before is not None and asset.purchase_date > self.purchased_on_or_before:
            return False
        return True


class AssetStore(Protocol):
    """
    Collaborator that owns the fixed_assets records.
    Each call is one request/response; the engine never fans out.
    """

    async def list_assets(self, company_id: str, filters: AssetFilter) -> List[Asset]:
        ...

    async def update_accumulated_depreciation(self, asset_id: str, amount: float) -> None:
        ...


class InMemoryAssetStore:
    """
    InMemoryAssetStore
    ------------------
    - keeps Asset records keyed by id
    - filters by company and AssetFilter
    - hands the register out as a DataFrame
    """

    def __init__(self, assets: Optional[List[Asset]] = None):
        self.assets: Dict[str, Asset] = {}
        for asset in assets or []:
            self.add_asset(asset)

    def add_asset(self, asset: Asset):
        if not isinstance(asset, Asset):
            raise TypeError(f"InMemoryAssetStore.add_asset expects Asset, got {type(asset)}")
        self.assets[asset.id] = asset

    async def list_assets(self, company_id: str, filters: AssetFilter) -> List[Asset]:
        return [
            a for a in self.assets.values()
            if a.company_id == company_id and filters.matches(a)
        ]

    async def update_accumulated_depreciation(self, asset_id: str, amount: float) -> None:
        asset = self.assets.get(asset_id)
        if asset is None:
            raise PersistError(f"Asset {asset_id} not found")
        self.assets[asset_id] = replace(asset, accumulated_depreciation=amount)
        logger.debug("accumulated depreciation for %s set to %.2f", asset_id, amount)

    def get_df(self) -> pd.DataFrame:
        return assets_to_df(self.assets.values())

# ================================
# END store.py
# ================================
