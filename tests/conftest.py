# tests/conftest.py
"""
Pytest fixtures for the fixed-asset engine tests.

- a small register for one company (two active assets, one disposed)
- an in-memory store seeded with that register
- stores that fail on read or on write
"""

from datetime import date

import pytest

from ppe_engine.core.assets.asset import Asset, AssetStatus
from ppe_engine.core.assets.store import InMemoryAssetStore
from ppe_engine.core.errors import FetchError, PersistError

COMPANY_ID = "company-1"


@pytest.fixture(autouse=True)
def clean_engine_env(monkeypatch):
    """Settings are read from the environment; start every test from the defaults."""
    for name in ("PPE_FISCAL_START_MONTH", "PPE_VAT_RATE", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def company_id():
    return COMPANY_ID


@pytest.fixture
def truck():
    return Asset(
        id="truck",
        cost=12000.0,
        purchase_date=date(2022, 1, 1),
        useful_life_years=5,
        accumulated_depreciation=4800.0,
        company_id=COMPANY_ID,
        description="Delivery truck",
    )


@pytest.fixture
def laptop():
    return Asset(
        id="laptop",
        cost=3000.0,
        purchase_date=date(2023, 6, 15),
        useful_life_years=3,
        accumulated_depreciation=1000.0,
        company_id=COMPANY_ID,
        description="Laptop",
    )


@pytest.fixture
def old_press():
    return Asset(
        id="press",
        cost=50000.0,
        purchase_date=date(2015, 3, 1),
        useful_life_years=10,
        status=AssetStatus.DISPOSED,
        accumulated_depreciation=45000.0,
        company_id=COMPANY_ID,
        description="Printing press",
        disposal_date=date(2024, 2, 10),
    )


@pytest.fixture
def register(truck, laptop, old_press):
    return [truck, laptop, old_press]


@pytest.fixture
def store(register):
    return InMemoryAssetStore(register)


class FailingReadStore:
    """Store whose reads always fail."""

    def __init__(self, exc=None):
        self.exc = exc or FetchError("connection reset")
        self.calls = 0

    async def list_assets(self, company_id, filters):
        self.calls += 1
        raise self.exc

    async def update_accumulated_depreciation(self, asset_id, amount):
        return None


class FailingWriteStore(InMemoryAssetStore):
    """Store whose writes always fail."""

    def __init__(self, assets=None, exc=None):
        super().__init__(assets)
        self.exc = exc or PersistError("write rejected")

    async def update_accumulated_depreciation(self, asset_id, amount):
        raise self.exc


@pytest.fixture
def failing_read_store():
    return FailingReadStore()


@pytest.fixture
def failing_read_store_factory():
    return FailingReadStore


@pytest.fixture
def failing_write_store(register):
    return FailingWriteStore(register)
