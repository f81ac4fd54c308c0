#=========== ppe_engine/config/params.py

from dataclasses import dataclass, field
import os
from typing import Optional


# Stock (as-of balance) and flow (period expense) use different accrual
# bases. Keep them as two constants.
DAYS_PER_MONTH = 30.44
DAYS_PER_YEAR = 365.25


@dataclass(frozen=True)
class AccountCodes:
    # (code, name)
    fixed_asset: tuple = ("1500", "Property, Plant & Equipment")
    accumulated_depreciation: tuple = ("1540", "Accumulated Depreciation")
    bank: tuple = ("1100", "Bank")
    vat_input: tuple = ("1400", "VAT Input")
    depreciation_expense: tuple = ("5600", "Depreciation Expense")
    impairment_loss: tuple = ("5650", "Impairment Loss")
    gain_on_sale: tuple = ("9500", "Gain on Sale of Assets")
    loss_on_sale: tuple = ("9600", "Loss on Sale of Assets")


DEFAULT_VAT_RATE = 0.15


@dataclass
class EngineSettings:
    fiscal_start_month: int = 1
    vat_rate: float = DEFAULT_VAT_RATE
    account_codes: AccountCodes = field(default_factory=AccountCodes)
    # None -> derived from debug mode when logging is configured
    log_level: Optional[str] = None
    log_format: Optional[str] = None

    def __post_init__(self):
        if not 1 <= self.fiscal_start_month <= 12:
            self.fiscal_start_month = 1
        if not 0 <= self.vat_rate < 1:
            self.vat_rate = DEFAULT_VAT_RATE

    @classmethod
    def from_env(cls) -> "EngineSettings":
        try:
            start_month = int(os.environ.get("PPE_FISCAL_START_MONTH", "1"))
        except ValueError:
            start_month = 1

        try:
            vat_rate = float(os.environ.get("PPE_VAT_RATE", str(DEFAULT_VAT_RATE)))
        except ValueError:
            vat_rate = DEFAULT_VAT_RATE

        return cls(
            fiscal_start_month=start_month,
            vat_rate=vat_rate,
            log_level=os.environ.get("LOG_LEVEL"),
            log_format=os.environ.get("LOG_FORMAT"),
        )

#=========== end params.py
