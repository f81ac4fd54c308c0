# ================================
# ppe_engine/core/ledger/journal_entry.py
# ================================

import logging
from dataclasses import dataclass
from datetime import date
from typing import List

import pandas as pd

from ppe_engine.core.errors import UnbalancedEntryError

logger = logging.getLogger(__name__)

BALANCE_TOLERANCE = 0.01


@dataclass
class JournalEntry:
    """
    One journal line pair: a debit and its matching credit.

    entries_to_df() expands each JournalEntry into a debit row and a credit row.
    """

    date: date          # posting date
    description: str
    dr_account: str     # debit account code
    dr_amount: float
    cr_account: str     # credit account code
    cr_amount: float

    def __post_init__(self):
        if abs(self.dr_amount - self.cr_amount) > BALANCE_TOLERANCE:
            logger.warning(
                "Unbalanced JournalEntry on %s: %s %s / %s %s (%s)",
                self.date, self.dr_account, self.dr_amount,
                self.cr_account, self.cr_amount, self.description,
            )


def make_entry_pair(
    date,
    debit_account: str,
    credit_account: str,
    amount: float,
    description: str = "",
) -> List[JournalEntry]:
    """
    Balanced entry for one amount.

        make_entry_pair(date, "5600", "1540", 200.0, "Depreciation - Truck")
    """
    if not debit_account or not credit_account:
        raise ValueError("debit_account / credit_account must be given")

    return [
        JournalEntry(
            date=date,
            description=description,
            dr_account=debit_account,
            dr_amount=amount,
            cr_account=credit_account,
            cr_amount=amount,
        )
    ]


def total_debits(entries: List[JournalEntry]) -> float:
    return sum(e.dr_amount for e in entries)


def total_credits(entries: List[JournalEntry]) -> float:
    return sum(e.cr_amount for e in entries)


def ensure_balanced(entries: List[JournalEntry]):
    debits = round(total_debits(entries), 2)
    credits = round(total_credits(entries), 2)
    if abs(debits - credits) > BALANCE_TOLERANCE:
        raise UnbalancedEntryError(f"Unbalanced entries: debits {debits} / credits {credits}")


def entries_to_df(entries: List[JournalEntry]) -> pd.DataFrame:
    """
    Expand JournalEntry pairs into debit/credit rows for display and totals.
    """
    if not entries:
        return pd.DataFrame(
            columns=["id", "date", "account", "dr_cr", "amount", "description"]
        )

    rows = []
    entry_id = 1

    for e in entries:
        rows.append({
            "id": entry_id,
            "date": e.date,
            "account": e.dr_account,
            "dr_cr": "debit",
            "amount": e.dr_amount,
            "description": e.description
        })
        entry_id += 1

        rows.append({
            "id": entry_id,
            "date": e.date,
            "account": e.cr_account,
            "dr_cr": "credit",
            "amount": e.cr_amount,
            "description": e.description
        })
        entry_id += 1

    return pd.DataFrame(rows)

# ================================
# END journal_entry.py
# ================================
