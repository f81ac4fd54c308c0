# ================================
# ppe_engine/core/tax/tax_splitter.py
# ================================

import math


def _to_cents(x: float, rounding: str) -> float:
    if rounding == "floor":
        return math.floor(x * 100 + 1e-9) / 100
    return round(x, 2)


def split_vat(
    gross_amount: float,
    vat_rate: float,
    non_claimable_ratio: float = 0.0,
    rounding: str = "round"
) -> dict:
    """
    Split a VAT-inclusive amount into
      1) tax_base: the amount excluding VAT
      2) vat_claimable: input VAT that can be claimed back
      3) vat_non_claimable: input VAT that cannot be claimed (capitalised into cost)

    The three parts always add back up to gross_amount.
    """

    if gross_amount <= 0:
        return {
            "tax_base": 0.0,
            "vat_claimable": 0.0,
            "vat_non_claimable": 0.0,
        }

    tax_base = _to_cents(gross_amount / (1 + vat_rate), rounding)
    vat = round(gross_amount - tax_base, 2)

    vat_claimable = _to_cents(vat * (1.0 - non_claimable_ratio), rounding)
    vat_non_claimable = round(vat - vat_claimable, 2)

    return {
        "tax_base": tax_base,
        "vat_claimable": vat_claimable,
        "vat_non_claimable": vat_non_claimable,
    }

# ================================
# END tax_splitter.py
# ================================
