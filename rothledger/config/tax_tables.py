# config/tax_tables.py
"""
Versioned federal tax tables (Married Filing Jointly), keyed by tax year.

The engine never inlines these numbers: the bracket provider and the rate
selectors look them up by ``tax_year`` so an annual update is a data change
only. Add a new year by adding an entry to every table below.
"""
from typing import Dict, List, Tuple

import numpy as np

DEFAULT_TAX_YEAR = 2024

# =============================================================================
# 1. Ordinary Income Brackets: (upper_bound, marginal_rate)
# =============================================================================
ORDINARY_BRACKETS: Dict[int, List[Tuple[float, float]]] = {
    2024: [
        (23_200, 0.10), (94_300, 0.12), (201_050, 0.22), (383_900, 0.24),
        (487_450, 0.32), (731_200, 0.35), (np.inf, 0.37),
    ],
    2025: [
        (23_850, 0.10), (96_950, 0.12), (206_700, 0.22), (394_600, 0.24),
        (501_050, 0.32), (751_600, 0.35), (np.inf, 0.37),
    ],
}

STANDARD_DEDUCTION: Dict[int, float] = {
    2024: 29_200,
    2025: 30_000,
}

# =============================================================================
# 2. Long-Term Capital Gains / Qualified Dividend tiers
# =============================================================================
# Rate applies while total income (ordinary + gains) is <= the threshold.
LTCG_TIERS: Dict[int, List[Tuple[float, float]]] = {
    2024: [(94_050, 0.00), (583_750, 0.15), (np.inf, 0.20)],
    2025: [(96_700, 0.00), (600_050, 0.15), (np.inf, 0.20)],
}

# Net Investment Income Tax is statutory and not indexed
NIIT_THRESHOLD: Dict[int, float] = {2024: 250_000, 2025: 250_000}
NIIT_RATE = 0.038

# =============================================================================
# 3. Medicare IRMAA (annual surcharge per household, reporting only)
# =============================================================================
IRMAA_TIERS: Dict[int, List[Tuple[float, float]]] = {
    2024: [
        (206_000, 0), (258_000, 1_400), (322_000, 3_500),
        (386_000, 5_600), (750_000, 7_700), (np.inf, 8_500),
    ],
    2025: [
        (212_000, 0), (266_000, 1_400), (334_000, 3_500),
        (400_000, 5_600), (750_000, 7_700), (np.inf, 8_500),
    ],
}


def get_tax_table(table: Dict[int, object], tax_year: int):
    """Looks up one year's entry, failing loudly for a year we have no data for."""
    try:
        return table[tax_year]
    except KeyError:
        raise KeyError(
            f"No tax table for {tax_year}; available years: {sorted(table)}"
        ) from None


__all__ = [
    "DEFAULT_TAX_YEAR",
    "ORDINARY_BRACKETS",
    "STANDARD_DEDUCTION",
    "LTCG_TIERS",
    "NIIT_THRESHOLD",
    "NIIT_RATE",
    "IRMAA_TIERS",
    "get_tax_table",
]
