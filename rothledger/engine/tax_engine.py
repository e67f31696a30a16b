"""
Federal + flat-state tax calculator for the yearly ledger.

It contains the bracket provider (inflation-indexed ordinary brackets), the
progressive calculator, and the preferential-rate selectors, relying entirely
on the versioned tables in config.tax_tables.
"""
from typing import Dict, List, Optional, Tuple

import numpy as np

from rothledger.config.tax_tables import (
    DEFAULT_TAX_YEAR,
    ORDINARY_BRACKETS,
    STANDARD_DEDUCTION,
    LTCG_TIERS,
    NIIT_THRESHOLD,
    NIIT_RATE,
    IRMAA_TIERS,
    get_tax_table,
)
from rothledger.config.projection_assumptions import bracket_inflation_rate

BracketLadder = List[Tuple[float, float]]


# --- 1. Bracket Provider ---

def brackets_for_year(
    simulated_year_index: int,
    tax_year: int = DEFAULT_TAX_YEAR,
    inflation_rate: float = bracket_inflation_rate,
) -> BracketLadder:
    """
    Returns the ordinary (upper_bound, rate) ladder for the given simulated year.

    Year 1 uses the base table as-is; every later year compounds
    ``inflation_rate`` onto the bounds. Rates are never indexed.
    """
    inflation_factor = (1 + inflation_rate) ** max(0, simulated_year_index - 1)
    base_brackets = get_tax_table(ORDINARY_BRACKETS, tax_year)

    return [
        (upper * inflation_factor if np.isfinite(upper) else np.inf, rate)
        for upper, rate in base_brackets
    ]


def standard_deduction(tax_year: int = DEFAULT_TAX_YEAR) -> float:
    return float(get_tax_table(STANDARD_DEDUCTION, tax_year))


# --- 2. Progressive Calculator ---

def tax_owed(gross_ordinary_income: float, standard_deduction: float, ladder: BracketLadder) -> float:
    """Tax on ordinary income, each rate applied only to its own band."""
    taxable_income = max(0.0, gross_ordinary_income - standard_deduction)

    tax = 0.0
    lower = 0.0
    for upper, rate in ladder:
        if taxable_income <= lower:
            break
        tax += (min(taxable_income, upper) - lower) * rate
        lower = upper

    return tax


def marginal_rate(taxable_income: float, ladder: BracketLadder) -> float:
    """Rate of the bracket the last dollar of ``taxable_income`` falls in."""
    for upper, rate in ladder:
        if taxable_income <= upper:
            return rate
    return ladder[-1][1]


def bracket_headroom(taxable_income: float, ladder: BracketLadder) -> Dict[str, Optional[float]]:
    """
    How much more ordinary income fits before the next bracket.

    Returns a dict with the current rate, the next rate (None in the top
    bracket) and the room left in the current bracket (inf in the top bracket).
    """
    taxable_income = max(0.0, taxable_income)
    for i, (upper, rate) in enumerate(ladder):
        if taxable_income <= upper:
            next_rate = ladder[i + 1][1] if i + 1 < len(ladder) else None
            return {
                "current_rate": rate,
                "next_rate": next_rate,
                "room": upper - taxable_income,
            }
    return {"current_rate": ladder[-1][1], "next_rate": None, "room": np.inf}


# --- 3. Preferential Rates ---

def ltcg_rate(total_income_including_gains: float, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    """0% / 15% / 20% step function; no smoothing between tiers."""
    for threshold, rate in get_tax_table(LTCG_TIERS, tax_year):
        if total_income_including_gains <= threshold:
            return rate
    return get_tax_table(LTCG_TIERS, tax_year)[-1][1]


def niit_applies(total_income: float, tax_year: int = DEFAULT_TAX_YEAR) -> bool:
    return total_income > get_tax_table(NIIT_THRESHOLD, tax_year)


def niit_rate(total_income: float, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    return NIIT_RATE if niit_applies(total_income, tax_year) else 0.0


def qualified_dividend_tax(
    qualified_dividends: float,
    ordinary_income: float,
    tax_year: int = DEFAULT_TAX_YEAR,
) -> Tuple[float, float, float]:
    """
    Tax on qualified dividends at the tier selected by ordinary + qualified income.

    Returns:
        tuple[float, float, float]: (tax, ltcg_rate, niit_rate)
    """
    income_base = ordinary_income + qualified_dividends
    rate = ltcg_rate(income_base, tax_year)
    surtax = niit_rate(income_base, tax_year)
    return qualified_dividends * (rate + surtax), rate, surtax


def capital_gains_tax(
    capital_gains: float,
    ordinary_income: float,
    state_rate: float,
    tax_year: int = DEFAULT_TAX_YEAR,
) -> float:
    """Federal LTCG (+NIIT) plus flat state tax on a realized gain."""
    if capital_gains <= 0:
        return 0.0
    income_base = ordinary_income + capital_gains
    federal_rate = ltcg_rate(income_base, tax_year) + niit_rate(income_base, tax_year)
    return capital_gains * (federal_rate + state_rate)


# --- 4. Medicare IRMAA (reporting only) ---

def irmaa_surcharge(magi: float, tax_year: int = DEFAULT_TAX_YEAR) -> float:
    for threshold, surcharge in get_tax_table(IRMAA_TIERS, tax_year):
        if magi <= threshold:
            return float(surcharge)
    return float(get_tax_table(IRMAA_TIERS, tax_year)[-1][1])


__all__ = [
    "BracketLadder",
    "brackets_for_year",
    "standard_deduction",
    "tax_owed",
    "marginal_rate",
    "bracket_headroom",
    "ltcg_rate",
    "niit_applies",
    "niit_rate",
    "qualified_dividend_tax",
    "capital_gains_tax",
    "irmaa_surcharge",
]
