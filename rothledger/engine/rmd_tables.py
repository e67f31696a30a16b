# engine/rmd_tables.py

"""
RMD divisor lookup (IRS Uniform Lifetime Table, SECURE 2.0 start age of 73).

Only ages 73–90 are tabulated because the projection ends at 90; any older age
reuses the age-90 divisor as an approximation instead of failing.
"""

from typing import Dict, Optional

from rothledger.config.projection_assumptions import rmd_start_age

# =============================================================================
# UNIFORM LIFETIME TABLE (AGES 73–90)
# =============================================================================
RMD_DIVISORS: Dict[int, float] = {
    73: 26.5, 74: 25.5, 75: 24.6, 76: 23.7, 77: 22.9, 78: 22.0,
    79: 21.1, 80: 20.2, 81: 19.4, 82: 18.5, 83: 17.7, 84: 16.8,
    85: 16.0, 86: 15.2, 87: 14.4, 88: 13.7, 89: 12.9, 90: 12.2,
}

_LAST_TABULATED_AGE = max(RMD_DIVISORS)


def rmd_divisor(age: int) -> Optional[float]:
    """
    Returns the life-expectancy divisor for ``age``, or None before RMDs begin.
    """
    if age < rmd_start_age:
        return None
    return RMD_DIVISORS.get(age, RMD_DIVISORS[_LAST_TABULATED_AGE])


def rmd_amount(age: int, pretax_balance: float) -> float:
    divisor = rmd_divisor(age)
    if divisor is None or pretax_balance <= 0:
        return 0.0
    return pretax_balance / divisor


__all__ = ["RMD_DIVISORS", "rmd_divisor", "rmd_amount"]
