# engine/roth_conversions.py

from rothledger.config.projection_assumptions import (
    rmd_start_age,
    post_rmd_conversion_cap,
)
from rothledger.models import TaperSchedule


def conversion_amount(
    age: int,
    year_index: int,
    pretax_balance: float,
    target_amount: float,
    front_load_flag: bool,
    continue_after_rmd: bool = False,
    taper: TaperSchedule = TaperSchedule(),
) -> float:
    """
    Calculates this year's Roth conversion.

    Args:
        year_index: 1 for the first simulated year.
        pretax_balance: Funds still available to convert (after this year's RMD).
        front_load_flag: Scale the target by a factor that tapers with each year
            elapsed, converting more while rates are low and before RMDs start.
        continue_after_rmd: Keep converting at/after RMD age, capped at
            post_rmd_conversion_cap. Off by default.
    """
    if pretax_balance <= 0 or target_amount <= 0:
        return 0.0

    if age >= rmd_start_age:
        if not continue_after_rmd:
            return 0.0
        conversion = min(target_amount, post_rmd_conversion_cap)
    elif front_load_flag:
        conversion = target_amount * taper.factor(year_index - 1)
    else:
        conversion = target_amount

    return min(conversion, pretax_balance)


__all__ = ["conversion_amount"]
