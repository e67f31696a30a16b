# tax_on_tax.py
#
# Sizes the taxable-account sale needed to net a cash shortfall after the
# capital gains tax the sale itself triggers.
#

import logging

from rothledger.config.projection_assumptions import solver_max_iterations, solver_tolerance
from rothledger.config.tax_tables import DEFAULT_TAX_YEAR
from rothledger.engine.tax_engine import capital_gains_tax
from rothledger.models import SaleResult

logger = logging.getLogger(__name__)


def _sale_result(stocks_sold, basis_fraction, ordinary_income, state_rate, tax_year, iterations, exhausted):
    gains = stocks_sold * (1 - basis_fraction)
    tax = capital_gains_tax(gains, ordinary_income, state_rate, tax_year)
    return SaleResult(
        stocks_sold=stocks_sold,
        capital_gains=gains,
        capital_gains_tax=tax,
        iterations=iterations,
        exhausted=exhausted,
    )


def solve_required_sale(
    shortfall: float,
    taxable_balance: float,
    cost_basis: float,
    ordinary_income_before_sale: float,
    state_rate: float,
    tax_year: int = DEFAULT_TAX_YEAR,
    max_iterations: int = solver_max_iterations,
    tolerance: float = solver_tolerance,
) -> SaleResult:
    """
    Fixed-point iteration for the gross sale S with S - tax(S) == shortfall.

    Args:
        shortfall: Spendable cash still needed after all other income and taxes.
        cost_basis: Basis of the whole taxable account; the sale realizes
            gains at the account's current basis fraction.
        ordinary_income_before_sale: Stacks under the gain when picking the
            LTCG tier.
        state_rate: Flat state rate as a fraction.

    Returns:
        SaleResult. ``exhausted`` is True when the whole account was sold and
        the shortfall may not be fully met; that is a valid outcome, not an error.
    """
    if shortfall <= 0 or taxable_balance <= 0:
        return SaleResult()

    basis_fraction = min(1.0, max(0.0, cost_basis / taxable_balance))

    stocks_sold = shortfall
    for iteration in range(1, max_iterations + 1):
        if stocks_sold > taxable_balance:
            logger.debug("Taxable account exhausted covering shortfall of %.0f", shortfall)
            return _sale_result(taxable_balance, basis_fraction, ordinary_income_before_sale,
                                state_rate, tax_year, iteration, True)

        gains = stocks_sold * (1 - basis_fraction)
        tax = capital_gains_tax(gains, ordinary_income_before_sale, state_rate, tax_year)
        net_proceeds = stocks_sold - tax

        if abs(net_proceeds - shortfall) < tolerance:
            return SaleResult(
                stocks_sold=stocks_sold,
                capital_gains=gains,
                capital_gains_tax=tax,
                iterations=iteration,
            )

        stocks_sold = shortfall + tax

    # Iteration cap hit (typically oscillating across an LTCG tier boundary)
    logger.warning(
        "Tax-on-tax solver did not converge in %d iterations (shortfall %.0f); using best estimate",
        max_iterations, shortfall,
    )
    stocks_sold = min(stocks_sold, taxable_balance)
    return _sale_result(stocks_sold, basis_fraction, ordinary_income_before_sale,
                        state_rate, tax_year, max_iterations, stocks_sold >= taxable_balance)


__all__ = ["solve_required_sale"]
