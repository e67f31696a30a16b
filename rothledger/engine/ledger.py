# engine/ledger.py

import logging
from typing import Tuple

from rothledger.config.projection_assumptions import (
    dividend_yield,
    qualified_dividend_pct,
    social_security_taxable_pct,
    qcd_start_age,
    qcd_annual_limit,
)
from rothledger.engine.rmd_tables import rmd_amount
from rothledger.engine.roth_conversions import conversion_amount
from rothledger.engine.tax_engine import (
    brackets_for_year,
    standard_deduction,
    tax_owed,
    marginal_rate,
    bracket_headroom,
    qualified_dividend_tax,
    irmaa_surcharge,
)
from rothledger.engine.tax_on_tax import solve_required_sale
from rothledger.models import AccountState, SimulationInput, YearlyProjectionRecord

logger = logging.getLogger(__name__)


def advance_one_year(
    state: AccountState,
    inputs: SimulationInput,
    age: int,
    year_index: int,
) -> Tuple[YearlyProjectionRecord, AccountState]:
    """
    Runs one simulated year against the opening balances in ``state``.

    The steps run in a fixed order because each one feeds the next: income,
    RMD, conversion, taxes, cash shortfall, taxable sale, balance updates,
    then growth. Returns the year's record and the opening state for the
    following year; ``state`` itself is never modified.
    """
    tax_year = inputs.tax_year
    state_rate = inputs.state_rate

    # === STEP 1: Dividends (qualified vs ordinary) ===
    dividends = state.taxable_balance * dividend_yield
    qualified_dividends = dividends * qualified_dividend_pct
    ordinary_dividends = dividends - qualified_dividends

    # === STEP 2: Social Security ===
    social_security = inputs.social_security_amount if age >= inputs.social_security_start_age else 0.0
    taxable_social_security = social_security * social_security_taxable_pct

    # === STEP 3: RMD (a QCD satisfies part of it without becoming income) ===
    rmd = rmd_amount(age, state.pretax_balance)
    qcd = min(inputs.qcd_amount, rmd, qcd_annual_limit) if age >= qcd_start_age else 0.0
    taxable_rmd = rmd - qcd

    # === STEP 4: Roth conversion from what the RMD leaves behind ===
    conversion = conversion_amount(
        age,
        year_index,
        state.pretax_balance - rmd,
        inputs.conversion_amount,
        inputs.front_load_conversions,
        continue_after_rmd=inputs.continue_after_rmd,
        taper=inputs.front_load_taper,
    )

    # === STEP 5: Ordinary income tax (marginal stacking, indexed brackets) ===
    ordinary_income = conversion + taxable_rmd + ordinary_dividends + taxable_social_security
    ladder = brackets_for_year(year_index, tax_year, inputs.bracket_inflation)
    deduction = standard_deduction(tax_year)
    ordinary_tax = tax_owed(ordinary_income, deduction, ladder)

    # === STEP 6: Qualified dividend tax (+NIIT) ===
    dividend_tax, dividend_ltcg_rate, dividend_niit_rate = qualified_dividend_tax(
        qualified_dividends, ordinary_income, tax_year
    )

    # === STEP 7: Flat state tax ===
    state_tax = (ordinary_income + qualified_dividends) * state_rate
    income_tax = ordinary_tax + dividend_tax + state_tax

    # === STEP 8: After-tax cash (a conversion produces no spendable cash) ===
    after_tax_income = dividends + taxable_rmd + social_security - income_tax

    # === STEP 9: Shortfall against living expenses ===
    shortfall = max(0.0, inputs.living_expenses - after_tax_income)

    # === STEP 10: Tax-on-tax sale from the taxable account ===
    sale = solve_required_sale(
        shortfall,
        state.taxable_balance,
        state.cost_basis,
        ordinary_income,
        state_rate,
        tax_year=tax_year,
    )

    # === STEP 11: Taxable balance and basis (pre-sale basis ratio) ===
    taxable_balance = max(0.0, state.taxable_balance - sale.stocks_sold)
    cost_basis = state.cost_basis
    if sale.stocks_sold > 0 and state.taxable_balance > 0:
        cost_basis -= sale.stocks_sold * (state.cost_basis / state.taxable_balance)

    # === STEP 12: Pre-tax and Roth ===
    pretax_balance = max(0.0, state.pretax_balance - conversion - rmd)
    roth_balance = state.roth_balance + conversion

    # === STEP 13: Growth (basis does not grow) ===
    growth = 1 + inputs.growth_rate
    taxable_balance *= growth
    pretax_balance *= growth
    roth_balance *= growth
    cost_basis = min(max(0.0, cost_basis), taxable_balance)

    # === STEP 14: Record ===
    total_tax = income_tax + sale.capital_gains_tax
    total_income = dividends + social_security + rmd
    rate_base = total_income + conversion
    magi = ordinary_income + qualified_dividends + sale.capital_gains
    taxable_ordinary_income = max(0.0, ordinary_income - deduction)
    next_state = AccountState(
        taxable_balance=taxable_balance,
        cost_basis=cost_basis,
        pretax_balance=pretax_balance,
        roth_balance=roth_balance,
    )

    record = YearlyProjectionRecord(
        year=year_index,
        age=age,
        dividends=dividends,
        qualified_dividends=qualified_dividends,
        ordinary_dividends=ordinary_dividends,
        rmd=rmd,
        qcd=qcd,
        social_security=social_security,
        taxable_social_security=taxable_social_security,
        total_income=total_income,
        ordinary_income=ordinary_income,
        conversion_amount=conversion,
        stocks_sold=sale.stocks_sold,
        capital_gains=sale.capital_gains,
        ordinary_tax=ordinary_tax,
        qualified_dividend_tax=dividend_tax,
        capital_gains_tax=sale.capital_gains_tax,
        state_tax=state_tax,
        total_tax=total_tax,
        conservative_tax=total_tax * inputs.conservative_buffer,
        living_expenses=inputs.living_expenses,
        after_tax_income=after_tax_income,
        shortfall=shortfall,
        taxable_balance=taxable_balance,
        cost_basis=cost_basis,
        pretax_balance=pretax_balance,
        roth_balance=roth_balance,
        total_portfolio=next_state.total,
        marginal_rate=marginal_rate(taxable_ordinary_income, ladder),
        bracket_room=bracket_headroom(taxable_ordinary_income, ladder)["room"],
        ltcg_rate=dividend_ltcg_rate,
        niit_rate=dividend_niit_rate,
        effective_rate=total_tax / rate_base if rate_base > 0 else 0.0,
        magi=magi,
        irmaa_surcharge=irmaa_surcharge(magi, tax_year),
    )

    logger.debug(
        "age %d: conversion=%.0f rmd=%.0f sold=%.0f tax=%.0f total=%.0f",
        age, conversion, rmd, sale.stocks_sold, total_tax, next_state.total,
    )
    return record, next_state


__all__ = ["advance_one_year"]
