"""Tests for a single year of the account ledger."""

from dataclasses import replace

import pytest

from rothledger.engine.ledger import advance_one_year
from rothledger.models import AccountState


def test_first_year_taxes(scenario_inputs):
    state = AccountState.from_inputs(scenario_inputs)
    record, _ = advance_one_year(state, scenario_inputs, 60, 1)

    assert record.dividends == pytest.approx(212_500)
    assert record.conversion_amount == 250_000
    assert record.ordinary_income == pytest.approx(271_250)
    assert record.ordinary_tax == pytest.approx(44_177)
    assert record.qualified_dividend_tax == pytest.approx(35_955)
    assert record.state_tax == pytest.approx(23_125)
    assert record.shortfall == pytest.approx(40_757)
    assert record.marginal_rate == 0.24
    assert record.bracket_room == pytest.approx(383_900 - 242_050)
    assert abs(record.stocks_sold - record.capital_gains_tax - record.shortfall) < 10
    assert record.conservative_tax == pytest.approx(record.total_tax * 1.2)


def test_opening_state_is_untouched(scenario_inputs):
    state = AccountState.from_inputs(scenario_inputs)
    snapshot = replace(state)
    advance_one_year(state, scenario_inputs, 60, 1)
    assert state == snapshot


def test_money_only_leaves_through_sales_and_rmds(scenario_inputs):
    state = AccountState.from_inputs(scenario_inputs)
    record, next_state = advance_one_year(state, scenario_inputs, 60, 1)

    expected = (state.total - record.stocks_sold - record.rmd) * 1.09
    assert next_state.total == pytest.approx(expected)
    assert record.roth_balance == pytest.approx(250_000 * 1.09)


def test_cost_basis_removed_at_pre_sale_ratio(scenario_inputs):
    state = AccountState.from_inputs(scenario_inputs)
    record, next_state = advance_one_year(state, scenario_inputs, 60, 1)

    assert next_state.cost_basis == pytest.approx(4_250_000 - record.stocks_sold * 0.5)
    assert 0 <= next_state.cost_basis <= next_state.taxable_balance


def test_qcd_reduces_taxable_rmd(scenario_inputs):
    inputs = replace(scenario_inputs, current_age=75, ira_amount=1_000_000, qcd_amount=20_000)
    state = AccountState.from_inputs(inputs)
    record, _ = advance_one_year(state, inputs, 75, 1)

    assert record.rmd == pytest.approx(1_000_000 / 24.6)
    assert record.qcd == 20_000
    assert record.conversion_amount == 0
    assert record.ordinary_income == pytest.approx(
        record.rmd - 20_000 + record.ordinary_dividends + record.taxable_social_security
    )


def test_social_security_starts_at_claim_age(scenario_inputs):
    state = AccountState.from_inputs(scenario_inputs)
    before, _ = advance_one_year(state, scenario_inputs, 69, 10)
    after, _ = advance_one_year(state, scenario_inputs, 70, 11)

    assert before.social_security == 0
    assert after.social_security == 55_000
    assert after.taxable_social_security == pytest.approx(46_750)
