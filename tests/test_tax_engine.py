"""Tests for the bracket provider, progressive calculator and rate selectors."""

import numpy as np
import pytest

from rothledger.config.tax_tables import get_tax_table, ORDINARY_BRACKETS
from rothledger.engine import tax_engine


def test_year_one_uses_base_table(base_ladder):
    assert base_ladder == get_tax_table(ORDINARY_BRACKETS, 2024)


def test_later_years_index_bounds_not_rates(base_ladder):
    year_two = tax_engine.brackets_for_year(2)
    assert year_two[0][0] == pytest.approx(23_200 * 1.03)
    assert year_two[1][0] == pytest.approx(94_300 * 1.03)
    assert [rate for _, rate in year_two] == [rate for _, rate in base_ladder]
    assert year_two[-1][0] == np.inf


def test_zero_and_deducted_income_owe_nothing(base_ladder, deduction):
    assert tax_engine.tax_owed(0, deduction, base_ladder) == 0
    assert tax_engine.tax_owed(deduction, deduction, base_ladder) == 0


def test_first_bracket_boundary(base_ladder, deduction):
    assert tax_engine.tax_owed(deduction + 23_200, deduction, base_ladder) == pytest.approx(2_320)


def test_stacks_across_brackets(base_ladder, deduction):
    # 10% of 23,200 + 12% of 71,100 + 22% of 5,700
    assert tax_engine.tax_owed(deduction + 100_000, deduction, base_ladder) == pytest.approx(12_106)


def test_top_bracket(base_ladder, deduction):
    assert tax_engine.tax_owed(deduction + 1_000_000, deduction, base_ladder) == pytest.approx(296_125.5)


def test_tax_is_continuous_at_bounds(base_ladder):
    for upper, _ in base_ladder[:-1]:
        below = tax_engine.tax_owed(upper - 0.01, 0, base_ladder)
        above = tax_engine.tax_owed(upper + 0.01, 0, base_ladder)
        assert above - below < 1.0


def test_tax_is_monotonic_and_below_top_rate(base_ladder):
    incomes = np.linspace(0, 2_000_000, 201)
    taxes = [tax_engine.tax_owed(i, 0, base_ladder) for i in incomes]
    assert all(b >= a for a, b in zip(taxes, taxes[1:]))
    assert all(t <= i * 0.37 + 1e-6 for t, i in zip(taxes, incomes))


def test_marginal_rate(base_ladder):
    assert tax_engine.marginal_rate(0, base_ladder) == 0.10
    assert tax_engine.marginal_rate(150_000, base_ladder) == 0.22
    assert tax_engine.marginal_rate(5_000_000, base_ladder) == 0.37


def test_bracket_headroom(base_ladder):
    headroom = tax_engine.bracket_headroom(50_000, base_ladder)
    assert headroom["current_rate"] == 0.12
    assert headroom["next_rate"] == 0.22
    assert headroom["room"] == pytest.approx(44_300)

    top = tax_engine.bracket_headroom(1_000_000, base_ladder)
    assert top["current_rate"] == 0.37
    assert top["next_rate"] is None
    assert top["room"] == np.inf


@pytest.mark.parametrize("income, expected", [
    (0, 0.0),
    (94_050, 0.0),
    (94_051, 0.15),
    (583_750, 0.15),
    (583_751, 0.20),
])
def test_ltcg_tiers(income, expected):
    assert tax_engine.ltcg_rate(income) == expected


def test_niit_threshold():
    assert tax_engine.niit_rate(250_000) == 0.0
    assert tax_engine.niit_rate(250_001) == pytest.approx(0.038)


def test_qualified_dividend_tax_in_zero_tier():
    assert tax_engine.qualified_dividend_tax(10_000, 50_000) == (0.0, 0.0, 0.0)


def test_capital_gains_tax_includes_niit_and_state():
    assert tax_engine.capital_gains_tax(100_000, 200_000, 0.05) == pytest.approx(23_800)
    assert tax_engine.capital_gains_tax(0, 200_000, 0.05) == 0.0


def test_irmaa_surcharge():
    assert tax_engine.irmaa_surcharge(200_000) == 0.0
    assert tax_engine.irmaa_surcharge(300_000) == 3_500
    assert tax_engine.irmaa_surcharge(1_000_000) == 8_500


def test_unknown_tax_year_fails_loudly():
    with pytest.raises(KeyError, match="available years"):
        tax_engine.brackets_for_year(1, tax_year=1999)


def test_average_rate_never_falls(base_ladder):
    incomes = np.linspace(1_000, 3_000_000, 600)
    averages = [tax_engine.tax_owed(i, 0, base_ladder) / i for i in incomes]
    assert all(b >= a - 1e-12 for a, b in zip(averages, averages[1:]))
