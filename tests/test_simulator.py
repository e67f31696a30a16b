"""Tests for the projection driver and scenario helpers."""

from dataclasses import replace

import pytest

from rothledger.engine.simulator import run, cached_run, run_scenarios, compare_strategies
from rothledger.models import SimulationInputError


def test_scenario_runs_to_90(scenario_inputs):
    records = run(scenario_inputs)
    assert len(records) == 31
    assert [r.age for r in records] == list(range(60, 91))
    assert [r.year for r in records] == list(range(1, 32))


def test_rmds_start_at_73(scenario_inputs):
    for r in run(scenario_inputs):
        if r.age < 73:
            assert r.rmd == 0
        else:
            assert r.rmd > 0


def test_no_conversions_from_73(scenario_inputs):
    for r in run(scenario_inputs):
        if r.age >= 73:
            assert r.conversion_amount == 0
        else:
            assert r.conversion_amount == 250_000


def test_portfolio_stays_positive(scenario_inputs):
    assert all(r.total_portfolio > 0 for r in run(scenario_inputs))


def test_runs_are_deterministic(scenario_inputs):
    assert run(scenario_inputs) == run(scenario_inputs)


def test_cached_run_reuses_result(scenario_inputs):
    first = cached_run(scenario_inputs)
    assert cached_run(replace(scenario_inputs)) is first
    assert list(first) == run(scenario_inputs)


def test_empty_taxable_account_never_sells(scenario_inputs):
    records = run(replace(scenario_inputs, taxable_amount=0))
    assert any(r.shortfall > 0 for r in records)
    for r in records:
        assert r.stocks_sold == 0
        assert r.capital_gains == 0
        assert r.capital_gains_tax == 0


def test_stops_once_depleted(scenario_inputs):
    inputs = replace(scenario_inputs, taxable_amount=50_000, ira_amount=0, expected_growth_rate=0)
    records = run(inputs)
    assert len(records) == 1
    assert records[0].taxable_balance == 0
    assert records[0].total_portfolio < 10_000


def test_pretax_running_dry_is_not_an_error(scenario_inputs):
    records = run(replace(scenario_inputs, ira_amount=500_000))
    assert records[-1].pretax_balance == 0
    assert all(r.conversion_amount == 0 for r in records if r.age >= 63)


def test_start_past_horizon_projects_nothing(scenario_inputs):
    assert run(replace(scenario_inputs, current_age=95)) == []


def test_run_scenarios_are_independent(scenario_inputs):
    results = run_scenarios({
        "base": scenario_inputs,
        "no_conversion": replace(scenario_inputs, conversion_amount=0),
    })
    assert results["base"] == run(scenario_inputs)
    assert all(r.conversion_amount == 0 for r in results["no_conversion"])


def test_compare_strategies(scenario_inputs):
    df = compare_strategies(scenario_inputs)
    assert list(df.index) == ["steady", "front_load"]
    assert df.loc["front_load", "total_conversions"] > df.loc["steady", "total_conversions"]
    assert df.loc["steady", "years"] == 31


def test_fractional_age_rejected_before_projecting(scenario_inputs):
    with pytest.raises(SimulationInputError, match="current_age"):
        run(replace(scenario_inputs, current_age=60.5))


def test_nan_growth_rejected_before_projecting(scenario_inputs):
    with pytest.raises(SimulationInputError, match="expected_growth_rate"):
        run(replace(scenario_inputs, expected_growth_rate=float("nan")))


def test_compare_strategies_picks_lowest_tax(scenario_inputs):
    df = compare_strategies(scenario_inputs)
    best = df.index[df["best"]][0]
    other = "front_load" if best == "steady" else "steady"

    assert df["best"].sum() == 1
    assert df.loc[best, "total_taxes"] <= df.loc[other, "total_taxes"]
    assert df.loc[best, "tax_savings"] == 0
    assert df.loc[other, "tax_savings"] == pytest.approx(
        df.loc[other, "total_taxes"] - df.loc[best, "total_taxes"]
    )
