"""Tests for the DataFrame and summary helpers."""

import pytest

from rothledger.engine.simulator import run
from rothledger.utils.reporting import projection_to_frame, summarize_projection


def test_projection_to_frame(scenario_inputs):
    records = run(scenario_inputs)
    df = projection_to_frame(records)
    assert len(df) == 31
    assert df.index.name == "age"
    assert df.index[0] == 60
    assert "cost_basis_pct" in df.columns
    assert df.loc[60, "cost_basis_pct"] == pytest.approx(records[0].cost_basis_pct)


def test_empty_frame_keeps_columns():
    df = projection_to_frame([])
    assert df.empty
    assert "total_portfolio" in df.columns


def test_summarize_projection(scenario_inputs):
    records = run(scenario_inputs)
    summary = summarize_projection(records)
    assert summary["years"] == 31
    assert summary["total_conversions"] == pytest.approx(250_000 * 13)
    assert summary["total_tax_on_tax"] == pytest.approx(sum(r.capital_gains_tax for r in records))
    assert summary["final_portfolio"] == records[-1].total_portfolio
    assert not summary["depleted"]


def test_summarize_empty_projection():
    summary = summarize_projection([])
    assert summary["years"] == 0
    assert summary["final_portfolio"] == 0.0
