"""Tests for the figures and the dashboard callback helper."""

from rothledger.callbacks.simulation_callbacks import build_results
from rothledger.engine.simulator import run
from rothledger.utils.plotting import generate_all_plots, get_figure_ids


def test_one_figure_per_id(scenario_inputs):
    figures = generate_all_plots(run(scenario_inputs))
    assert len(figures) == len(get_figure_ids())
    assert len(figures[0].data) == 3
    assert len(figures[1].data) == 4


def test_empty_projection_shows_placeholder():
    for fig in generate_all_plots([]):
        assert fig.layout.annotations[0].text == "No data available"


def test_build_results_rows():
    header, rows, figures = build_results({"currentAge": 60})
    assert len(rows) == 31
    assert rows[0]["age"] == 60
    assert len(figures) == len(get_figure_ids())


def test_build_results_reports_bad_input():
    header, rows, figures = build_results({"currentAge": -5})
    assert header.children.startswith("Invalid input")
    assert rows == []
    assert len(figures) == len(get_figure_ids())


def test_build_results_reports_unparseable_amount():
    header, rows, _ = build_results({"taxableAmount": "lots"})
    assert "taxable_amount is not a dollar amount" in header.children
    assert rows == []


def test_top_bracket_room_left_blank_in_grid():
    _, rows, _ = build_results({"conversionAmount": 2_000_000})
    assert rows[0]["bracket_room"] is None
    assert rows[0]["conversion_amount"] == 2_000_000
