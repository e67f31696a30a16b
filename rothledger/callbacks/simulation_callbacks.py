# callbacks/simulation_callbacks.py

import logging
import math
from dataclasses import asdict

from dash import Input, Output, State, html
from dash.exceptions import PreventUpdate
import plotly.graph_objects as go

from rothledger.engine.simulator import cached_run
from rothledger.models import SimulationInputError
from rothledger.utils.currency import format_currency_output
from rothledger.utils.input_adapter import get_simulation_input
from rothledger.utils.plotting import generate_all_plots, get_figure_ids
from rothledger.utils.reporting import summarize_projection

logger = logging.getLogger(__name__)


def _grid_value(value):
    # JSON has no inf (top-bracket room); the grid shows a blank instead
    if isinstance(value, float):
        return round(value) if math.isfinite(value) else None
    return value


def create_summary_header(summary):
    """Headline totals above the yearly table."""
    style = {"fontWeight": "bold", "fontSize": "20px", "margin": "0 15px", "textAlign": "center"}
    return html.Div([
        html.H3(f"Years: {summary['years']}", style=style),
        html.H3(f"Converted: {format_currency_output(summary['total_conversions'])}", style=style),
        html.H3(f"Taxes (buffered): {format_currency_output(summary['total_conservative_taxes'])}", style=style),
        html.H3(f"Tax-on-tax: {format_currency_output(summary['total_tax_on_tax'])}", style=style),
        html.H3(f"Final Portfolio: {format_currency_output(summary['final_portfolio'])}", style=style),
    ], style={'display': 'flex', 'flexWrap': 'wrap', 'justifyContent': 'center', 'padding': '15px'})


def build_results(ui_values):
    """
    Runs the projection for one set of UI values.

    Returns (summary_header, row_data, figures). Input errors come back as a
    red message with empty results instead of raising into Dash.
    """
    try:
        inputs = get_simulation_input(**ui_values)
    except SimulationInputError as e:
        logger.warning("Rejected dashboard input: %s", e)
        error_div = html.Div(f"Invalid input: {e}", style={"color": "red", "fontSize": "18px", "whiteSpace": "pre-wrap"})
        return error_div, [], [go.Figure() for _ in get_figure_ids()]

    records = cached_run(inputs)
    row_data = [{k: _grid_value(v) for k, v in asdict(r).items()} for r in records]
    return create_summary_header(summarize_projection(records)), row_data, generate_all_plots(records)


def register_simulation_callbacks(app):

    FIGURE_OUTPUTS = [Output(id, "figure") for id in get_figure_ids()]

    @app.callback(
        Output("summary_header", "children"),
        Output("projection-grid", "rowData"),
        *FIGURE_OUTPUTS,

        Input("run", "n_clicks"),

        State("current_age", "value"),
        State("taxable_amount", "value"),
        State("ira_amount", "value"),
        State("conversion_amount", "value"),
        State("living_expenses", "value"),
        State("expected_growth_rate", "value"),
        State("capital_gains_rate", "value"),
        State("state_tax_rate", "value"),
        State("conservative_buffer", "value"),
        State("strategy-flags", "value"),

        prevent_initial_call=True
    )
    def run_projection(n_clicks, current_age, taxable_amount, ira_amount, conversion_amount,
                       living_expenses, growth, cap_gains, state_tax, buffer, flags):
        if not n_clicks:
            raise PreventUpdate

        flags = flags or []
        header, row_data, figures = build_results({
            "currentAge": current_age,
            "taxableAmount": taxable_amount,
            "iraAmount": ira_amount,
            "conversionAmount": conversion_amount,
            "livingExpenses": living_expenses,
            "expectedGrowthRate": growth,
            "capitalGainsRate": cap_gains,
            "stateTaxRate": state_tax,
            "conservativeBuffer": buffer,
            "frontLoadConversions": "front_load" in flags,
            "continueAfterRMD": "continue_after_rmd" in flags,
        })
        return header, row_data, *figures
