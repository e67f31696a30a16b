# main_layout.py
from dash import dcc
from dash import html

import dash_ag_grid as dag

from rothledger.config.projection_assumptions import DEFAULT_INPUTS
from rothledger.utils.currency import pretty_currency_input, pretty_percent_input
from rothledger.utils.plotting import get_figure_ids

# Columns shown in the yearly table (field, header)
TABLE_COLUMNS = [
    ("age", "Age"),
    ("conversion_amount", "Conversion"),
    ("rmd", "RMD"),
    ("dividends", "Dividends"),
    ("social_security", "Social Security"),
    ("stocks_sold", "Stocks Sold"),
    ("capital_gains", "Cap Gains"),
    ("ordinary_tax", "Ordinary Tax"),
    ("qualified_dividend_tax", "Div Tax"),
    ("capital_gains_tax", "Cap Gains Tax"),
    ("state_tax", "State Tax"),
    ("conservative_tax", "Taxes (buffered)"),
    ("bracket_room", "Room in Bracket"),
    ("taxable_balance", "Taxable"),
    ("pretax_balance", "Traditional IRA"),
    ("roth_balance", "Roth IRA"),
    ("total_portfolio", "Total"),
]

_CARD_STYLE = {'flex': 1, 'minWidth': '180px', 'padding': '0 10px'}


def _column_defs():
    defs = []
    for field, header in TABLE_COLUMNS:
        col = {"field": field, "headerName": header}
        if field != "age":
            col["valueFormatter"] = {"function": "params.value == null ? '' : d3.format('$,.0f')(params.value)"}
        defs.append(col)
    return defs


# ----------------------------------------------------------------------
# Application Layout Definition
# ----------------------------------------------------------------------

main_layout = html.Div(
    style={'fontFamily': 'Arial, sans-serif', 'margin': '2%', 'backgroundColor': '#f9f9fb'},
    children=[
        html.H1(
            "Roth Conversion Ledger",
            style={'textAlign': 'center', 'color': 'black', 'marginBottom': 0}
        ),

        # ----------------------------------------------------------------------
        # ROW 1: Balances and conversion target
        # ----------------------------------------------------------------------
        html.Div([
            html.Div([
                html.Label("Current Age", style={'fontWeight': 'bold', 'fontSize': 16, 'display': 'block'}),
                dcc.Input(id="current_age", type="number", min=0, max=120, step=1,
                          value=DEFAULT_INPUTS["currentAge"], debounce=True),
            ], style=_CARD_STYLE),
            html.Div(pretty_currency_input("taxable_amount", DEFAULT_INPUTS["taxableAmount"], "Taxable Brokerage"), style=_CARD_STYLE),
            html.Div(pretty_currency_input("ira_amount", DEFAULT_INPUTS["iraAmount"], "Traditional IRA"), style=_CARD_STYLE),
            html.Div(pretty_currency_input("conversion_amount", DEFAULT_INPUTS["conversionAmount"], "Annual Conversion"), style=_CARD_STYLE),
            html.Div(pretty_currency_input("living_expenses", DEFAULT_INPUTS["livingExpenses"], "Living Expenses"), style=_CARD_STYLE),
        ], style={'display': 'flex', 'flexWrap': 'wrap', 'gap': '15px', 'marginBottom': '20px'}),

        # ----------------------------------------------------------------------
        # ROW 2: Rates, buffer, strategy switches and Run button
        # ----------------------------------------------------------------------
        html.Div([
            html.Div(pretty_percent_input("expected_growth_rate", DEFAULT_INPUTS["expectedGrowthRate"], "Expected Growth"), style=_CARD_STYLE),
            html.Div(pretty_percent_input("capital_gains_rate", DEFAULT_INPUTS["capitalGainsRate"], "Capital Gains Rate"), style=_CARD_STYLE),
            html.Div(pretty_percent_input("state_tax_rate", DEFAULT_INPUTS["stateTaxRate"], "State Tax Rate"), style=_CARD_STYLE),
            html.Div([
                html.Label("Conservative Buffer", style={'fontWeight': 'bold', 'fontSize': 16, 'display': 'block'}),
                dcc.Input(id="conservative_buffer", type="number", min=1.0, step=0.05,
                          value=DEFAULT_INPUTS["conservativeBuffer"], debounce=True),
            ], style=_CARD_STYLE),
            html.Div([
                dcc.Checklist(
                    id="strategy-flags",
                    options=[
                        {"label": " Front-load conversions", "value": "front_load"},
                        {"label": " Continue after RMD age", "value": "continue_after_rmd"},
                    ],
                    value=[],
                ),
            ], style=_CARD_STYLE),
            html.Button(
                "Run Projection",
                id="run",
                n_clicks=0,
                style={
                    'padding': '12px 20px',
                    'fontSize': '16px',
                    'fontWeight': 'bold',
                    'backgroundColor': '#3498db',
                    'color': 'white',
                    'border': 'none',
                    'borderRadius': '8px',
                    'cursor': 'pointer',
                    'height': '50px',
                    'alignSelf': 'flex-end',
                }
            ),
        ], style={'display': 'flex', 'flexWrap': 'wrap', 'alignItems': 'flex-end', 'gap': '15px', 'marginBottom': '30px'}),

        # ----------------------------------------------------------------------
        # RESULTS
        # ----------------------------------------------------------------------
        html.Div(id="summary_header"),

        dag.AgGrid(
            id="projection-grid",
            columnDefs=_column_defs(),
            rowData=[],
            defaultColDef={"resizable": True, "sortable": False, "minWidth": 110},
            style={"height": "600px", "width": "100%"},
        ),

        html.Div(
            [html.Div([dcc.Graph(id=fig_id)], style={'margin': '40px 0'}) for fig_id in get_figure_ids()],
            style={'maxWidth': '1400px', 'margin': '0 auto'}
        ),
    ]
)
