# utils/plotting.py

import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from rothledger.utils.reporting import projection_to_frame


def _empty_figure(title, height=450):
    fig = go.Figure()
    fig.add_annotation(
        text="No data available",
        xref="paper", yref="paper", x=0.5, y=0.5,
        showarrow=False, font_size=20
    )
    fig.update_layout(title=title, height=height, template="plotly_white")
    return fig


# ------------------------------------------------------------------
# HELPER: Stacked area chart (balances by account)
# ------------------------------------------------------------------
def create_stacked_figure(df: pd.DataFrame, series, title, yaxis_title, height=500):
    """
    One stacked area per (label, column) in ``series``, x = age.
    """
    if df.empty:
        return _empty_figure(title, height)

    fig = go.Figure()
    colors = px.colors.qualitative.Vivid
    for idx, (label, column) in enumerate(series):
        fig.add_trace(go.Scatter(
            x=df.index,
            y=df[column],
            mode='lines',
            line=dict(width=0),
            fillcolor=colors[idx % len(colors)],
            stackgroup='one',
            name=label,
            hovertemplate=f'<b>{label}</b><br>Age: %{{x}}<br>Value: $%{{y:,.0f}}<extra></extra>'
        ))

    fig.update_layout(
        title=title,
        xaxis_title="Age",
        yaxis_title=yaxis_title,
        template="plotly_white",
        hovermode="x unified",
        height=height,
        legend=dict(x=0, y=1, xanchor="left", yanchor="top", bgcolor="rgba(255,255,255,0.9)")
    )
    return fig


# ------------------------------------------------------------------
# HELPER: Stacked bar chart (taxes by type, conversions vs RMDs)
# ------------------------------------------------------------------
def create_bar_figure(df: pd.DataFrame, series, title, yaxis_title, height=450):
    if df.empty:
        return _empty_figure(title, height)

    fig = go.Figure()
    for label, column in series:
        fig.add_trace(go.Bar(
            x=df.index,
            y=df[column],
            name=label,
            hovertemplate=f'<b>{label}</b><br>Age: %{{x}}<br>Amount: $%{{y:,.0f}}<extra></extra>'
        ))

    fig.update_layout(
        title=title,
        barmode="stack",
        xaxis_title="Age",
        yaxis_title=yaxis_title,
        template="plotly_white",
        hovermode="x unified",
        height=height,
        legend=dict(x=1, y=1, xanchor="right", yanchor="top")
    )
    return fig


# ------------------------------------------------------------------
# MAIN FUNCTION
# ------------------------------------------------------------------
def generate_all_plots(records):
    df = projection_to_frame(records)

    all_figures = {}
    all_figures["balances"] = create_stacked_figure(
        df,
        [("Taxable Brokerage", "taxable_balance"),
         ("Traditional IRA", "pretax_balance"),
         ("Roth IRA", "roth_balance")],
        "Ending Balance by Account", "Balance ($)",
    )
    all_figures["taxes"] = create_bar_figure(
        df,
        [("Ordinary Income Tax", "ordinary_tax"),
         ("Qualified Dividend Tax", "qualified_dividend_tax"),
         ("Capital Gains Tax (tax-on-tax)", "capital_gains_tax"),
         ("State Tax", "state_tax")],
        "Annual Taxes by Type", "Tax ($)",
    )
    all_figures["conversions"] = create_bar_figure(
        df,
        [("Roth Conversion", "conversion_amount"),
         ("RMD", "rmd")],
        "Roth Conversions and RMDs", "Amount ($)",
    )
    return [all_figures[id] for id in get_figure_ids()]


def get_figure_ids():
    return ["balances", "taxes", "conversions"]
