# utils/reporting.py
from dataclasses import asdict
from typing import Any, Dict, Iterable

import pandas as pd

from rothledger.config.projection_assumptions import min_portfolio_balance
from rothledger.models import YearlyProjectionRecord


def projection_to_frame(records: Iterable[YearlyProjectionRecord]) -> pd.DataFrame:
    """One row per simulated year, indexed by age, one column per record field."""
    records = list(records)
    rows = [asdict(r) for r in records]
    if not rows:
        columns = list(YearlyProjectionRecord.__dataclass_fields__)
        return pd.DataFrame(columns=columns).set_index("age")

    df = pd.DataFrame(rows).set_index("age")
    df["cost_basis_pct"] = [r.cost_basis_pct for r in records]
    return df


def summarize_projection(records: Iterable[YearlyProjectionRecord]) -> Dict[str, Any]:
    """
    Lifetime totals for a projection (the figures the dashboard headlines).
    """
    records = list(records)
    if not records:
        return {
            "years": 0,
            "total_conversions": 0.0,
            "total_rmds": 0.0,
            "total_stocks_sold": 0.0,
            "total_tax_on_tax": 0.0,
            "total_taxes": 0.0,
            "total_conservative_taxes": 0.0,
            "final_taxable": 0.0,
            "final_pretax": 0.0,
            "final_roth": 0.0,
            "final_portfolio": 0.0,
            "depleted": False,
        }

    last = records[-1]
    return {
        "years": len(records),
        "total_conversions": sum(r.conversion_amount for r in records),
        "total_rmds": sum(r.rmd for r in records),
        "total_stocks_sold": sum(r.stocks_sold for r in records),
        "total_tax_on_tax": sum(r.capital_gains_tax for r in records),
        "total_taxes": sum(r.total_tax for r in records),
        "total_conservative_taxes": sum(r.conservative_tax for r in records),
        "final_taxable": last.taxable_balance,
        "final_pretax": last.pretax_balance,
        "final_roth": last.roth_balance,
        "final_portfolio": last.total_portfolio,
        "depleted": last.total_portfolio < min_portfolio_balance,
    }


__all__ = ["projection_to_frame", "summarize_projection"]
