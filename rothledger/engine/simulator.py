# engine/simulator.py

import logging
from dataclasses import replace
from functools import lru_cache
from typing import Dict, Tuple

import pandas as pd

from rothledger.config.projection_assumptions import end_age, min_portfolio_balance
from rothledger.engine.ledger import advance_one_year
from rothledger.models import (
    AccountState,
    ProjectionRecords,
    SimulationInput,
    YearlyProjectionRecord,
)
from rothledger.utils.reporting import summarize_projection

logger = logging.getLogger(__name__)


def run(inputs: SimulationInput) -> ProjectionRecords:
    """
    Projects the household from ``inputs.current_age`` through age 90.

    Each year's ending balances open the next year. The run stops early once
    the total portfolio falls below min_portfolio_balance; the year that
    crossed the floor is still reported. Deterministic: the same inputs
    always give the same records.
    """
    logger.info(
        "Projecting ages %d-%d (taxable=%.0f, pretax=%.0f, conversion=%.0f, front_load=%s)",
        inputs.current_age, end_age, inputs.taxable_amount, inputs.ira_amount,
        inputs.conversion_amount, inputs.front_load_conversions,
    )

    records = []
    state = AccountState.from_inputs(inputs)

    for year_index, age in enumerate(range(inputs.current_age, end_age + 1), start=1):
        record, state = advance_one_year(state, inputs, age, year_index)
        records.append(record)

        if record.total_portfolio < min_portfolio_balance:
            logger.info("Portfolio depleted at age %d; stopping projection", age)
            break

    logger.info("Projection complete: %d years", len(records))
    return records


@lru_cache(maxsize=64)
def cached_run(inputs: SimulationInput) -> Tuple[YearlyProjectionRecord, ...]:
    """Memoized run() for repeated identical requests (e.g. dashboard redraws)."""
    return tuple(run(inputs))


def run_scenarios(scenarios: Dict[str, SimulationInput]) -> Dict[str, ProjectionRecords]:
    """Runs several independent what-if inputs; each run owns its own state."""
    return {name: run(inputs) for name, inputs in scenarios.items()}


def compare_strategies(inputs: SimulationInput) -> pd.DataFrame:
    """
    Steady vs front-loaded conversions for otherwise identical inputs.

    Returns one row of lifetime totals per strategy, plus ``best`` (lowest
    total taxes) and ``tax_savings``: how much less the best strategy pays
    than that row.
    """
    results = run_scenarios({
        "steady": replace(inputs, front_load_conversions=False),
        "front_load": replace(inputs, front_load_conversions=True),
    })
    df = pd.DataFrame(
        {name: summarize_projection(records) for name, records in results.items()}
    ).T

    total_taxes = df["total_taxes"].astype(float)
    df["tax_savings"] = total_taxes - total_taxes.min()
    df["best"] = df.index == total_taxes.idxmin()
    return df


__all__ = ["run", "cached_run", "run_scenarios", "compare_strategies"]
