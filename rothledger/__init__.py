"""Year-by-year projection of taxable, pre-tax and Roth balances under a Roth conversion policy."""

from rothledger.models import SimulationInput, SimulationInputError, YearlyProjectionRecord
from rothledger.engine import run

__all__ = ["run", "SimulationInput", "SimulationInputError", "YearlyProjectionRecord"]
