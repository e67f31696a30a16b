# models.py
import math
from dataclasses import dataclass, field
from typing import List

from rothledger.config import projection_assumptions as pa
from rothledger.config.tax_tables import DEFAULT_TAX_YEAR, ORDINARY_BRACKETS


# Numeric fields that must hold a real, finite number
_FINITE_FIELDS = (
    "taxable_amount", "ira_amount", "roth_amount", "conversion_amount",
    "living_expenses", "social_security_amount", "qcd_amount",
    "expected_growth_rate", "capital_gains_rate", "state_tax_rate",
    "cost_basis_ratio", "conservative_buffer", "bracket_inflation",
)


class SimulationInputError(ValueError):
    """Raised when a SimulationInput cannot be simulated (caller error)."""


@dataclass(frozen=True)
class TaperSchedule:
    """Front-load factor = max(floor, start - per_year * years_elapsed)."""
    start_factor: float = pa.front_load_start_factor
    taper_per_year: float = pa.front_load_taper_per_year
    floor_factor: float = pa.front_load_floor_factor

    def factor(self, years_elapsed: int) -> float:
        return max(self.floor_factor, self.start_factor - self.taper_per_year * years_elapsed)


@dataclass(frozen=True)
class SimulationInput:
    # Core (rates are in percent, as entered on the dashboard)
    current_age: int
    taxable_amount: float
    ira_amount: float
    conversion_amount: float
    expected_growth_rate: float
    front_load_conversions: bool = False
    capital_gains_rate: float = 15.0  # baseline, informational only
    state_tax_rate: float = 5.0
    conservative_buffer: float = 1.0

    # Household assumptions
    roth_amount: float = 0.0
    continue_after_rmd: bool = False
    living_expenses: float = pa.living_expenses
    social_security_amount: float = pa.social_security_amount
    social_security_start_age: int = pa.social_security_start_age
    cost_basis_ratio: float = pa.initial_cost_basis_ratio
    qcd_amount: float = 0.0
    tax_year: int = DEFAULT_TAX_YEAR
    bracket_inflation: float = pa.bracket_inflation_rate
    front_load_taper: TaperSchedule = field(default_factory=TaperSchedule)

    def __post_init__(self):
        errors = []
        if isinstance(self.current_age, bool) or not isinstance(self.current_age, int):
            errors.append(f"current_age must be a whole number of years (got {self.current_age!r})")
        elif not 0 <= self.current_age <= 120:
            errors.append(f"current_age must be between 0 and 120 (got {self.current_age})")

        # NaN/inf slip through every range comparison below
        non_finite = [name for name in _FINITE_FIELDS if not math.isfinite(getattr(self, name))]
        for name in non_finite:
            errors.append(f"{name} must be a finite number (got {getattr(self, name)})")

        for name in ("taxable_amount", "ira_amount", "roth_amount", "conversion_amount",
                     "living_expenses", "social_security_amount", "qcd_amount"):
            if name not in non_finite and getattr(self, name) < 0:
                errors.append(f"{name} cannot be negative (got {getattr(self, name)})")
        if "expected_growth_rate" not in non_finite and self.expected_growth_rate < -100:
            errors.append(f"expected_growth_rate cannot be below -100% (got {self.expected_growth_rate})")
        for name in ("capital_gains_rate", "state_tax_rate"):
            if name not in non_finite and not 0 <= getattr(self, name) <= 100:
                errors.append(f"{name} must be between 0 and 100 (got {getattr(self, name)})")
        if "cost_basis_ratio" not in non_finite and not 0 <= self.cost_basis_ratio <= 1:
            errors.append(f"cost_basis_ratio must be between 0 and 1 (got {self.cost_basis_ratio})")
        if "conservative_buffer" not in non_finite and self.conservative_buffer < 1.0:
            errors.append(f"conservative_buffer must be at least 1.0 (got {self.conservative_buffer})")
        if self.tax_year not in ORDINARY_BRACKETS:
            errors.append(f"no tax tables for tax_year {self.tax_year}")
        if errors:
            raise SimulationInputError("; ".join(errors))

    @property
    def growth_rate(self) -> float:
        return self.expected_growth_rate / 100

    @property
    def state_rate(self) -> float:
        return self.state_tax_rate / 100


@dataclass(frozen=True)
class AccountState:
    taxable_balance: float
    cost_basis: float
    pretax_balance: float
    roth_balance: float

    @classmethod
    def from_inputs(cls, inputs: SimulationInput) -> "AccountState":
        return cls(
            taxable_balance=inputs.taxable_amount,
            cost_basis=inputs.taxable_amount * inputs.cost_basis_ratio,
            pretax_balance=inputs.ira_amount,
            roth_balance=inputs.roth_amount,
        )

    @property
    def total(self) -> float:
        return self.taxable_balance + self.pretax_balance + self.roth_balance


@dataclass(frozen=True)
class SaleResult:
    stocks_sold: float = 0.0
    capital_gains: float = 0.0
    capital_gains_tax: float = 0.0
    iterations: int = 0
    exhausted: bool = False


@dataclass(frozen=True)
class YearlyProjectionRecord:
    year: int
    age: int

    # Income sources
    dividends: float
    qualified_dividends: float
    ordinary_dividends: float
    rmd: float
    qcd: float
    social_security: float
    taxable_social_security: float
    total_income: float
    ordinary_income: float

    # Roth conversion
    conversion_amount: float

    # Stock sales (tax-on-tax)
    stocks_sold: float
    capital_gains: float

    # Tax breakdown
    ordinary_tax: float
    qualified_dividend_tax: float
    capital_gains_tax: float
    state_tax: float
    total_tax: float
    conservative_tax: float

    # Cash flow
    living_expenses: float
    after_tax_income: float
    shortfall: float

    # Ending balances
    taxable_balance: float
    cost_basis: float
    pretax_balance: float
    roth_balance: float
    total_portfolio: float

    # Diagnostics
    marginal_rate: float
    bracket_room: float  # ordinary income left before the next bracket (inf at the top)
    ltcg_rate: float
    niit_rate: float
    effective_rate: float
    magi: float
    irmaa_surcharge: float

    @property
    def cost_basis_pct(self) -> float:
        return self.cost_basis / self.taxable_balance if self.taxable_balance > 0 else 0.0


ProjectionRecords = List[YearlyProjectionRecord]

__all__ = [
    "SimulationInputError",
    "TaperSchedule",
    "SimulationInput",
    "AccountState",
    "SaleResult",
    "YearlyProjectionRecord",
    "ProjectionRecords",
]
