# config/projection_assumptions.py
# These are **reasonable defaults**; override per SimulationInput

# Taxable account income
dividend_yield = 0.025
qualified_dividend_pct = 0.90          # remainder is taxed as ordinary income
initial_cost_basis_ratio = 0.50        # basis as a share of the starting taxable balance

# Household cash needs
living_expenses = 150_000

# Social Security
social_security_amount = 55_000
social_security_start_age = 70
social_security_taxable_pct = 0.85

# Projection horizon
end_age = 90
min_portfolio_balance = 10_000        # stop once the household is effectively depleted

# Bracket indexing (bounds only, rates unchanged)
bracket_inflation_rate = 0.03

# Required Minimum Distributions
rmd_start_age = 73

# Roth conversions
post_rmd_conversion_cap = 200_000     # only when conversions continue past RMD age
front_load_start_factor = 1.5
front_load_taper_per_year = 0.08
front_load_floor_factor = 0.5

# Qualified Charitable Distributions
qcd_start_age = 70.5
qcd_annual_limit = 105_000

# Tax-on-tax solver
solver_max_iterations = 10
solver_tolerance = 10.0               # dollars

# Dashboard defaults (percent units, camelCase, as the UI sends them)
DEFAULT_INPUTS = {
    "currentAge": 60,
    "taxableAmount": 8_500_000,
    "iraAmount": 4_100_000,
    "conversionAmount": 250_000,
    "frontLoadConversions": False,
    "continueAfterRMD": False,
    "expectedGrowthRate": 9,
    "capitalGainsRate": 15,
    "stateTaxRate": 5,
    "conservativeBuffer": 1.2,
    "livingExpenses": living_expenses,
    "socialSecurityAmount": social_security_amount,
    "qcdAmount": 0,
}
