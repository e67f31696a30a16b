# engine/__init__.py

# Only expose the projection driver and the yearly step, which orchestrate all helpers.
from .simulator import run, cached_run, run_scenarios, compare_strategies
from .ledger import advance_one_year

# Tax helpers are imported from their own modules:
# from .tax_engine import brackets_for_year, tax_owed, ltcg_rate
# from .tax_on_tax import solve_required_sale
