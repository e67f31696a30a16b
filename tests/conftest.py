import pytest

from rothledger.engine.tax_engine import brackets_for_year, standard_deduction
from rothledger.models import SimulationInput


@pytest.fixture
def scenario_inputs():
    """Steady-conversion household used throughout the projection tests."""
    return SimulationInput(
        current_age=60,
        taxable_amount=8_500_000,
        ira_amount=4_100_000,
        conversion_amount=250_000,
        front_load_conversions=False,
        expected_growth_rate=9,
        capital_gains_rate=15,
        state_tax_rate=5,
        conservative_buffer=1.2,
    )


@pytest.fixture
def base_ladder():
    return brackets_for_year(1)


@pytest.fixture
def deduction():
    return standard_deduction()
