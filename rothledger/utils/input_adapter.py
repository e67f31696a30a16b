from dataclasses import fields
from typing import Any, Dict

from rothledger.config.projection_assumptions import DEFAULT_INPUTS
from rothledger.models import SimulationInput, SimulationInputError
from rothledger.utils.currency import clean_currency, clean_percent

# camelCase names the dashboard sends -> SimulationInput fields
FIELD_MAP = {
    "currentAge": "current_age",
    "taxableAmount": "taxable_amount",
    "iraAmount": "ira_amount",
    "conversionAmount": "conversion_amount",
    "frontLoadConversions": "front_load_conversions",
    "continueAfterRMD": "continue_after_rmd",
    "expectedGrowthRate": "expected_growth_rate",
    "capitalGainsRate": "capital_gains_rate",
    "stateTaxRate": "state_tax_rate",
    "conservativeBuffer": "conservative_buffer",
    "livingExpenses": "living_expenses",
    "socialSecurityAmount": "social_security_amount",
    "qcdAmount": "qcd_amount",
}

CURRENCY_FIELDS = {
    "taxable_amount", "ira_amount", "conversion_amount",
    "living_expenses", "social_security_amount", "qcd_amount",
}
PERCENT_FIELDS = {"expected_growth_rate", "capital_gains_rate", "state_tax_rate"}

DEFAULTS = {FIELD_MAP[k]: v for k, v in DEFAULT_INPUTS.items()}


def get_simulation_input(**kwargs: Any) -> SimulationInput:
    """
    Builds a SimulationInput by merging DEFAULT_INPUTS with the UI values.

    Keys may be camelCase (as the UI sends them) or snake_case field names.
    Currency and percent strings are cleaned and blank values fall back to
    the defaults. Text that is not a number raises SimulationInputError, as
    does anything SimulationInput itself rejects.
    """
    # 1. Start with defaults, then overlay whatever the UI provided
    inputs_dict: Dict[str, Any] = dict(DEFAULTS)
    for key, value in kwargs.items():
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        inputs_dict[FIELD_MAP.get(key, key)] = value

    # 2. Clean formatted strings; text that is not a number is rejected, not zeroed
    unparseable = []
    for name in sorted(CURRENCY_FIELDS & inputs_dict.keys()):
        cleaned = clean_currency(inputs_dict[name])
        if cleaned is None:
            unparseable.append(f"{name} is not a dollar amount (got {inputs_dict[name]!r})")
        inputs_dict[name] = cleaned
    for name in sorted(PERCENT_FIELDS & inputs_dict.keys()):
        cleaned = clean_percent(inputs_dict[name])
        if cleaned is None:
            unparseable.append(f"{name} is not a percentage (got {inputs_dict[name]!r})")
        inputs_dict[name] = cleaned
    if unparseable:
        raise SimulationInputError("; ".join(unparseable))

    # Number inputs arrive as floats; whole ages become ints, others fail validation
    age = inputs_dict["current_age"]
    if isinstance(age, float) and age.is_integer():
        inputs_dict["current_age"] = int(age)
    inputs_dict["conservative_buffer"] = float(inputs_dict["conservative_buffer"])
    for name in ("front_load_conversions", "continue_after_rmd"):
        inputs_dict[name] = bool(inputs_dict[name])

    # 3. Keep only real SimulationInput fields
    field_names = {f.name for f in fields(SimulationInput)}
    final_inputs = {key: value for key, value in inputs_dict.items() if key in field_names}

    return SimulationInput(**final_inputs)
