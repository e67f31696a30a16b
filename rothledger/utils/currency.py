# utils/currency.py
from dash import dcc, html
from typing import List, Optional, Union

_LABEL_STYLE = {
    'fontWeight': 'bold',
    'fontSize': 16,
    'textAlign': 'center',
    'marginBottom': '6px',
    'display': 'block'
}

_INPUT_STYLE = {
    'width': '80%',
    'height': '36px',
    'textAlign': 'center',
    'fontSize': '16px',
    'fontFamily': 'monospace',
    'fontWeight': '500',
    'border': '1px solid #ccc',
    'borderRadius': '6px'
}


def _label_for(id: str, label: Optional[str]) -> str:
    if label is None:
        return " ".join(word.capitalize() for word in id.replace('-', '_').split('_'))
    return label


def pretty_currency_input(id, value, label=None) -> List:
    """
    Generates a stylized currency input component: [Label, Input].
    """
    return [
        html.Label(_label_for(id, label), style=_LABEL_STYLE),
        dcc.Input(
            id=id,
            type='text',
            value=format_currency_output(value),
            placeholder="$2,500,000",
            style=_INPUT_STYLE,
            pattern=r'^\$?\s*[0-9,]{0,15}(\.[0-9]{0,2})?$',
            debounce=True,
        ),
    ]


def pretty_percent_input(id, value, label=None, placeholder="0.0%", decimals=1) -> List:
    """
    Generates a stylized percentage input. ``value`` is in percent units (9 -> "9.0%").
    """
    return [
        html.Label(_label_for(id, label), style=_LABEL_STYLE),
        dcc.Input(
            id=id,
            type='text',
            value=format_percent_output(value, decimals),
            placeholder=placeholder,
            style=_INPUT_STYLE,
            debounce=True,
        ),
    ]


# ----------------------------------------------------------------------
# Parsing
# ----------------------------------------------------------------------

def clean_currency(val) -> Optional[float]:
    """
    Cleans a currency string (e.g., "$140,000.00") into a float (140000.0).
    Blank input becomes 0.0; unparseable text returns None.
    """
    if val is None or val == "":
        return 0.0
    if isinstance(val, (int, float)):
        return float(val)

    cleaned_val = str(val).replace('$', '').replace(',', '').strip()
    if not cleaned_val:
        return 0.0
    try:
        return float(cleaned_val)
    except ValueError:
        return None


def clean_percent(raw_input: Union[str, float, int, None]) -> Optional[float]:
    """
    Cleans raw percent input ('9%', '9', 9, ' 9.5 % ') into percent units (9.0).
    Returns None for blank or unparseable input.
    """
    if raw_input is None:
        return None
    if isinstance(raw_input, (float, int)):
        return float(raw_input)

    s = str(raw_input).replace('%', '').replace(',', '').replace(' ', '').strip()
    if not s:
        return None
    try:
        return float(s)
    except ValueError:
        return None


# ----------------------------------------------------------------------
# Formatting
# ----------------------------------------------------------------------

def format_currency_output(val, decimals=0) -> str:
    """Formats a float/int into a clean currency string ($1,234,567)."""
    if val is None:
        val = 0.0
    return f"${val:,.{decimals}f}"


def format_percent_output(value: Union[float, None], decimal_places: int = 1) -> str:
    """Formats a percent-unit value (9.0) to a display string ('9.0%')."""
    if value is None:
        return ""
    return f"{float(value):.{decimal_places}f}%"
