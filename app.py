# app.py
import logging

from dash import Dash

# -----------------------------------------------------------
# Core Imports
# -----------------------------------------------------------

from rothledger.layout.main_layout import main_layout
from rothledger.callbacks.simulation_callbacks import register_simulation_callbacks

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Initialize app
app = Dash(__name__, suppress_callback_exceptions=True)
server = app.server

# -----------------------------------------------------------
# Layout Assignment & Callback Registration
# -----------------------------------------------------------

app.layout = main_layout

register_simulation_callbacks(app)

if __name__ == "__main__":
    app.run(debug=True, host='0.0.0.0', port=8050)
