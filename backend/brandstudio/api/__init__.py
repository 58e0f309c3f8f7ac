from flask import Blueprint

# Dashboard-facing routes: session login, token minting, builder hand-off
api_bp = Blueprint("api", __name__)

# Import route modules so they register with api_bp
from . import health
from . import auth
