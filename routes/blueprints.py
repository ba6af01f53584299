from flask import Blueprint

# Blueprint for the bracket API
bracket_bp = Blueprint('bracket_bp', __name__)

# Import route modules to register them with bracket_bp
import routes.api.bracket
