"""
API package initialization.
Registers the JSON API blueprints for the basket application.
"""

from .baskets import baskets_api
from .health import health_api


def register_blueprints(app):
    """Register all API blueprints with the Flask app."""
    app.register_blueprint(baskets_api)
    app.register_blueprint(health_api)
