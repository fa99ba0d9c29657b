"""
Flask application factory for the Shopping Basket API.

Baskets live in process memory only; the discount code registry is built
once here and injected into the basket service.
"""

import logging

from flask import Flask, request, jsonify
from werkzeug.exceptions import HTTPException

from config import Config

from .domain.errors import ValidationError, InvalidDiscountCodeError
from .services import BasketStore, BasketService, DiscountCodeRegistry


def _configure_logging(app):
    """Apply LOG_LEVEL to the root and Flask loggers."""
    log_level_name = str(app.config.get('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, log_level_name, logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(format='%(asctime)s %(levelname)s [%(name)s] %(message)s')
    logging.getLogger().setLevel(log_level)
    app.logger.setLevel(log_level)


def _register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        """Reject malformed requests before the basket is touched."""
        app.logger.warning(f"Validation failed for {request.method} {request.path}: {e.errors or e.message}")
        return jsonify({
            'status': 'error',
            'message': e.message,
            'errors': e.errors
        }), 400

    @app.errorhandler(InvalidDiscountCodeError)
    def handle_invalid_discount_code(e):
        app.logger.warning(f"Rejected discount code {e.code!r} on {request.path}")
        return jsonify({
            'status': 'error',
            'message': e.message,
            'errors': {'discountCode': [e.message]}
        }), 400

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Return JSON instead of HTML for routing errors (404, 405, ...)."""
        return jsonify({
            'status': 'error',
            'message': e.description
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        app.logger.exception(f"Unhandled error on {request.method} {request.path}: {e}")
        return jsonify({
            'status': 'error',
            'message': 'Internal server error'
        }), 500


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    _configure_logging(app)

    # Keep response fields in the order the serializers build them
    app.json.sort_keys = False

    discount_codes = DiscountCodeRegistry.from_seed(app.config.get('INACTIVE_DISCOUNT_CODES'))
    store = BasketStore()
    app.extensions['basket_store'] = store
    app.extensions['basket_service'] = BasketService(store, discount_codes)
    app.logger.info(f"Basket service ready with {len(discount_codes.active_codes())} active discount codes")

    _register_error_handlers(app)

    from .api import register_blueprints
    register_blueprints(app)

    return app
