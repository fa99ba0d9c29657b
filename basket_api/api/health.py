"""Health endpoint reporting basket store statistics."""

from flask import Blueprint, jsonify, current_app

health_api = Blueprint('health_api', __name__, url_prefix='/api')


@health_api.route('/health', methods=['GET'])
def health():
    store = current_app.extensions['basket_store']
    return jsonify({
        'status': 'success',
        'data': store.get_stats()
    }), 200
