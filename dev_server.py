#!/usr/bin/env python3
"""
Development server for the Shopping Basket API.
This bypasses the Gunicorn requirement for local testing.
"""

from basket_api import create_app
from config import Config


def run_dev_server():
    """Run the Flask development server."""
    app = create_app()

    print("Starting Shopping Basket API Development Server")
    print("=" * 50)
    print("NOTE: This is for testing only. Production uses Gunicorn.")
    print("")
    print(f"Try: curl http://localhost:{Config.PORT}/api/basket/discount-codes")
    print("")

    app.run(
        host=Config.HOST,
        port=Config.PORT,
        debug=True,
        threaded=True,
        use_reloader=False  # A reload would drop every in-memory basket
    )


if __name__ == '__main__':
    run_dev_server()
