from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

"""Application entry point.

Baskets are kept in process memory, so the API must run as a single
Gunicorn worker; concurrency comes from worker threads instead.
"""

from basket_api import create_app
from config import Config

# This app is intended to be run via Gunicorn only
app = create_app()
if __name__ == '__main__':
    import os
    import sys

    command = [
        "gunicorn",
        "-w", "1",
        "--threads", "8",
        "-b", f"{Config.HOST}:{Config.PORT}",
        "run:app"
    ]

    print(f"Launching Gunicorn with command: {' '.join(command)}")
    try:
        os.execvp(command[0], command)
    except FileNotFoundError:
        print("Error: 'gunicorn' command not found.", file=sys.stderr)
        print("Please install Gunicorn: pip install gunicorn", file=sys.stderr)
        sys.exit(1)
