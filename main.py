"""
main.py

Flask backend serving band chart and audio files behind single-use file
access tokens, with Redis as the token store and Celery beat for cleanup.

Notes:
  - Functions endpoints at /functions/v1/ with Swagger docs at /functions/docs
  - Uses application factory pattern for better testability
"""

import logging
import os

from bandvault.app_factory import create_app

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app()

if __name__ == "__main__":
    host = os.getenv("FLASK_HOST", "0.0.0.0")
    port = int(os.getenv("FLASK_PORT", 8000))
    debug = os.getenv("FLASK_DEBUG", "false").lower() == "true"

    app.run(host=host, port=port, debug=debug)
