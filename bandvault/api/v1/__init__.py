"""
Functions API v1

Edge-function compatible endpoints for serving band files and token
housekeeping, documented with Swagger.
"""

from flask import Blueprint
from flask_restx import Api

functions_bp = Blueprint("functions", __name__, url_prefix="/functions")

api = Api(
    functions_bp,
    version="1.0",
    title="BandVault Functions API",
    description="Token-gated access to band chart and audio files",
    doc="/docs",
)

# Imported after api exists; models register themselves on it
from .namespaces import files_ns  # noqa: E402

api.add_namespace(files_ns, path="/v1")
