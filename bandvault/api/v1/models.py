"""
API Models for response documentation
"""

from flask_restx import fields

from . import api

error_response = api.model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing message"),
        "action": fields.String(description="Suggested next step"),
        "details": fields.String(description="Reason the request failed", allow_null=True),
    },
)

cleanup_response = api.model(
    "CleanupResponse",
    {
        "success": fields.Boolean(description="Whether the cleanup ran"),
        "deletedCount": fields.Integer(description="Number of token records deleted"),
        "timestamp": fields.String(description="ISO 8601 time of the run"),
    },
)
