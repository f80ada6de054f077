"""
API Namespaces - File serving and token housekeeping
"""

import hmac
import os

from flask import Response, current_app, request
from flask_restx import Namespace, Resource
from redis.exceptions import RedisError

from ...application.file_serving_service import FileServingService
from ...application.token_cleanup_service import TokenCleanupService
from ...domain.errors import ErrorCategory, TokenRejectedError, create_error_response
from .models import cleanup_response, error_response

files_ns = Namespace("functions", description="Band file access functions")

REJECTION_CATEGORIES = {
    400: ErrorCategory.INVALID_REQUEST,
    401: ErrorCategory.INVALID_TOKEN,
    403: ErrorCategory.CROSS_TENANT_VIOLATION,
    404: ErrorCategory.FILE_NOT_FOUND,
}


@files_ns.route("/serve-file-inline")
class ServeFileInline(Resource):
    """Token-gated inline file delivery"""

    @files_ns.doc("serve_file_inline", params={
        "path": "Storage path of the file",
        "token": "File access token issued for that path",
    })
    @files_ns.response(200, "File content")
    @files_ns.response(400, "Bad Request", error_response)
    @files_ns.response(401, "Invalid Token", error_response)
    @files_ns.response(403, "Forbidden", error_response)
    @files_ns.response(404, "File Not Found", error_response)
    def get(self):
        """
        Serve a band file inline

        Tokens are single use, with a short reuse window so PDF viewers
        can re-request the same URL.
        """
        storage_path = request.args.get("path", "")
        token = request.args.get("token", "")

        try:
            service = current_app.container.resolve(FileServingService)
            served = service.serve(storage_path, token)
        except TokenRejectedError as e:
            current_app.logger.warning(
                f"[SERVE_FILE] Rejected {e.status_code} for token {token[:8]}: {e.message}"
            )
            return create_error_response(
                REJECTION_CATEGORIES.get(e.status_code, ErrorCategory.INVALID_REQUEST),
                e.message,
                status_code=e.status_code,
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /serve-file-inline: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Internal server error", status_code=500
            )

        try:
            content = served.content.read()
        finally:
            served.content.close()

        file_name = os.path.basename(served.storage_path)
        return Response(
            content,
            status=200,
            mimetype=served.content_type,
            headers={
                "Content-Disposition": f'inline; filename="{file_name}"',
                "Cache-Control": "private, no-store",
            },
        )


@files_ns.route("/cleanup-expired-tokens")
class CleanupExpiredTokens(Resource):
    """Token housekeeping triggered by an external scheduler"""

    @files_ns.doc("cleanup_expired_tokens", params={
        "x-edge-secret": {"in": "header", "description": "Shared scheduler secret"},
    })
    @files_ns.response(200, "Success", cleanup_response)
    @files_ns.response(401, "Unauthorized", error_response)
    @files_ns.response(500, "Internal Server Error", error_response)
    def post(self):
        """
        Delete token records that expired more than an hour ago
        """
        expected = current_app.config.get("EDGE_SECRET_KEY")
        provided = request.headers.get("x-edge-secret", "")
        if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
            current_app.logger.warning("[CLEANUP] Rejected request with invalid edge secret")
            return create_error_response(
                ErrorCategory.UNAUTHORIZED, "Invalid or missing edge secret", status_code=401
            )

        try:
            service = current_app.container.resolve(TokenCleanupService)
            result = service.cleanup()
        except RedisError as e:
            current_app.logger.error(f"[CLEANUP] Token store error: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Token store unavailable", status_code=500
            )
        except Exception as e:
            current_app.logger.exception(f"Unexpected error in /cleanup-expired-tokens: {e}")
            return create_error_response(
                ErrorCategory.SYSTEM_ERROR, "Internal server error", status_code=500
            )

        return result.to_dict(), 200
