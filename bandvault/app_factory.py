"""
Application Factory

Creates the Flask application serving the file access functions and wires
its services through the DependencyContainer. Tests pass their own
container to replace the Redis-backed services.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify
from flask_cors import CORS

from .application.dependency_container import DependencyContainer
from .application.file_serving_service import FileServingService
from .application.token_cleanup_service import TokenCleanupService
from .config.celery_config import make_celery
from .config.file_access_config import FileAccessConfig
from .config.redis_config import get_redis_repository, init_redis, redis_health_check
from .domain.file_access.repositories import FileAccessTokenRepository
from .domain.file_storage.storage_repository import IFileStorageRepository
from .infrastructure.redis_token_repository import RedisFileAccessTokenRepository
from .infrastructure.storage_factory import StorageFactory

logger = logging.getLogger(__name__)


class AppConfig:
    """Application configuration."""

    def __init__(self, file_access: Optional[FileAccessConfig] = None):
        self.api_version = os.getenv("API_VERSION", "v1")
        self.flask_env = os.getenv("FLASK_ENV", "development")
        self.is_production = self.flask_env == "production"
        self.file_access = file_access or FileAccessConfig()


def create_app(
    config: Optional[AppConfig] = None,
    container: Optional[DependencyContainer] = None,
) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config: Application configuration, uses default if None
        container: Pre-built service container; built from Redis if None

    Returns:
        Configured Flask application
    """
    if config is None:
        config = AppConfig()

    app = Flask(__name__)
    app.config["EDGE_SECRET_KEY"] = config.file_access.edge_secret_key

    CORS(
        app,
        resources={
            r"/*": {
                "origins": _cors_origins(config.file_access),
                "methods": ["GET", "POST", "OPTIONS"],
                "allow_headers": [
                    "Authorization",
                    "Content-Type",
                    "apikey",
                    "x-client-info",
                    "x-edge-secret",
                ],
                "max_age": 3600,
            }
        },
    )

    _initialize_infrastructure(app)

    if container is None:
        container = _build_container(config)
    app.container = container

    _register_blueprints(app, config)
    _register_health_endpoint(app)

    return app


def _cors_origins(file_access: FileAccessConfig):
    origins = file_access.allowed_origins
    return "*" if not origins or "*" in origins else origins


def _initialize_infrastructure(app: Flask) -> None:
    """Initialize Redis and Celery; failures leave the app degraded."""
    try:
        init_redis()
        logger.info("Redis initialized successfully")

        app.celery = make_celery(app)
        logger.info("Celery initialized successfully")
    except Exception as e:
        logger.warning(f"Could not initialize infrastructure: {e}")
        app.celery = None


def _build_container(config: AppConfig) -> Optional[DependencyContainer]:
    """
    Register the Redis token store, the object store and the services
    resolved by the API handlers and Celery tasks.
    """
    file_access = config.file_access
    try:
        container = DependencyContainer()

        token_repository = RedisFileAccessTokenRepository(
            get_redis_repository(), retention_seconds=file_access.token_retention_seconds
        )
        storage_repository = StorageFactory.create_storage()

        container.register_singleton(FileAccessTokenRepository, token_repository)
        container.register_singleton(IFileStorageRepository, storage_repository)
        container.register_singleton(
            FileServingService,
            FileServingService(
                token_repository,
                storage_repository,
                grace_period=file_access.token_reuse_grace_period,
            ),
        )
        container.register_singleton(
            TokenCleanupService,
            TokenCleanupService(token_repository, retention=file_access.token_retention),
        )

        logger.info("Application services initialized with DependencyContainer")
        return container
    except Exception as e:
        logger.warning(f"Could not initialize services: {e}")
        return None


def _register_blueprints(app: Flask, config: AppConfig) -> None:
    from .api.v1 import functions_bp

    app.register_blueprint(functions_bp)
    logger.info(
        f"Functions API {config.api_version} registered at /functions/v1 "
        f"with Swagger UI at /functions/docs"
    )


def _get_health_status(app: Flask) -> tuple[dict, int]:
    """
    Get health status of Redis, Celery and the service container.

    Returns:
        Tuple of (health_status_dict, http_status_code)
    """
    health_status = {
        "status": "ok",
        "message": "backend ready",
        "redis": "unknown",
        "celery": "unknown",
        "services": "unknown",
    }

    try:
        if redis_health_check():
            health_status["redis"] = "connected"
        else:
            health_status["redis"] = "disconnected"
            health_status["status"] = "degraded"
    except Exception as e:
        health_status["redis"] = f"error: {str(e)}"
        health_status["status"] = "degraded"

    if getattr(app, "celery", None) is not None:
        health_status["celery"] = "available"
    else:
        health_status["celery"] = "unavailable"
        health_status["status"] = "degraded"

    if getattr(app, "container", None) is not None:
        health_status["services"] = "available"
    else:
        health_status["services"] = "unavailable"
        health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "ok" else 503
    return health_status, status_code


def _register_health_endpoint(app: Flask) -> None:

    @app.route("/health", methods=["GET"])
    def health():
        """Overall health of the application and its dependencies."""
        health_status, status_code = _get_health_status(app)
        return jsonify(health_status), status_code
