"""
Celery Configuration

Redis broker and the beat schedule for token housekeeping.
"""

import os

from celery import Celery
from kombu import Queue


class CeleryConfig:
    """Celery configuration settings."""

    broker_url = os.getenv("CELERY_BROKER_URL", os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    result_backend = os.getenv(
        "CELERY_RESULT_BACKEND", os.getenv("REDIS_URL", "redis://localhost:6379/0")
    )

    task_serializer = "json"
    accept_content = ["json"]
    result_serializer = "json"
    timezone = "UTC"
    enable_utc = True

    worker_prefetch_multiplier = 1
    task_acks_late = True

    task_routes = {
        "bandvault.tasks.cleanup_expired_tokens": {"queue": "cleanup_queue"},
    }

    task_default_queue = "default"
    task_queues = (
        Queue("default", routing_key="default"),
        Queue("cleanup_queue", routing_key="cleanup"),
    )

    beat_schedule = {
        "cleanup-expired-file-access-tokens": {
            "task": "bandvault.tasks.cleanup_expired_tokens",
            "schedule": float(os.getenv("TOKEN_CLEANUP_INTERVAL_SECONDS", 300)),
        },
    }

    task_soft_time_limit = 60
    task_time_limit = 120

    result_expires = 3600


def make_celery(app):
    """
    Create a Celery instance bound to the Flask app context.

    Args:
        app: Flask application instance

    Returns:
        Configured Celery instance
    """
    celery = Celery(
        app.import_name,
        backend=CeleryConfig.result_backend,
        broker=CeleryConfig.broker_url,
    )
    celery.config_from_object(CeleryConfig)

    class ContextTask(celery.Task):
        """Runs every task inside the Flask app context."""

        def __call__(self, *args, **kwargs):
            with app.app_context():
                return self.run(*args, **kwargs)

    celery.Task = ContextTask
    return celery
