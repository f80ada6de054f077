"""
Cleanup Task

Celery beat task deleting file access tokens past their retention window.
"""

import logging

from flask import current_app

from ..application.token_cleanup_service import TokenCleanupService
from ..celery_app import celery_app

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, name="bandvault.tasks.cleanup_expired_tokens")
def cleanup_expired_tokens(self):
    """
    Periodic token cleanup, scheduled every 5 minutes by Celery beat.

    Returns:
        dict: success flag, deleted count and run timestamp
    """
    logger.info("Starting file access token cleanup")

    service = current_app.container.resolve(TokenCleanupService)
    result = service.cleanup()

    logger.info(f"Token cleanup completed: {result.deleted_count} records removed")
    return result.to_dict()
