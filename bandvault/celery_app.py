"""
Celery Application Instance

Celery app used by workers and the beat scheduler, built through the app
factory so tasks can resolve services from the container.
"""

from .app_factory import create_app

flask_app = create_app()

celery_app = flask_app.celery

# Task modules are imported by name when the worker starts
celery_app.conf.imports = ("bandvault.tasks.cleanup_task",)
