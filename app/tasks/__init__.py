# Loading the configured Celery app makes it current before any task binds.
from celery_app import celery_app  # noqa: F401
