"""Celery application instance for ThisAICodes."""

from __future__ import annotations

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "thisaicodes.config.settings")

app = Celery("thisaicodes")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.autodiscover_tasks(lambda: ["thisaicodes.application"])
