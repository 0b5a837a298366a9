from __future__ import annotations

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Generation(models.Model):
    class Status(models.TextChoices):
        PROCESSING = "processing", "Processing"
        COMPLETED = "completed", "Completed"
        FAILED = "failed", "Failed"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="generations"
    )
    project = models.ForeignKey(
        "projects.Project",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="generations",
    )
    prompt = models.TextField()
    type = models.CharField(max_length=32)
    framework = models.CharField(max_length=32)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.PROCESSING
    )
    result = models.JSONField(null=True, blank=True)
    files = models.JSONField(default=list, blank=True)
    error = models.TextField(blank=True, default="")
    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = "thisaicodes_generations"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="generation_user_created_idx")
        ]

    def __str__(self) -> str:  # pragma: no cover - debugging helper
        return f"Generation(id={self.id}, status={self.status})"
