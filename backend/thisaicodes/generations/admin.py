from __future__ import annotations

from django.contrib import admin

from .models import Generation


@admin.register(Generation)
class GenerationAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "type", "framework", "status", "created_at", "completed_at")
    list_filter = ("status", "type", "framework")
    search_fields = ("id", "user__email", "prompt")
    readonly_fields = (
        "id",
        "user",
        "project",
        "prompt",
        "result",
        "files",
        "error",
        "created_at",
        "completed_at",
    )
