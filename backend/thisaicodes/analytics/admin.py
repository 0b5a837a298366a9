from __future__ import annotations

from django.contrib import admin

from .models import AnalyticsEvent


@admin.register(AnalyticsEvent)
class AnalyticsEventAdmin(admin.ModelAdmin):
    list_display = ("event_type", "user", "project", "ip_address", "created_at")
    list_filter = ("event_type",)
    search_fields = ("event_type", "user__email")
    readonly_fields = ("created_at",)
