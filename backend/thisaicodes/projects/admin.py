from __future__ import annotations

from django.contrib import admin

from .models import Deployment, Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("name", "user", "framework", "status", "created_at", "deleted_at")
    list_filter = ("framework", "status")
    search_fields = ("name", "user__email")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Deployment)
class DeploymentAdmin(admin.ModelAdmin):
    list_display = ("project", "user", "status", "branch", "url", "created_at")
    list_filter = ("status",)
    search_fields = ("project__name", "user__email", "domain")
    readonly_fields = ("created_at",)
