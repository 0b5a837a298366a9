from __future__ import annotations

from django.contrib import admin

from .models import Account, Subscription


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "name",
        "email_verified",
        "generations_used",
        "generations_limit",
        "subscription_tier",
        "updated_at",
    )
    list_filter = ("email_verified", "subscription_tier")
    search_fields = ("user__username", "user__email", "name")
    readonly_fields = ("created_at", "updated_at", "generations_used")


@admin.register(Subscription)
class SubscriptionAdmin(admin.ModelAdmin):
    list_display = ("user", "tier", "status", "current_period_end", "cancel_at_period_end")
    list_filter = ("tier", "status")
    search_fields = ("user__email", "stripe_subscription_id", "stripe_customer_id")
    readonly_fields = ("created_at", "updated_at")
