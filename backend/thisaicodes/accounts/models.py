from __future__ import annotations

import secrets
import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models
from django.db.models import F
from django.utils import timezone


def _new_token() -> str:
    return str(uuid.uuid4())


class SubscriptionTier(models.TextChoices):
    FREE = "free", "Free"
    PRO = "pro", "Pro"
    ENTERPRISE = "enterprise", "Enterprise"


def default_generation_limit(tier: str = SubscriptionTier.FREE) -> int:
    limits = getattr(settings, "GENERATION_PLAN_LIMITS", {}) or {}
    try:
        return int(limits.get(tier, limits.get(SubscriptionTier.FREE, 3)))
    except (TypeError, ValueError):
        return 3


class Account(models.Model):
    """Per-user profile holding verification state, usage and plan."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="account"
    )
    name = models.CharField(max_length=255, blank=True, default="")
    email_verified = models.BooleanField(default=False)
    verification_token = models.CharField(
        max_length=64, null=True, blank=True, db_index=True
    )
    email_verified_at = models.DateTimeField(null=True, blank=True)
    reset_token = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    reset_token_expires_at = models.DateTimeField(null=True, blank=True)
    generations_used = models.PositiveIntegerField(default=0)
    generations_limit = models.PositiveIntegerField(default=default_generation_limit)
    subscription_tier = models.CharField(
        max_length=32,
        choices=SubscriptionTier.choices,
        default=SubscriptionTier.FREE,
    )
    subscription_id = models.CharField(max_length=255, blank=True, default="")
    subscription_status = models.CharField(max_length=64, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - admin helper
        return f"{self.user} ({self.subscription_tier})"

    @classmethod
    def for_user(cls, user, *, name: str | None = None) -> "Account":
        defaults = {
            "name": name or "",
            "verification_token": _new_token(),
        }
        account, _ = cls.objects.get_or_create(user=user, defaults=defaults)
        return account

    @property
    def has_quota(self) -> bool:
        return self.generations_used < self.generations_limit

    def verify_email(self) -> None:
        self.email_verified = True
        self.verification_token = None
        self.email_verified_at = timezone.now()
        self.save(
            update_fields=[
                "email_verified",
                "verification_token",
                "email_verified_at",
                "updated_at",
            ]
        )

    def issue_reset_token(self) -> str:
        token = secrets.token_urlsafe(32)
        self.reset_token = token
        self.reset_token_expires_at = timezone.now() + timedelta(
            seconds=getattr(settings, "PASSWORD_RESET_TIMEOUT_SEC", 3600)
        )
        self.save(update_fields=["reset_token", "reset_token_expires_at", "updated_at"])
        return token

    def reset_token_valid(self) -> bool:
        return bool(
            self.reset_token
            and self.reset_token_expires_at
            and self.reset_token_expires_at > timezone.now()
        )

    def clear_reset_token(self) -> None:
        self.reset_token = None
        self.reset_token_expires_at = None
        self.save(update_fields=["reset_token", "reset_token_expires_at", "updated_at"])

    @classmethod
    def increment_usage(cls, user_id: int) -> None:
        # Single UPDATE so concurrent increments are never lost.
        cls.objects.filter(user_id=user_id).update(
            generations_used=F("generations_used") + 1, updated_at=timezone.now()
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.user_id,
            "email": self.user.email,
            "name": self.name,
            "emailVerified": self.email_verified,
            "generationsUsed": self.generations_used,
            "generationsLimit": self.generations_limit,
            "subscriptionTier": self.subscription_tier,
            "createdAt": self.created_at.isoformat(),
        }


class Subscription(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="subscriptions",
    )
    stripe_subscription_id = models.CharField(
        max_length=255, unique=True, null=True, blank=True
    )
    stripe_customer_id = models.CharField(max_length=255, blank=True, default="")
    status = models.CharField(max_length=64)
    tier = models.CharField(max_length=32, choices=SubscriptionTier.choices)
    current_period_start = models.DateTimeField(null=True, blank=True)
    current_period_end = models.DateTimeField(null=True, blank=True)
    cancel_at_period_end = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:  # pragma: no cover - admin helper
        return f"Subscription({self.user}, {self.tier}, {self.status})"
