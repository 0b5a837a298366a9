from __future__ import annotations

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import Account


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def ensure_account_record(sender, instance, created, **kwargs):
    if not created:
        return
    Account.for_user(instance, name=instance.get_full_name())
