"""Celery tasks delivering transactional email."""

from __future__ import annotations

from celery import shared_task

from thisaicodes.accounts import emails


@shared_task(bind=True, autoretry_for=(OSError,), retry_backoff=True, max_retries=3)
def send_verification_email_task(self, recipient: str, token: str) -> None:
    emails.send_verification_email(recipient=recipient, token=token)


@shared_task(bind=True, autoretry_for=(OSError,), retry_backoff=True, max_retries=3)
def send_password_reset_email_task(self, recipient: str, token: str) -> None:
    emails.send_password_reset_email(recipient=recipient, token=token)
