from __future__ import annotations

from urllib.parse import urlencode

from django.conf import settings
from django.core.mail import send_mail
from django.utils.html import escape

VERIFICATION_SUBJECT = "Verify your ThisAICodes account"
PASSWORD_RESET_SUBJECT = "Reset your ThisAICodes password"


def _frontend_link(path: str, token: str) -> str:
    base = getattr(settings, "FRONTEND_URL", "") or "https://thisaicodes.com"
    return f"{base.rstrip('/')}{path}?{urlencode({'token': token})}"


def _from_address() -> str:
    return getattr(settings, "DEFAULT_FROM_EMAIL", None) or "noreply@thisaicodes.com"


def _render_action_email(*, heading: str, body: str, action_label: str, url: str, notes: str) -> str:
    link = escape(url)
    return f"""
<html>
  <body style="margin:0;padding:0;background:#f8f9fa;">
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <div style="background: linear-gradient(135deg, #0A0E27 0%, #1A1D3A 100%); padding: 40px; text-align: center;">
        <h1 style="color: #00D4FF; font-size: 32px; margin: 0;">ThisAICodes</h1>
      </div>
      <div style="padding: 40px; background: #fff;">
        <h2 style="color: #333; margin-bottom: 20px;">{heading}</h2>
        <p style="color: #666; line-height: 1.6; margin-bottom: 30px;">{body}</p>
        <a href="{link}"
           style="display: inline-block; padding: 15px 30px; background: #00D4FF; color: #000; text-decoration: none; border-radius: 8px; font-weight: bold; margin-bottom: 30px;">
          {action_label}
        </a>
        {notes}
        <p style="color: #888; font-size: 14px;">
          If the button doesn't work, copy and paste this link into your browser:<br>
          <a href="{link}" style="color: #00D4FF;">{link}</a>
        </p>
      </div>
      <div style="padding: 20px; background: #f8f9fa; text-align: center; color: #666; font-size: 12px;">
        <p>This email was sent by ThisAICodes. If you didn't expect it, you can safely ignore this email.</p>
      </div>
    </div>
  </body>
</html>
"""


def send_verification_email(*, recipient: str, token: str):
    """Send the address verification link to a newly registered account."""
    if not recipient:
        return

    url = _frontend_link("/auth/verify", token)
    html_message = _render_action_email(
        heading="Verify your email address",
        body=(
            "Welcome to ThisAICodes! Please verify your email address to start "
            "building amazing applications with AI."
        ),
        action_label="Verify Email Address",
        url=url,
        notes="",
    )
    plain_message = (
        "Welcome to ThisAICodes! Verify your email address by opening this link:\n"
        f"{url}\n"
    )
    send_mail(
        VERIFICATION_SUBJECT,
        plain_message,
        _from_address(),
        [recipient],
        html_message=html_message,
    )


def send_password_reset_email(*, recipient: str, token: str):
    """Send a one-hour password reset link."""
    if not recipient:
        return

    url = _frontend_link("/auth/reset-password", token)
    html_message = _render_action_email(
        heading="Reset your password",
        body=(
            "We received a request to reset your password. Click the button below "
            "to create a new password."
        ),
        action_label="Reset Password",
        url=url,
        notes=(
            '<p style="color: #888; font-size: 14px;">This link will expire in 1 hour. '
            "If you didn't request a password reset, you can safely ignore this email.</p>"
        ),
    )
    plain_message = (
        "Reset your ThisAICodes password with this link (valid for 1 hour):\n"
        f"{url}\n"
    )
    send_mail(
        PASSWORD_RESET_SUBJECT,
        plain_message,
        _from_address(),
        [recipient],
        html_message=html_message,
    )
