"""Best-effort product analytics."""

from __future__ import annotations

import logging
from typing import Any, Dict

from django.db import DatabaseError

from thisaicodes.analytics.models import AnalyticsEvent

logger = logging.getLogger(__name__)


def _client_ip(request) -> str | None:
    if request is None:
        return None
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR", "")
    if forwarded:
        return forwarded.split(",", 1)[0].strip() or None
    return request.META.get("REMOTE_ADDR") or None


def record_event(
    user,
    event_type: str,
    *,
    data: Dict[str, Any] | None = None,
    project_id: str | None = None,
    request=None,
) -> AnalyticsEvent | None:
    """Persist an analytics event; failures are logged and never block the caller."""
    try:
        return AnalyticsEvent.objects.create(
            user=user,
            project_id=project_id,
            event_type=event_type,
            event_data=data or {},
            ip_address=_client_ip(request),
            user_agent=(request.META.get("HTTP_USER_AGENT", "") if request else ""),
        )
    except DatabaseError as exc:
        logger.warning(
            "Failed to record analytics event",
            extra={"event_type": event_type, "user_id": user.pk, "error": str(exc)},
        )
        return None
