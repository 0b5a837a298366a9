from __future__ import annotations

from typing import Any

from django.conf import settings

from thisaicodes.accounts.models import Account

GENERATION_LIMIT_MESSAGE = "Generation limit reached. Upgrade your plan to continue."


class QuotaExceeded(PermissionError):
    def __init__(self, *, metric: str, limit: int | None, usage: int, message: str):
        super().__init__(message)
        self.metric = metric
        self.limit = limit
        self.usage = usage
        self.message = message


class GenerationQuotaService:
    """Evaluate the per-account generation quota and record consumption.

    The check and the increment are separate statements: two concurrent
    requests can both pass ``ensure_available`` when one unit remains.
    """

    def __init__(self, django_settings: Any | None = None):
        self._settings = django_settings or settings

    # public API -----------------------------------------------------------------

    def ensure_available(self, account_id: int) -> None:
        if not self._should_enforce():
            return
        account = Account.objects.only(
            "generations_used", "generations_limit"
        ).get(user_id=account_id)
        if not account.has_quota:
            raise QuotaExceeded(
                metric="generations",
                limit=account.generations_limit,
                usage=account.generations_used,
                message=GENERATION_LIMIT_MESSAGE,
            )

    def record_usage(self, account_id: int) -> None:
        Account.increment_usage(account_id)

    # helpers --------------------------------------------------------------------

    def _should_enforce(self) -> bool:
        return bool(getattr(self._settings, "GENERATION_QUOTAS_ENABLED", False))


_SERVICE: GenerationQuotaService | None = None


def get_quota_service(refresh: bool = False) -> GenerationQuotaService:
    global _SERVICE
    if _SERVICE is None or refresh:
        _SERVICE = GenerationQuotaService()
    return _SERVICE
