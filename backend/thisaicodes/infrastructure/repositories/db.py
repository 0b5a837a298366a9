from __future__ import annotations

from typing import List, Tuple

from django.apps import apps
from django.core.exceptions import ValidationError

from thisaicodes.application.use_cases import GenerationRepository
from thisaicodes.domain.models.generation import (
    FileDescriptor,
    Generation,
    GenerationStatus,
)


class DjangoGenerationRepository(GenerationRepository):
    """Django ORM backed generation ledger.

    Each method issues its own UPDATE; there is no surrounding transaction.
    """

    def __init__(self) -> None:
        self.model = apps.get_model("generations", "Generation")

    def add(self, generation: Generation) -> None:
        self.model.objects.create(
            id=generation.id,
            user_id=generation.account_id,
            project_id=generation.project_id,
            prompt=generation.prompt,
            type=generation.type,
            framework=generation.framework,
            status=generation.status.value,
            created_at=generation.created_at,
        )

    def save_completed(self, generation: Generation) -> None:
        self.model.objects.filter(id=generation.id).update(
            status=generation.status.value,
            result=generation.result,
            files=[item.as_dict() for item in generation.files],
            completed_at=generation.completed_at,
        )

    def save_failed(self, generation: Generation) -> None:
        # Overwrites any completed state a partial finalize left behind.
        self.model.objects.filter(id=generation.id).update(
            status=generation.status.value,
            error=generation.error,
            result=None,
            files=[],
            completed_at=None,
        )

    def get(self, generation_id: str, *, account_id: int) -> Generation:
        try:
            record = self.model.objects.get(id=generation_id, user_id=account_id)
        except (self.model.DoesNotExist, ValidationError, ValueError) as exc:
            raise KeyError(generation_id) from exc
        return self._to_domain(record)

    def list_for_account(
        self, account_id: int, *, limit: int, offset: int
    ) -> Tuple[List[Generation], int]:
        query = self.model.objects.filter(user_id=account_id).order_by("-created_at")
        total = query.count()
        records = query[offset : offset + limit]
        return [self._to_domain(record) for record in records], total

    # helpers -----------------------------------------------------------

    def _to_domain(self, record) -> Generation:
        files: List[FileDescriptor] = []
        for item in record.files or []:
            if isinstance(item, dict):
                files.append(
                    FileDescriptor(
                        name=str(item.get("name", "")),
                        url=str(item.get("url", "")),
                        type=str(item.get("type") or ""),
                    )
                )
        return Generation(
            id=str(record.id),
            account_id=record.user_id,
            project_id=str(record.project_id) if record.project_id else None,
            prompt=record.prompt,
            type=record.type,
            framework=record.framework,
            status=GenerationStatus(record.status),
            result=record.result,
            files=files,
            error=record.error or "",
            created_at=record.created_at,
            completed_at=record.completed_at,
        )
