"""Application-layer use cases for prompt-to-code generation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, List, Protocol, Tuple

from thisaicodes.domain.models.generation import (
    FileDescriptor,
    GeneratedCode,
    Generation,
    GenerationContext,
)

if TYPE_CHECKING:
    from thisaicodes.domain.providers.interfaces import ArtifactStore, CodeGenerator

logger = logging.getLogger(__name__)


class GenerationFailed(RuntimeError):
    """Raised after a generation has been recorded as failed."""

    def __init__(self, generation: Generation, message: str):
        super().__init__(message)
        self.generation = generation


class GenerationRepository(Protocol):
    """Persistence boundary for generation records."""

    def add(self, generation: Generation) -> None:  # pragma: no cover
        ...

    def save_completed(self, generation: Generation) -> None:  # pragma: no cover
        ...

    def save_failed(self, generation: Generation) -> None:  # pragma: no cover
        ...

    def get(self, generation_id: str, *, account_id: int) -> Generation:  # pragma: no cover
        ...

    def list_for_account(
        self, account_id: int, *, limit: int, offset: int
    ) -> Tuple[List[Generation], int]:  # pragma: no cover
        ...


class QuotaGate(Protocol):
    def ensure_available(self, account_id: int) -> None:  # pragma: no cover
        ...

    def record_usage(self, account_id: int) -> None:  # pragma: no cover
        ...


@dataclass
class GenerateCode:
    """Quota check, ledger insert, provider call, artifact upload, finalize.

    Every step is its own statement or network call. Nothing here is
    transactional or retried, and artifacts written before a failure are
    left in place.
    """

    repository: GenerationRepository
    quota: QuotaGate
    primary: "CodeGenerator"
    fallback: "CodeGenerator"
    artifact_store: "ArtifactStore"

    def __call__(
        self,
        context: GenerationContext,
        *,
        prompt: str,
        type: str,
        framework: str,
    ) -> Generation:
        self.quota.ensure_available(context.account_id)

        generation = Generation.start(context, prompt=prompt, type=type, framework=framework)
        self.repository.add(generation)
        logger.info(
            "Generation started",
            extra={
                "generation_id": generation.id,
                "account_id": context.account_id,
                "type": generation.type,
                "framework": generation.framework,
            },
        )

        try:
            code = self._generate(generation)
            files = self._store(generation, code)
            # `generation` stays processing until every write has landed.
            completed = replace(generation)
            completed.complete(code, files)
            self.repository.save_completed(completed)
            self.quota.record_usage(context.account_id)
        except Exception as exc:
            logger.exception(
                "Generation failed",
                extra={"generation_id": generation.id, "account_id": context.account_id},
            )
            generation.fail(str(exc))
            self.repository.save_failed(generation)
            raise GenerationFailed(generation, str(exc)) from exc

        generation = completed
        logger.info(
            "Generation completed",
            extra={"generation_id": generation.id, "file_count": len(generation.files)},
        )
        return generation

    def _generate(self, generation: Generation) -> GeneratedCode:
        try:
            return self.primary.generate(
                generation.prompt, generation.type, generation.framework
            )
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "Primary provider failed, using fallback",
                extra={"generation_id": generation.id, "error": str(exc)},
            )
        return self.fallback.generate(
            generation.prompt, generation.type, generation.framework
        )

    def _store(self, generation: Generation, code: GeneratedCode) -> List[FileDescriptor]:
        return [self.artifact_store.put(generation.id, item) for item in code.files]
