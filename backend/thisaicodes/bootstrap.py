"""Application bootstrap utilities: dependency container and repositories."""

from __future__ import annotations

from thisaicodes.infrastructure.ai import v0, workers_ai
from thisaicodes.infrastructure.repositories import DjangoGenerationRepository
from thisaicodes.infrastructure.storage import memory as memory_store, s3
from thisaicodes.interfaces.providers.registry import Container

container = Container()
container.primary_generators.register("v0", v0.from_env)
container.fallback_generators.register("workers_ai", workers_ai.from_env)
container.artifact_stores.register("s3", s3.from_env)
container.artifact_stores.register("memory", memory_store.from_env)

repository = DjangoGenerationRepository()
