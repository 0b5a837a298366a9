"""In-memory artifact store useful for development and unit tests."""

from __future__ import annotations

from typing import Dict, Tuple

from thisaicodes.domain.models.generation import FileDescriptor, GeneratedFile
from thisaicodes.domain.providers.interfaces import ArtifactStore
from thisaicodes.infrastructure.storage.s3 import (
    DEFAULT_NAMESPACE,
    DEFAULT_PUBLIC_URL,
    object_key,
)


class InMemoryArtifactStore(ArtifactStore):
    def __init__(
        self, public_url: str = DEFAULT_PUBLIC_URL, namespace: str = DEFAULT_NAMESPACE
    ) -> None:
        self.public_url = public_url
        self.namespace = namespace
        self.objects: Dict[str, Tuple[str, str]] = {}

    def put(self, generation_id: str, file: GeneratedFile) -> FileDescriptor:
        key = object_key(self.namespace, generation_id, file.name)
        self.objects[key] = (file.content, file.type or "text/plain")
        return FileDescriptor(
            name=file.name,
            url=f"{self.public_url.rstrip('/')}/{key}",
            type=file.type,
        )


def from_env() -> InMemoryArtifactStore:
    from django.conf import settings

    return InMemoryArtifactStore(
        public_url=getattr(settings, "GENERATION_STORAGE_PUBLIC_URL", DEFAULT_PUBLIC_URL),
        namespace=getattr(settings, "GENERATION_STORAGE_NAMESPACE", DEFAULT_NAMESPACE),
    )
