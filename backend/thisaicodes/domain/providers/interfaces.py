"""Domain provider interfaces for the generation workflow."""

from __future__ import annotations

from typing import Protocol

from thisaicodes.domain.models.generation import (
    FileDescriptor,
    GeneratedCode,
    GeneratedFile,
)


class ProviderError(RuntimeError):
    """Raised when a hosted code-generation provider cannot produce output."""


class ArtifactStoreError(RuntimeError):
    """Raised when a generated file cannot be written to blob storage."""


class CodeGenerator(Protocol):
    """Turns a natural-language prompt into normalized application files."""

    def generate(
        self, prompt: str, type: str, framework: str
    ) -> GeneratedCode:  # pragma: no cover - interface
        ...


class ArtifactStore(Protocol):
    """Persists generated files and hands back where they can be fetched."""

    def put(
        self, generation_id: str, file: GeneratedFile
    ) -> FileDescriptor:  # pragma: no cover - interface
        ...
