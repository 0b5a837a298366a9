"""Simple dependency injection container with provider registry support."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ProviderRegistry(Generic[T]):
    """Maps provider keys (e.g., ``v0`` or ``s3``) to lazily constructed instances."""

    factory_map: Dict[str, Callable[[], T]] = field(default_factory=dict)
    _cache: Dict[str, T] = field(default_factory=dict, init=False, repr=False)

    def register(self, key: str, factory: Callable[[], T]) -> None:
        if key in self.factory_map:
            raise ValueError(f"Provider '{key}' already registered")
        self.factory_map[key] = factory
        if key in self._cache:
            del self._cache[key]

    def resolve(self, key: str) -> T:
        if key in self._cache:
            return self._cache[key]
        try:
            factory = self.factory_map[key]
        except KeyError as exc:
            raise KeyError(f"Provider '{key}' not found") from exc
        instance = factory()
        self._cache[key] = instance
        return instance

    def reset(self) -> None:
        """Drop cached instances so the next resolve rebuilds from settings."""
        self._cache.clear()


@dataclass
class Container:
    """Minimal DI container orchestrating provider registries."""

    primary_generators: ProviderRegistry[Any] = field(default_factory=ProviderRegistry)
    fallback_generators: ProviderRegistry[Any] = field(default_factory=ProviderRegistry)
    artifact_stores: ProviderRegistry[Any] = field(default_factory=ProviderRegistry)

    def resolve_primary_generator(self, key: Optional[str] = None) -> Any:
        target = key or self._default("PRIMARY_GENERATOR", "v0")
        return self.primary_generators.resolve(target)

    def resolve_fallback_generator(self, key: Optional[str] = None) -> Any:
        target = key or self._default("FALLBACK_GENERATOR", "workers_ai")
        return self.fallback_generators.resolve(target)

    def resolve_artifact_store(self, key: Optional[str] = None) -> Any:
        target = key or self._default("ARTIFACT_STORE", "s3")
        return self.artifact_stores.resolve(target)

    def reset(self) -> None:
        for registry in (
            self.primary_generators,
            self.fallback_generators,
            self.artifact_stores,
        ):
            registry.reset()

    def _default(self, attr: str, fallback: str) -> str:
        from django.conf import settings
        from django.core.exceptions import ImproperlyConfigured

        try:
            return getattr(settings, attr, fallback)
        except ImproperlyConfigured:
            return fallback
