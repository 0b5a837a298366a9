import pytest

from thisaicodes.infrastructure.ai.v0 import V0CodeGenerator
from thisaicodes.infrastructure.ai.workers_ai import WorkersAICodeGenerator
from thisaicodes.infrastructure.storage.memory import InMemoryArtifactStore
from thisaicodes.interfaces.providers.registry import Container, ProviderRegistry


def test_provider_registry_resolve():
    registry: ProviderRegistry[int] = ProviderRegistry()
    registry.register("one", lambda: 1)
    assert registry.resolve("one") == 1


def test_provider_registry_rejects_duplicates():
    registry: ProviderRegistry[int] = ProviderRegistry()
    registry.register("one", lambda: 1)
    with pytest.raises(ValueError):
        registry.register("one", lambda: 2)


def test_provider_registry_caches_until_reset():
    registry: ProviderRegistry[object] = ProviderRegistry()
    registry.register("obj", object)
    first = registry.resolve("obj")
    assert registry.resolve("obj") is first
    registry.reset()
    assert registry.resolve("obj") is not first


def test_container_resolve_explicit_key():
    container = Container()
    container.artifact_stores.register("memory", lambda: "store")
    assert container.resolve_artifact_store("memory") == "store"


def test_bootstrap_container_follows_settings(isolated_providers, settings):
    settings.V0_API_KEY = "key"

    assert isinstance(isolated_providers.resolve_primary_generator(), V0CodeGenerator)
    assert isinstance(isolated_providers.resolve_fallback_generator(), WorkersAICodeGenerator)
    assert isinstance(isolated_providers.resolve_artifact_store(), InMemoryArtifactStore)
    assert isolated_providers.resolve_primary_generator().api_key == "key"
