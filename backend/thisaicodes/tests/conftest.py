import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def isolated_providers(settings):
    from thisaicodes.bootstrap import container

    cache.clear()
    settings.ARTIFACT_STORE = "memory"
    container.reset()
    yield container
    container.reset()
