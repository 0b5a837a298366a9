import pytest

from thisaicodes.application.use_cases import GenerateCode, GenerationFailed
from thisaicodes.domain.models.generation import (
    GeneratedCode,
    GeneratedFile,
    GenerationContext,
    GenerationStatus,
)
from thisaicodes.domain.providers.interfaces import ArtifactStoreError, ProviderError
from thisaicodes.infrastructure.ai.workers_ai import WorkersAICodeGenerator
from thisaicodes.infrastructure.repositories.memory import InMemoryGenerationRepository
from thisaicodes.infrastructure.storage.memory import InMemoryArtifactStore
from thisaicodes.quotas.services import GENERATION_LIMIT_MESSAGE, QuotaExceeded


class StubQuota:
    def __init__(self, used: int = 0, limit: int = 3):
        self.used = used
        self.limit = limit

    def ensure_available(self, account_id):
        if self.used >= self.limit:
            raise QuotaExceeded(
                metric="generations",
                limit=self.limit,
                usage=self.used,
                message=GENERATION_LIMIT_MESSAGE,
            )

    def record_usage(self, account_id):
        self.used += 1


class StubGenerator:
    def __init__(self, code=None, error=None):
        self.code = code
        self.error = error
        self.calls = []

    def generate(self, prompt, type, framework):
        self.calls.append((prompt, type, framework))
        if self.error is not None:
            raise self.error
        return self.code


class BrokenStore:
    def put(self, generation_id, file):
        raise ArtifactStoreError("bucket unavailable")


def _code(*names):
    return GeneratedCode(
        files=[GeneratedFile(name=name, content=f"// {name}") for name in names],
        description="d",
        instructions="i",
    )


@pytest.fixture
def repository():
    return InMemoryGenerationRepository()


@pytest.fixture
def store():
    return InMemoryArtifactStore(public_url="https://files.test")


def _use_case(repository, store, *, quota=None, primary=None, fallback=None):
    return GenerateCode(
        repository=repository,
        quota=quota or StubQuota(),
        primary=primary or StubGenerator(code=_code("App.tsx")),
        fallback=fallback or StubGenerator(error=ProviderError("fallback down")),
        artifact_store=store,
    )


def _run(use_case, prompt="Build a pricing table"):
    return use_case(
        GenerationContext(account_id=7),
        prompt=prompt,
        type="component",
        framework="react",
    )


def test_exhausted_quota_rejects_before_any_record(repository, store):
    primary = StubGenerator(code=_code("App.tsx"))
    use_case = _use_case(repository, store, quota=StubQuota(used=3, limit=3), primary=primary)

    with pytest.raises(QuotaExceeded) as excinfo:
        _run(use_case)

    assert str(excinfo.value) == GENERATION_LIMIT_MESSAGE
    assert repository.list_for_account(7, limit=10, offset=0) == ([], 0)
    assert primary.calls == []
    assert store.objects == {}


def test_success_stores_one_descriptor_per_file_and_counts_usage(repository, store):
    quota = StubQuota()
    use_case = _use_case(
        repository, store, quota=quota, primary=StubGenerator(code=_code("App.tsx", "app.css"))
    )

    generation = _run(use_case)

    stored = repository.get(generation.id, account_id=7)
    assert stored.status is GenerationStatus.COMPLETED
    assert [item.name for item in stored.files] == ["App.tsx", "app.css"]
    assert stored.files[0].url == f"https://files.test/generations/{generation.id}/App.tsx"
    assert f"generations/{generation.id}/app.css" in store.objects
    assert quota.used == 1


def test_primary_failure_falls_back(repository, store):
    primary = StubGenerator(error=ProviderError("v0 API error: 503"))
    fallback = StubGenerator(
        code=GeneratedCode.from_dict({"files": [{"name": "a.tsx", "content": "X"}]})
    )
    use_case = _use_case(repository, store, primary=primary, fallback=fallback)

    generation = _run(use_case)

    assert len(primary.calls) == 1
    assert len(fallback.calls) == 1
    assert generation.status is GenerationStatus.COMPLETED
    assert [item.name for item in generation.files] == ["a.tsx"]


def test_both_providers_failing_marks_failed_without_usage(repository, store):
    quota = StubQuota()
    use_case = _use_case(
        repository,
        store,
        quota=quota,
        primary=StubGenerator(error=ProviderError("v0 down")),
        fallback=StubGenerator(error=ProviderError("AI code generation failed")),
    )

    with pytest.raises(GenerationFailed) as excinfo:
        _run(use_case)

    failed = repository.get(excinfo.value.generation.id, account_id=7)
    assert failed.status is GenerationStatus.FAILED
    assert failed.error == "AI code generation failed"
    assert quota.used == 0


def test_storage_failure_marks_failed(repository):
    use_case = _use_case(repository, BrokenStore())

    with pytest.raises(GenerationFailed) as excinfo:
        _run(use_case)

    assert isinstance(excinfo.value.__cause__, ArtifactStoreError)
    stored = repository.get(excinfo.value.generation.id, account_id=7)
    assert stored.status is GenerationStatus.FAILED
    assert "bucket unavailable" in stored.error


def test_fallback_without_json_synthesizes_component(repository, store, monkeypatch):
    prompt = "A dashboard card listing weekly revenue"
    fallback = WorkersAICodeGenerator(account_id="acct", api_token="token")
    monkeypatch.setattr(fallback, "_run", lambda *args: "Sure! Here is some prose only.")
    use_case = _use_case(
        repository,
        store,
        primary=StubGenerator(error=ProviderError("v0 down")),
        fallback=fallback,
    )

    generation = _run(use_case, prompt=prompt)

    assert [item.name for item in generation.files] == ["component.tsx"]
    content, content_type = store.objects[f"generations/{generation.id}/component.tsx"]
    assert prompt in content
    assert content_type == "text/tsx"


def test_same_prompt_twice_creates_two_records(repository, store):
    use_case = _use_case(repository, store)

    first = _run(use_case)
    second = _run(use_case)

    assert first.id != second.id
    assert len(store.objects) == 2
    assert repository.list_for_account(7, limit=10, offset=0)[1] == 2


class FinalizeFailingRepository(InMemoryGenerationRepository):
    def save_completed(self, generation):
        raise RuntimeError("db write failed")


class UsageFailingQuota(StubQuota):
    def record_usage(self, account_id):
        raise RuntimeError("usage update failed")


def test_failed_completion_write_is_recorded_as_failed(store):
    repository = FinalizeFailingRepository()
    quota = StubQuota()
    use_case = _use_case(repository, store, quota=quota)

    with pytest.raises(GenerationFailed) as excinfo:
        _run(use_case)

    stored = repository.get(excinfo.value.generation.id, account_id=7)
    assert stored.status is GenerationStatus.FAILED
    assert stored.error == "db write failed"
    assert quota.used == 0


def test_usage_failure_after_completion_marks_generation_failed(repository, store):
    use_case = _use_case(repository, store, quota=UsageFailingQuota())

    with pytest.raises(GenerationFailed) as excinfo:
        _run(use_case)

    stored = repository.get(excinfo.value.generation.id, account_id=7)
    assert stored.status is GenerationStatus.FAILED
    assert stored.error == "usage update failed"
    assert stored.files == []
    assert stored.result is None
