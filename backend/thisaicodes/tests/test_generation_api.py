import uuid

import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

from thisaicodes.accounts.models import Account
from thisaicodes.analytics.models import AnalyticsEvent
from thisaicodes.domain.models.generation import GeneratedCode, GeneratedFile
from thisaicodes.domain.providers.interfaces import ProviderError
from thisaicodes.generations.models import Generation
from thisaicodes.projects.models import Project

pytestmark = pytest.mark.django_db


class StubGenerator:
    def __init__(self, code=None, error=None):
        self.code = code
        self.error = error
        self.calls = 0

    def generate(self, prompt, type, framework):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.code


@pytest.fixture
def user():
    return get_user_model().objects.create_user(
        username="builder@example.com", email="builder@example.com", password="pass12345"
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def providers(isolated_providers, monkeypatch):
    primary = StubGenerator(
        code=GeneratedCode(
            files=[
                GeneratedFile(name="Hero.tsx", content="export default 1", type="text/tsx"),
                GeneratedFile(name="hero.css", content=".hero {}", type="text/css"),
            ],
            description="Hero section",
            instructions="npm run dev",
        )
    )
    fallback = StubGenerator(error=ProviderError("AI code generation failed"))
    monkeypatch.setattr(
        isolated_providers, "resolve_primary_generator", lambda key=None: primary
    )
    monkeypatch.setattr(
        isolated_providers, "resolve_fallback_generator", lambda key=None: fallback
    )
    return primary, fallback


def _generate(client, **overrides):
    body = {"prompt": "A hero section with a call to action", "type": "component"}
    body.update(overrides)
    return client.post(reverse("generation-generate"), body, format="json")


def test_generate_returns_code_and_files(api_client, user, providers):
    response = _generate(api_client)

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Code generated successfully"
    assert [item["name"] for item in data["files"]] == ["Hero.tsx", "hero.css"]
    assert data["files"][0]["url"].endswith(f"/generations/{data['generationId']}/Hero.tsx")
    assert data["code"]["description"] == "Hero section"

    record = Generation.objects.get(id=data["generationId"])
    assert record.status == "completed"
    assert record.framework == "react"
    assert len(record.files) == 2
    assert record.completed_at is not None
    assert Account.objects.get(user=user).generations_used == 1
    assert AnalyticsEvent.objects.filter(user=user, event_type="code_generated").exists()


def test_short_prompt_is_rejected_without_side_effects(api_client, user, providers):
    primary, _ = providers

    response = _generate(api_client, prompt="short")

    assert response.status_code == 400
    assert "prompt" in response.json()
    assert primary.calls == 0
    assert Generation.objects.count() == 0
    assert Account.objects.get(user=user).generations_used == 0


def test_invalid_type_is_rejected(api_client, providers):
    response = _generate(api_client, type="mobile")
    assert response.status_code == 400
    assert "type" in response.json()


def test_exhausted_quota_returns_429(api_client, user, providers, settings):
    settings.GENERATION_QUOTAS_ENABLED = True
    Account.objects.filter(user=user).update(generations_used=3, generations_limit=3)

    response = _generate(api_client)

    assert response.status_code == 429
    assert response.json() == {
        "error": "Generation limit reached. Upgrade your plan to continue."
    }
    assert Generation.objects.count() == 0


def test_provider_failure_returns_500_and_records_failure(api_client, user, providers):
    primary, fallback = providers
    primary.error = ProviderError("v0 API error: 503")

    response = _generate(api_client)

    assert response.status_code == 500
    assert response.json() == {"error": "Code generation failed"}
    assert fallback.calls == 1
    record = Generation.objects.get()
    assert record.status == "failed"
    assert record.error == "AI code generation failed"
    assert Account.objects.get(user=user).generations_used == 0


def test_generate_links_owned_project(api_client, user, providers):
    project = Project.objects.create(user=user, name="Landing", framework="react")

    response = _generate(api_client, projectId=str(project.id), framework="nextjs")

    assert response.status_code == 200
    record = Generation.objects.get(id=response.json()["generationId"])
    assert record.project_id == project.id
    assert record.framework == "nextjs"


def test_generate_rejects_foreign_project(api_client, providers):
    stranger = get_user_model().objects.create_user(username="other@example.com", password="pass12345")
    project = Project.objects.create(user=stranger, name="Theirs", framework="vue")

    response = _generate(api_client, projectId=str(project.id))

    assert response.status_code == 400
    assert "projectId" in response.json()
    assert Generation.objects.count() == 0


def _seed(user, count):
    for index in range(count):
        Generation.objects.create(
            user=user,
            prompt=f"Prompt number {index}",
            type="page",
            framework="react",
            status="completed",
        )


def test_history_paginates_newest_first(api_client, user):
    _seed(user, 12)

    response = api_client.get(reverse("generation-history"), {"page": 2, "limit": 5})

    assert response.status_code == 200
    data = response.json()
    assert data["pagination"] == {"page": 2, "limit": 5, "total": 12, "pages": 3}
    assert len(data["generations"]) == 5
    assert set(data["generations"][0]) == {
        "id",
        "prompt",
        "type",
        "framework",
        "status",
        "created_at",
        "completed_at",
    }


def test_history_defaults_and_caps_limit(api_client, user):
    _seed(user, 3)

    default = api_client.get(reverse("generation-history")).json()
    capped = api_client.get(reverse("generation-history"), {"limit": 500}).json()

    assert default["pagination"]["limit"] == 10
    assert default["pagination"]["page"] == 1
    assert capped["pagination"]["limit"] == 50
    assert capped["pagination"]["total"] == 3


def test_history_only_lists_own_records(api_client, user):
    stranger = get_user_model().objects.create_user(username="other@example.com", password="pass12345")
    _seed(stranger, 2)

    data = api_client.get(reverse("generation-history")).json()

    assert data["generations"] == []
    assert data["pagination"]["pages"] == 0


def test_detail_returns_full_record(api_client, user):
    record = Generation.objects.create(
        user=user,
        prompt="A pricing page with three tiers",
        type="page",
        framework="vue",
        status="completed",
        result={"files": [], "description": "d", "instructions": "i"},
        files=[{"name": "Pricing.vue", "url": "https://storage.test/x", "type": "text/plain"}],
    )

    response = api_client.get(reverse("generation-detail", args=[str(record.id)]))

    assert response.status_code == 200
    generation = response.json()["generation"]
    assert generation["id"] == str(record.id)
    assert generation["status"] == "completed"
    assert generation["files"][0]["name"] == "Pricing.vue"
    assert generation["result"]["description"] == "d"


def test_detail_hides_other_accounts_records(api_client):
    stranger = get_user_model().objects.create_user(username="other@example.com", password="pass12345")
    record = Generation.objects.create(
        user=stranger, prompt="Someone else's prompt", type="api", framework="react"
    )

    response = api_client.get(reverse("generation-detail", args=[str(record.id)]))

    assert response.status_code == 404
    assert response.json() == {"error": "Generation not found"}


@pytest.mark.parametrize("identifier", [str(uuid.uuid4()), "not-a-uuid"])
def test_detail_unknown_or_malformed_id_is_404(api_client, identifier):
    response = api_client.get(reverse("generation-detail", args=[identifier]))
    assert response.status_code == 404


def test_generation_endpoints_require_authentication():
    response = APIClient().get(reverse("generation-history"))
    assert response.status_code == 401


def test_failed_finalize_leaves_no_completed_record(api_client, user, providers, monkeypatch):
    from thisaicodes.interfaces.rest import views

    def failing_usage(account_id):
        raise RuntimeError("usage update failed")

    monkeypatch.setattr(views.get_quota_service(), "record_usage", failing_usage)

    response = _generate(api_client)

    assert response.status_code == 500
    record = Generation.objects.get()
    assert record.status == "failed"
    assert record.files == []
    assert record.result is None
    assert record.completed_at is None
    assert Account.objects.get(user=user).generations_used == 0
