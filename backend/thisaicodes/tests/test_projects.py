import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse
from rest_framework.test import APIClient

from thisaicodes.analytics.models import AnalyticsEvent
from thisaicodes.projects.models import Project

pytestmark = pytest.mark.django_db


@pytest.fixture
def user():
    return get_user_model().objects.create_user(
        username="owner@example.com", email="owner@example.com", password="pass12345"
    )


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


def test_create_and_list_projects(api_client, user):
    response = api_client.post(
        reverse("project-list"),
        {"name": "Storefront", "framework": "nextjs", "description": "Shop"},
        format="json",
    )

    assert response.status_code == 201
    project = Project.objects.get(id=response.json()["id"])
    assert project.user == user
    assert project.status == "active"
    assert AnalyticsEvent.objects.filter(event_type="project_created", project=project).exists()

    listing = api_client.get(reverse("project-list"))
    assert [item["name"] for item in listing.json()] == ["Storefront"]


def test_create_rejects_unknown_framework(api_client):
    response = api_client.post(
        reverse("project-list"), {"name": "Legacy", "framework": "angular"}, format="json"
    )
    assert response.status_code == 400


def test_update_project(api_client, user):
    project = Project.objects.create(user=user, name="Draft", framework="react")

    response = api_client.patch(
        reverse("project-detail", args=[str(project.id)]),
        {"name": "Final", "status": "archived"},
        format="json",
    )

    assert response.status_code == 200
    project.refresh_from_db()
    assert project.name == "Final"
    assert project.status == "archived"


def test_delete_is_soft(api_client, user):
    project = Project.objects.create(user=user, name="Old", framework="vue")

    response = api_client.delete(reverse("project-detail", args=[str(project.id)]))

    assert response.status_code == 204
    project.refresh_from_db()
    assert project.deleted_at is not None
    assert api_client.get(reverse("project-list")).json() == []
    detail = api_client.get(reverse("project-detail", args=[str(project.id)]))
    assert detail.status_code == 404


def test_projects_are_scoped_to_owner(api_client):
    stranger = get_user_model().objects.create_user(username="other@example.com", password="pass12345")
    project = Project.objects.create(user=stranger, name="Private", framework="svelte")

    assert api_client.get(reverse("project-list")).json() == []
    response = api_client.get(reverse("project-detail", args=[str(project.id)]))
    assert response.status_code == 404
