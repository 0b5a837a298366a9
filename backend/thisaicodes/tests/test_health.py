from django.urls import reverse
from rest_framework.test import APIClient


def test_health_needs_no_authentication(settings):
    settings.ENVIRONMENT = "staging"

    response = APIClient().get(reverse("health"))

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["environment"] == "staging"
    assert data["timestamp"]
