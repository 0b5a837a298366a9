"""API URL routes for the ThisAICodes REST interface."""

from __future__ import annotations

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from thisaicodes.interfaces.rest.views import (
    CurrentUserView,
    ForgotPasswordView,
    GenerateView,
    GenerationDetailView,
    GenerationHistoryView,
    HealthView,
    LoginView,
    ProjectViewSet,
    RegisterView,
    ResetPasswordView,
    VerifyEmailView,
)

router = DefaultRouter(trailing_slash=False)
router.include_root_view = False
router.register(r"projects", ProjectViewSet, basename="project")

urlpatterns = [
    path("", include(router.urls)),
    path("health", HealthView.as_view(), name="health"),
    path("generation/generate", GenerateView.as_view(), name="generation-generate"),
    path("generation/history", GenerationHistoryView.as_view(), name="generation-history"),
    path("generation/<str:pk>", GenerationDetailView.as_view(), name="generation-detail"),
    path("auth/register", RegisterView.as_view(), name="auth-register"),
    path("auth/login", LoginView.as_view(), name="auth-login"),
    path("auth/verify-email", VerifyEmailView.as_view(), name="auth-verify-email"),
    path("auth/forgot-password", ForgotPasswordView.as_view(), name="auth-forgot-password"),
    path("auth/reset-password", ResetPasswordView.as_view(), name="auth-reset-password"),
    path("auth/me", CurrentUserView.as_view(), name="auth-me"),
]
