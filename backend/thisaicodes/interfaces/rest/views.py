"""REST API views for ThisAICodes."""

from __future__ import annotations

import logging
import math

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.contrib.auth.models import update_last_login
from django.utils import timezone
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from thisaicodes.accounts.models import Account
from thisaicodes.accounts.tokens import issue_access_token
from thisaicodes.analytics.services import record_event
from thisaicodes.application import tasks as app_tasks
from thisaicodes.application.use_cases import GenerateCode, GenerationFailed
from thisaicodes.bootstrap import container, repository
from thisaicodes.domain.models.generation import GenerationContext
from thisaicodes.interfaces.api.throttling import WindowedScopedRateThrottle
from thisaicodes.interfaces.rest import serializers
from thisaicodes.projects.models import Project
from thisaicodes.quotas.services import QuotaExceeded, get_quota_service

logger = logging.getLogger(__name__)

HISTORY_DEFAULT_LIMIT = 10
HISTORY_MAX_LIMIT = 50


def _positive_int(raw, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


class GenerateView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = serializers.GenerateRequestSerializer(
            data=request.data, context={"request": request}
        )
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        context = GenerationContext(
            account_id=request.user.pk, project_id=data.get("projectId")
        )
        use_case = GenerateCode(
            repository=repository,
            quota=get_quota_service(),
            primary=container.resolve_primary_generator(),
            fallback=container.resolve_fallback_generator(),
            artifact_store=container.resolve_artifact_store(),
        )
        try:
            generation = use_case(
                context,
                prompt=data["prompt"],
                type=data["type"],
                framework=data["framework"],
            )
        except QuotaExceeded as exc:
            return Response(
                {"error": exc.message}, status=status.HTTP_429_TOO_MANY_REQUESTS
            )
        except GenerationFailed:
            return Response(
                {"error": "Code generation failed"},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        record_event(
            request.user,
            "code_generated",
            data={
                "generationId": generation.id,
                "type": generation.type,
                "framework": generation.framework,
                "fileCount": len(generation.files),
            },
            project_id=context.project_id,
            request=request,
        )
        return Response(
            {
                "generationId": generation.id,
                "code": generation.result,
                "files": [item.as_dict() for item in generation.files],
                "message": "Code generated successfully",
            },
            status=status.HTTP_200_OK,
        )


class GenerationHistoryView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        page = _positive_int(request.query_params.get("page"), 1)
        limit = min(
            _positive_int(request.query_params.get("limit"), HISTORY_DEFAULT_LIMIT),
            HISTORY_MAX_LIMIT,
        )
        items, total = repository.list_for_account(
            request.user.pk, limit=limit, offset=(page - 1) * limit
        )
        return Response(
            {
                "generations": serializers.GenerationSummarySerializer(
                    items, many=True
                ).data,
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "pages": math.ceil(total / limit),
                },
            }
        )


class GenerationDetailView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request, pk: str):
        try:
            generation = repository.get(pk, account_id=request.user.pk)
        except KeyError:
            return Response(
                {"error": "Generation not found"}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(
            {"generation": serializers.GenerationDetailSerializer(generation).data}
        )


class ProjectViewSet(
    mixins.ListModelMixin,
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = serializers.ProjectSerializer
    permission_classes = [IsAuthenticated]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return Project.objects.owned_by(self.request.user)

    def perform_create(self, serializer):
        project = serializer.save()
        record_event(
            self.request.user,
            "project_created",
            data={"name": project.name, "framework": project.framework},
            project_id=str(project.id),
            request=self.request,
        )

    def perform_destroy(self, instance):
        instance.soft_delete()


class RegisterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_classes = [WindowedScopedRateThrottle]
    throttle_scope = "auth_register"

    def post(self, request):
        serializer = serializers.RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        if get_user_model().objects.filter(email__iexact=email).exists():
            return Response(
                {"error": "User already exists"}, status=status.HTTP_400_BAD_REQUEST
            )
        user = serializer.save()
        account = user.account

        email_sent = True
        try:
            app_tasks.send_verification_email_task.delay(
                user.email, account.verification_token
            )
        except Exception:  # noqa: BLE001
            email_sent = False
            logger.exception(
                "Failed to dispatch verification email", extra={"user_id": user.pk}
            )

        logger.info("Account registered", extra={"user_id": user.pk})
        return Response(
            {
                "message": (
                    "Registration successful. Please check your email to verify "
                    "your account."
                ),
                "userId": user.pk,
                "emailSent": email_sent,
            },
            status=status.HTTP_201_CREATED,
        )


class LoginView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []
    throttle_classes = [WindowedScopedRateThrottle]
    throttle_scope = "auth_login"

    def post(self, request):
        serializer = serializers.LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = authenticate(
            request,
            username=serializer.validated_data["email"],
            password=serializer.validated_data["password"],
        )
        if user is None:
            return Response(
                {"error": "Invalid credentials"}, status=status.HTTP_401_UNAUTHORIZED
            )
        account = Account.for_user(user, name=user.get_full_name())
        if not account.email_verified:
            return Response(
                {"error": "Please verify your email before logging in"},
                status=status.HTTP_403_FORBIDDEN,
            )

        update_last_login(None, user)
        record_event(user, "user_login", data={"email": user.email}, request=request)
        token = issue_access_token(user, name=account.name)
        return Response(
            {
                "token": token,
                "user": {
                    "id": user.pk,
                    "email": user.email,
                    "name": account.name,
                    "createdAt": account.created_at.isoformat(),
                },
            },
            status=status.HTTP_200_OK,
        )


class VerifyEmailView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):
        serializer = serializers.VerifyEmailSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = Account.objects.filter(
            verification_token=serializer.validated_data["token"]
        ).first()
        if account is None:
            return Response(
                {"error": "Invalid or expired verification token"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        account.verify_email()
        logger.info("Email verified", extra={"user_id": account.user_id})
        return Response({"message": "Email verified successfully"})


class ForgotPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):
        serializer = serializers.ForgotPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = (
            Account.objects.select_related("user")
            .filter(user__email__iexact=serializer.validated_data["email"])
            .first()
        )
        if account is not None:
            token = account.issue_reset_token()
            try:
                app_tasks.send_password_reset_email_task.delay(account.user.email, token)
            except Exception:  # noqa: BLE001
                logger.exception(
                    "Failed to dispatch password reset email",
                    extra={"user_id": account.user_id},
                )
        return Response(
            {"message": "If an account exists, a password reset link has been sent."}
        )


class ResetPasswordView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def post(self, request):
        serializer = serializers.ResetPasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        account = (
            Account.objects.select_related("user")
            .filter(reset_token=serializer.validated_data["token"])
            .first()
        )
        if account is None or not account.reset_token_valid():
            return Response(
                {"error": "Invalid or expired reset token"},
                status=status.HTTP_400_BAD_REQUEST,
            )
        user = account.user
        user.set_password(serializer.validated_data["password"])
        user.save(update_fields=["password"])
        account.clear_reset_token()
        logger.info("Password reset", extra={"user_id": user.pk})
        return Response({"message": "Password reset successfully"})


class CurrentUserView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        account = Account.for_user(request.user, name=request.user.get_full_name())
        return Response({"user": account.to_dict()})


class HealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes: list = []

    def get(self, request):
        return Response(
            {
                "status": "healthy",
                "timestamp": timezone.now().isoformat(),
                "environment": getattr(settings, "ENVIRONMENT", "development"),
            }
        )
