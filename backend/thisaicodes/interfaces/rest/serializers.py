from __future__ import annotations

from django.contrib.auth import get_user_model
from rest_framework import serializers

from thisaicodes.domain.models.generation import (
    DEFAULT_FRAMEWORK,
    Framework,
    Generation,
    GenerationType,
)
from thisaicodes.projects.models import Project


class GenerateRequestSerializer(serializers.Serializer):
    prompt = serializers.CharField(min_length=10, trim_whitespace=False)
    type = serializers.ChoiceField(choices=[item.value for item in GenerationType])
    framework = serializers.ChoiceField(
        choices=[item.value for item in Framework],
        required=False,
        default=DEFAULT_FRAMEWORK,
    )
    projectId = serializers.UUIDField(required=False, allow_null=True)

    def validate_projectId(self, value):
        if value is None:
            return None
        request = self.context.get("request")
        user = getattr(request, "user", None)
        if user is None or not Project.objects.owned_by(user).filter(id=value).exists():
            raise serializers.ValidationError("Project not found")
        return str(value)


class GenerationSummarySerializer(serializers.Serializer):
    id = serializers.CharField()
    prompt = serializers.CharField()
    type = serializers.CharField()
    framework = serializers.CharField()
    status = serializers.SerializerMethodField()
    created_at = serializers.DateTimeField()
    completed_at = serializers.DateTimeField(allow_null=True)

    def get_status(self, obj: Generation) -> str:
        return obj.status.value


class GenerationDetailSerializer(GenerationSummarySerializer):
    project_id = serializers.CharField(allow_null=True)
    result = serializers.JSONField(allow_null=True)
    files = serializers.SerializerMethodField()
    error = serializers.CharField(allow_blank=True)

    def get_files(self, obj: Generation) -> list[dict[str, str]]:
        return [item.as_dict() for item in obj.files]


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    name = serializers.CharField(min_length=2, max_length=255)

    def validate_email(self, value: str) -> str:
        return value.strip().lower()

    def create(self, validated_data):
        user_model = get_user_model()
        user = user_model.objects.create_user(
            username=validated_data["email"],
            email=validated_data["email"],
            password=validated_data["password"],
            first_name=validated_data["name"][:150],
        )
        account = user.account
        if account.name != validated_data["name"]:
            account.name = validated_data["name"]
            account.save(update_fields=["name", "updated_at"])
        return user


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True)

    def validate_email(self, value: str) -> str:
        return value.strip().lower()


class VerifyEmailSerializer(serializers.Serializer):
    token = serializers.CharField()


class ForgotPasswordSerializer(serializers.Serializer):
    email = serializers.EmailField()

    def validate_email(self, value: str) -> str:
        return value.strip().lower()


class ResetPasswordSerializer(serializers.Serializer):
    token = serializers.CharField()
    password = serializers.CharField(write_only=True, min_length=8)


class ProjectSerializer(serializers.ModelSerializer):
    framework = serializers.ChoiceField(choices=[item.value for item in Framework])

    class Meta:
        model = Project
        fields = [
            "id",
            "name",
            "description",
            "framework",
            "template",
            "repository_url",
            "deployment_url",
            "status",
            "settings",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def create(self, validated_data):
        request = self.context["request"]
        return Project.objects.create(user=request.user, **validated_data)
