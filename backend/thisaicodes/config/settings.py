"""Django settings for ThisAICodes.

Settings are 12-factor compliant and pull configuration from environment variables. Defaults
are suitable for local development and unit tests only.
"""

from __future__ import annotations

import json
import os
from datetime import timedelta
from pathlib import Path

import environ
from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent.parent

env = environ.Env(
    DEBUG=(bool, False),
    SECRET_KEY=(str, "unsafe-secret-key"),
    ALLOWED_HOSTS=(list[str], ["*"]),
    DATABASE_URL=(str, f"sqlite:///{BASE_DIR / 'db.sqlite3'}"),
    REDIS_URL=(str, "redis://localhost:6379/0"),
    ENVIRONMENT=(str, "development"),
    LOG_LEVEL=(str, "INFO"),
    FRONTEND_URL=(str, "https://thisaicodes.com"),
    CORS_ALLOWED_ORIGINS=(list[str], ["http://localhost:3000", "https://thisaicodes.com"]),
    JWT_SECRET=(str, ""),
    JWT_EXPIRATION_DAYS=(int, 7),
    V0_API_KEY=(str, ""),
    V0_API_URL=(str, "https://api.v0.dev/generate"),
    WORKERS_AI_ACCOUNT_ID=(str, ""),
    WORKERS_AI_API_TOKEN=(str, ""),
    WORKERS_AI_BASE_URL=(str, "https://api.cloudflare.com/client/v4"),
    WORKERS_AI_MODEL=(str, "@cf/meta/llama-2-7b-chat-fp16"),
    PROVIDER_TIMEOUT=(int, 60),
    ARTIFACT_STORE=(str, "s3"),
    GENERATION_STORAGE_BUCKET=(str, "thisaicodes-storage"),
    GENERATION_STORAGE_ENDPOINT_URL=(str, ""),
    GENERATION_STORAGE_REGION=(str, "auto"),
    GENERATION_STORAGE_PUBLIC_URL=(str, "https://storage.thisaicodes.com"),
    GENERATION_STORAGE_NAMESPACE=(str, "generations"),
    EMAIL_BACKEND=(str, "django.core.mail.backends.smtp.EmailBackend"),
    EMAIL_HOST=(str, ""),
    EMAIL_PORT=(int, 587),
    EMAIL_USE_TLS=(bool, True),
    EMAIL_USE_SSL=(bool, False),
    EMAIL_HOST_USER=(str, ""),
    EMAIL_HOST_PASSWORD=(str, ""),
    DEFAULT_FROM_EMAIL=(str, "ThisAICodes <noreply@thisaicodes.com>"),
    SELF_HOSTED=(bool, False),
    GENERATION_PLAN_LIMITS=(str, ""),
)

environ.Env.read_env(
    env_file=os.environ.get("THISAICODES_ENV_FILE", BASE_DIR / ".env"), recurse=False
)

SECRET_KEY = env("SECRET_KEY")
DEBUG = env("DEBUG")
ALLOWED_HOSTS = env("ALLOWED_HOSTS")
ENVIRONMENT = env("ENVIRONMENT")
FRONTEND_URL = env("FRONTEND_URL").rstrip("/")

EMAIL_BACKEND = env("EMAIL_BACKEND")
EMAIL_HOST = env("EMAIL_HOST")
EMAIL_PORT = env.int("EMAIL_PORT")
EMAIL_USE_TLS = env.bool("EMAIL_USE_TLS")
EMAIL_USE_SSL = env.bool("EMAIL_USE_SSL")
EMAIL_HOST_USER = env("EMAIL_HOST_USER")
EMAIL_HOST_PASSWORD = env("EMAIL_HOST_PASSWORD")
DEFAULT_FROM_EMAIL = env("DEFAULT_FROM_EMAIL")

if EMAIL_USE_TLS and EMAIL_USE_SSL:
    raise ImproperlyConfigured(
        "EMAIL_USE_TLS and EMAIL_USE_SSL cannot both be enabled."
    )

SELF_HOSTED = env.bool("SELF_HOSTED", default=False)
GENERATION_QUOTAS_ENABLED = env.bool(
    "GENERATION_QUOTAS_ENABLED",
    default=not SELF_HOSTED,
)

_DEFAULT_GENERATION_PLAN_LIMITS: dict[str, int] = {
    "free": 3,
    "pro": 100,
    "enterprise": 1000,
}
_GENERATION_PLAN_LIMITS_RAW = env("GENERATION_PLAN_LIMITS", default="").strip()
if _GENERATION_PLAN_LIMITS_RAW:
    try:
        _GENERATION_PLAN_LIMITS_OVERRIDE = json.loads(_GENERATION_PLAN_LIMITS_RAW)
    except json.JSONDecodeError as exc:  # pragma: no cover - invalid operator input
        raise ImproperlyConfigured("GENERATION_PLAN_LIMITS must be valid JSON") from exc
    if not isinstance(_GENERATION_PLAN_LIMITS_OVERRIDE, dict):
        raise ImproperlyConfigured("GENERATION_PLAN_LIMITS must be a JSON object")
else:
    _GENERATION_PLAN_LIMITS_OVERRIDE = {}


def _merge_plan_limits(
    defaults: dict[str, int],
    overrides: dict[str, object],
) -> dict[str, int]:
    merged = dict(defaults)
    for tier, value in overrides.items():
        try:
            merged[str(tier)] = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            continue
    return merged


GENERATION_PLAN_LIMITS = _merge_plan_limits(
    _DEFAULT_GENERATION_PLAN_LIMITS, _GENERATION_PLAN_LIMITS_OVERRIDE
)

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "rest_framework",
    "drf_spectacular",
    "corsheaders",
    "thisaicodes.accounts",
    "thisaicodes.projects",
    "thisaicodes.generations",
    "thisaicodes.analytics",
    "thisaicodes.interfaces.rest",
]

MIDDLEWARE = [
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "thisaicodes.config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ]
        },
    }
]

WSGI_APPLICATION = "thisaicodes.config.wsgi.application"
ASGI_APPLICATION = "thisaicodes.config.asgi.application"

DATABASES = {
    "default": env.db(),
}

AUTH_PASSWORD_VALIDATORS = [
    {
        "NAME": "django.contrib.auth.password_validation.MinimumLengthValidator",
    },
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"
STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "whitenoise.storage.CompressedStaticFilesStorage"},
}
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "DEFAULT_PARSER_CLASSES": [
        "rest_framework.parsers.JSONParser",
    ],
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "thisaicodes.interfaces.api.authentication.BearerTokenAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "auth_register": "5/15m",
        "auth_login": "10/15m",
    },
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
}

SPECTACULAR_SETTINGS = {
    "TITLE": "ThisAICodes API",
    "VERSION": "0.1.0",
    "SERVE_INCLUDE_SCHEMA": False,
}

CORS_ALLOWED_ORIGINS = env("CORS_ALLOWED_ORIGINS")
CORS_ALLOWED_ORIGIN_REGEXES = [r"^https://[\w-]+\.thisaicodes\.com$"]
CORS_ALLOW_CREDENTIALS = True

JWT_SECRET = env("JWT_SECRET") or SECRET_KEY
JWT_ALGORITHM = "HS256"
JWT_EXPIRATION = timedelta(days=env.int("JWT_EXPIRATION_DAYS"))
PASSWORD_RESET_TIMEOUT_SEC = 3600

V0_API_KEY = env("V0_API_KEY")
V0_API_URL = env("V0_API_URL")
WORKERS_AI_ACCOUNT_ID = env("WORKERS_AI_ACCOUNT_ID")
WORKERS_AI_API_TOKEN = env("WORKERS_AI_API_TOKEN")
WORKERS_AI_BASE_URL = env("WORKERS_AI_BASE_URL")
WORKERS_AI_MODEL = env("WORKERS_AI_MODEL")
PROVIDER_TIMEOUT = env.int("PROVIDER_TIMEOUT")

ARTIFACT_STORE = env("ARTIFACT_STORE")
GENERATION_STORAGE_BUCKET = env("GENERATION_STORAGE_BUCKET")
GENERATION_STORAGE_ENDPOINT_URL = env("GENERATION_STORAGE_ENDPOINT_URL")
GENERATION_STORAGE_REGION = env("GENERATION_STORAGE_REGION")
GENERATION_STORAGE_PUBLIC_URL = env("GENERATION_STORAGE_PUBLIC_URL")
GENERATION_STORAGE_NAMESPACE = env("GENERATION_STORAGE_NAMESPACE")

LOG_LEVEL = env("LOG_LEVEL")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "structured": {
            "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "structured",
        }
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

CELERY_BROKER_URL = env("REDIS_URL")
CELERY_RESULT_BACKEND = env("REDIS_URL")
CELERY_TASK_ALWAYS_EAGER = env.bool("CELERY_TASK_ALWAYS_EAGER", default=True)
CELERY_TASK_EAGER_PROPAGATES = env.bool("CELERY_TASK_EAGER_PROPAGATES", default=True)
CELERY_TASK_DEFAULT_QUEUE = "thisaicodes.default"
CELERY_TASK_ROUTES = {
    "thisaicodes.application.tasks.*": {"queue": "thisaicodes.mail"},
}
