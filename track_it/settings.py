"""Django settings for the Track It API.

Values are read from environment variables so the same module serves local
development, containers and CI. See track_it.settings_test for the overrides
applied during the test run.
"""

import os
from pathlib import Path

from core.logging import setup_logging

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-insecure-secret-key-change-me")

DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")
    if host.strip()
]

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "django_rq",
    "core",
]

MIDDLEWARE = [
    "core.middleware.RequestIDMiddleware",
    "core.middleware.RequestLoggingMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "track_it.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {"context_processors": []},
    },
]

WSGI_APPLICATION = "track_it.wsgi.application"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("POSTGRES_DB", "track_it"),
        "USER": os.getenv("POSTGRES_USER", "track_it"),
        "PASSWORD": os.getenv("POSTGRES_PASSWORD", ""),
        "HOST": os.getenv("POSTGRES_HOST", "localhost"),
        "PORT": os.getenv("POSTGRES_PORT", "5432"),
        "CONN_MAX_AGE": int(os.getenv("POSTGRES_CONN_MAX_AGE", "60")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = os.getenv("TIME_ZONE", "UTC")
USE_I18N = False
USE_TZ = True

# Redis: cache and background job queue
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_URL = f"redis://{REDIS_HOST}:{REDIS_PORT}/{REDIS_DB}"

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": REDIS_URL,
    }
}

RQ_QUEUES = {
    "default": {
        "HOST": REDIS_HOST,
        "PORT": REDIS_PORT,
        "DB": REDIS_DB,
        "DEFAULT_TIMEOUT": 360,
    },
}

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "core.auth.bearer.BearerTokenAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
    ],
    "DEFAULT_RENDERER_CLASSES": [
        "rest_framework.renderers.JSONRenderer",
    ],
    "EXCEPTION_HANDLER": "core.exceptions.handlers.custom_exception_handler",
    "UNAUTHENTICATED_USER": None,
}

# Bearer token validation (HTTP and Socket.IO handshake)
JWT_SECRET = os.getenv("JWT_SECRET", "")
JWT_ALGORITHMS = [
    algorithm.strip()
    for algorithm in os.getenv("JWT_ALGORITHMS", "HS256").split(",")
    if algorithm.strip()
]

# Outbound email
EMAIL_HOST = os.getenv("EMAIL_HOST", "localhost")
EMAIL_PORT = int(os.getenv("EMAIL_PORT", "587"))
EMAIL_HOST_USER = os.getenv("EMAIL_HOST_USER", "")
EMAIL_HOST_PASSWORD = os.getenv("EMAIL_HOST_PASSWORD", "")
EMAIL_USE_TLS = os.getenv("EMAIL_USE_TLS", "true").lower() == "true"
DEFAULT_FROM_EMAIL = os.getenv("DEFAULT_FROM_EMAIL", "no-reply@track-it.local")

FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Realtime
SOCKETIO_CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("SOCKETIO_CORS_ORIGINS", FRONTEND_URL).split(",")
    if origin.strip()
]

# Notifications
NOTIFICATION_EMAIL_MAX_ATTEMPTS = int(
    os.getenv("NOTIFICATION_EMAIL_MAX_ATTEMPTS", "3")
)
NOTIFICATION_EMAIL_BACKOFF_SECONDS = int(
    os.getenv("NOTIFICATION_EMAIL_BACKOFF_SECONDS", "2")
)
NOTIFICATION_PAGE_MAX_LIMIT = int(os.getenv("NOTIFICATION_PAGE_MAX_LIMIT", "100"))
LIST_PAGE_MAX_LIMIT = int(os.getenv("LIST_PAGE_MAX_LIMIT", "100"))

TEST_MODE = False

# Logging is configured by structlog; Django must not install its own config
LOGGING_CONFIG = None

if os.getenv("SKIP_LOGGING_SETUP", "false").lower() != "true":
    setup_logging()
