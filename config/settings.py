from pathlib import Path

from decouple import Csv, config

# -------------------------------
# Base directories
# -------------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# -------------------------------
# Security & debug
# -------------------------------
SECRET_KEY = config("SECRET_KEY", default="medtrack-dev-secret-key")
DEBUG = config("DEBUG", default=False, cast=bool)
ALLOWED_HOSTS = config("ALLOWED_HOSTS", default="localhost,127.0.0.1,testserver", cast=Csv())

# -------------------------------
# Dashboard
# -------------------------------
DASHBOARD_RECENT_LIMIT = config("DASHBOARD_RECENT_LIMIT", default=5, cast=int)

# -------------------------------
# Gemini (insurance coverage extraction)
# -------------------------------
GEMINI_API_KEY  = config("GEMINI_API_KEY", default="")
GEMINI_API_BASE = config("GEMINI_API_BASE", default="https://generativelanguage.googleapis.com/v1beta")
GEMINI_TIMEOUT  = config("GEMINI_TIMEOUT", default=60.0, cast=float)
GEMINI_MODELS   = config(
    "GEMINI_MODELS",
    default="gemini-3-flash-preview,gemini-2.5-flash,gemini-2.5-pro,gemini-1.5-pro,gemini-1.5-flash,gemini-pro",
    cast=Csv(),
)

# -------------------------------
# Apps, Middleware, URLs
# -------------------------------
INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
    "rest_framework",
    "medtrack_api.apps.MedTrackConfig",
    "plugins.django_interface.apps.DjangoInterfaceConfig",
]

MIDDLEWARE = [
    "django.middleware.common.CommonMiddleware",
    "plugins.django_interface.request_middleware.RequestContextMiddleware",
]

ROOT_URLCONF = "medtrack_api.urls"
WSGI_APPLICATION = "medtrack_api.wsgi.application"
ASGI_APPLICATION = "medtrack_api.asgi.application"

# -------------------------------
# REST Framework
# -------------------------------
REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": (),
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.AllowAny",
    ),
    "DEFAULT_RENDERER_CLASSES": (
        "rest_framework.renderers.JSONRenderer",
    ),
    "UNAUTHENTICATED_USER": None,
}

# -------------------------------
# Database
# -------------------------------
DATABASES = {
    "default": {
        "ENGINE":   config("DB_ENGINE", default="django.db.backends.sqlite3"),
        "NAME":     config("DB_NAME", default=str(BASE_DIR / "medtrack.sqlite3")),
        "USER":     config("DB_USER", default=""),
        "PASSWORD": config("DB_PASS", default=""),
        "HOST":     config("DB_HOST", default=""),
        "PORT":     config("DB_PORT", default=""),
    }
}

# -------------------------------
# Time
# -------------------------------
TIME_ZONE = "UTC"
USE_TZ    = True

# -------------------------------
# Static files
# -------------------------------
STATIC_URL = "/static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"
