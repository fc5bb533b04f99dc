"""
Base settings to build other settings files upon.
"""
from pathlib import Path

import environ

BASE_DIR = Path(__file__).resolve(strict=True).parent.parent.parent
# registry/
APPS_DIR = BASE_DIR / "registry"

env = environ.Env()

env.read_env(str(BASE_DIR / ".env"))

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = env.bool("DJANGO_DEBUG", False)
TIME_ZONE = "UTC"
LANGUAGE_CODE = "en-us"
USE_I18N = True
USE_TZ = True

# APPS
# ------------------------------------------------------------------------------
DJANGO_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.staticfiles",
]
LOCAL_APPS = [
    "registry.web",
]
INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

# STATIC
# ------------------------------------------------------------------------------
STATIC_URL = "/static/"

# TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [str(APPS_DIR / "templates")],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
            ],
        },
    }
]

# SECURITY
# ------------------------------------------------------------------------------
X_FRAME_OPTIONS = "DENY"

# LOGGING
# ------------------------------------------------------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(levelname)s %(asctime)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "level": "DEBUG",
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
        "null": {
            "class": "logging.NullHandler",
        },
    },
    "root": {"level": "INFO", "handlers": ["console"]},
    "loggers": {
        "registry": {
            "handlers": ["console"],
            "level": env("REGISTRY_LOG_LEVEL", default="INFO"),
            "propagate": False,
        },
        "httpx": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}

# Registry
# ------------------------------------------------------------------------------
# Origin of the registry application the components talk to.
REGISTRY_BASE_URL = env("REGISTRY_BASE_URL", default="http://localhost:6161")
REGISTRY_HTTP_TIMEOUT = env.float("REGISTRY_HTTP_TIMEOUT", default=5.0)
REGISTRY_VALIDATION_PATH = env("REGISTRY_VALIDATION_PATH", default="/outcome/validate")
# Path segment the attendance endpoint lives under: /{base}/attendance/{event_id}
REGISTRY_ATTENDANCE_BASE = env("REGISTRY_ATTENDANCE_BASE", default="teacher")
