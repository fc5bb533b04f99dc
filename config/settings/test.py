"""
With these settings, tests run faster.
"""

from .base import *  # noqa
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="qJ3rZyP0Cw8VxUe2Gm6hTn4sLd1KaFo9BbiW7RcYt5EjXlNvHuMgQpSkIfAzDr0e",
)
TEST_RUNNER = "django.test.runner.DiscoverRunner"

# DEBUGGING FOR TEMPLATES
# ------------------------------------------------------------------------------
TEMPLATES[0]["OPTIONS"]["debug"] = True  # type: ignore # noqa: F405

# Registry
# ------------------------------------------------------------------------------
REGISTRY_BASE_URL = "http://registry.test"
REGISTRY_ATTENDANCE_BASE = "teacher"
