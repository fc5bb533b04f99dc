from .base import *  # noqa
from .base import env

# GENERAL
# ------------------------------------------------------------------------------
DEBUG = True
SECRET_KEY = env(
    "DJANGO_SECRET_KEY",
    default="Vn2yC8oTqXe5Wd0LhRk7PbJ4sMa1GzUf9NtIcE3lYwQr6KjHpDx0SvAmBi8FgOu2",
)
ALLOWED_HOSTS = ["localhost", "0.0.0.0", "127.0.0.1"] + env.list("DJANGO_ALLOWED_HOSTS", default=[])

# Registry
# ------------------------------------------------------------------------------
REGISTRY_HTTP_TIMEOUT = env.float("REGISTRY_HTTP_TIMEOUT", default=30.0)
