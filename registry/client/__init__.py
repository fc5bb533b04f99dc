from .main import RegistryAPIClient, RegistryAPIError

__all__ = ["RegistryAPIClient", "RegistryAPIError"]
