import pytest

from registry.client import RegistryAPIClient
from registry.components.host import HtmxChannel, Page
from registry.components.registry import build_registry

PAGE_URL = "http://registry.test/event/42/outcome"


@pytest.fixture
def registry_client():
    with RegistryAPIClient() as client:
        yield client


@pytest.fixture
def page(registry_client) -> Page:
    return Page(PAGE_URL, registry_client)


@pytest.fixture
def htmx_page(registry_client) -> Page:
    return Page(PAGE_URL, registry_client, htmx=HtmxChannel(registry_client))


@pytest.fixture
def component_registry():
    return build_registry()
