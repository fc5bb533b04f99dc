"""
The page that hosts components.

A ``Page`` stands in for the browser document: it knows its own URL, owns the
HTTP client, may offer an enhanced-navigation channel (htmx-style partial
swaps), and receives every event that bubbles out of the components mounted
on it. It also performs the full-page navigations and plain form submissions
components fall back to. A request that fails in transport leaves the
document as it was: the failure is logged and reported, and the call returns
``None``.
"""

import logging
from dataclasses import dataclass, field

import sentry_sdk

from registry.client import RegistryAPIClient, RegistryAPIError
from registry.components.events import ComponentEvent

logger = logging.getLogger(__name__)

FULL_PAGE = "full-page"
ENHANCED = "enhanced"


@dataclass(frozen=True)
class FormSubmission:
    action: str
    fields: dict = field(default_factory=dict)
    method: str = "POST"


@dataclass(frozen=True)
class Navigation:
    url: str
    mode: str  # FULL_PAGE or ENHANCED
    status_code: int | None = None


class HtmxChannel:
    """Enhanced navigation: fetch a page with htmx headers and swap it in."""

    def __init__(self, client: RegistryAPIClient):
        self.client = client
        self.document: str | None = None
        self.navigations: list[Navigation] = []

    def ajax(self, method: str, url: str, target: str = "body", swap: str = "outerHTML", headers=None):
        if method.upper() != "GET":
            raise ValueError("Only GET is supported for enhanced navigation")
        request_headers = {"HX-Request": "true", "HX-Target": target}
        request_headers.update(headers or {})
        try:
            response = self.client.get(url, headers=request_headers)
        except RegistryAPIError as e:
            logger.error(f"Enhanced navigation to {url} failed: {e}")
            sentry_sdk.capture_exception(e)
            return None
        logger.debug(f"htmx swap ({swap}) into {target} from {url}: {response.status_code}")
        self.document = response.text
        navigation = Navigation(url=url, mode=ENHANCED, status_code=response.status_code)
        self.navigations.append(navigation)
        return navigation


class Page:
    """Host for mounted components."""

    def __init__(self, url: str, client: RegistryAPIClient, htmx: HtmxChannel | None = None):
        self.url = url
        self.location = url
        self.client = client
        self.htmx = htmx
        self.document: str | None = None
        self.components = []
        self.events: list[ComponentEvent] = []
        self.navigations: list[Navigation] = []
        self.submissions: list[FormSubmission] = []

    def mount(self, component):
        component.mount(self)
        component.events.subscribe(self.receive)
        self.components.append(component)
        return component

    def unmount(self, component):
        if component not in self.components:
            return
        component.events.unsubscribe(self.receive)
        component.unmount()
        self.components.remove(component)

    def receive(self, event: ComponentEvent):
        logger.debug(f"Page received {event.name}: {dict(event.detail)}")
        self.events.append(event)

    def events_named(self, name: str) -> list[ComponentEvent]:
        return [event for event in self.events if event.name == name]

    def navigate(self, url: str) -> Navigation:
        """Full page navigation, the fallback when no enhanced channel exists."""
        try:
            response = self.client.get(url)
        except RegistryAPIError as e:
            logger.error(f"Navigation to {url} failed: {e}")
            sentry_sdk.capture_exception(e)
            return None
        self.location = url
        self.document = response.text
        navigation = Navigation(url=url, mode=FULL_PAGE, status_code=response.status_code)
        self.navigations.append(navigation)
        return navigation

    def submit_form(self, submission: FormSubmission):
        """Submit a plain (unenhanced) form and load the response as the new page."""
        if submission.method.upper() != "POST":
            raise ValueError("Only POST form submissions are supported")
        try:
            response = self.client.post_form(submission.action, submission.fields)
        except RegistryAPIError as e:
            logger.error(f"Form submission to {submission.action} failed: {e}")
            sentry_sdk.capture_exception(e)
            return None
        self.submissions.append(submission)
        self.location = submission.action
        self.document = response.text
        logger.info(f"Submitted {len(submission.fields)} fields to {submission.action}: {response.status_code}")
        return response
