import itertools

import httpx
import pytest

from registry.components.events import CLICK, KEYDOWN, WORKFLOW_NAVIGATION, UIEvent
from registry.components.host import ENHANCED, FULL_PAGE
from registry.workflow.progress import StepProgressTracker, StepStatus, build_steps

STEP_ATTRS = {
    "current_step": 2,
    "total_steps": 3,
    "step_names": "Details,Location,Confirm",
    "step_urls": "/event/new/details,/event/new/location,/event/new/confirm",
    "completed_steps": "1",
}


@pytest.fixture
def tracker():
    return StepProgressTracker(STEP_ATTRS)


class TestBuildSteps:
    @pytest.mark.parametrize(
        "current_step,total_steps,completed",
        [
            (current, total, completed)
            for total in range(1, 5)
            for current in range(1, 7)
            for completed in itertools.chain.from_iterable(
                itertools.combinations(range(1, 6), size) for size in range(0, 3)
            )
        ],
    )
    def test_every_step_has_exactly_one_status(self, current_step, total_steps, completed):
        steps = build_steps(current_step, total_steps, completed_steps=completed)

        assert [step.index for step in steps] == list(range(1, total_steps + 1))
        for step in steps:
            assert step.status in StepStatus
            is_current = step.index == current_step and current_step <= total_steps
            assert (step.status == StepStatus.current) is is_current
            if step.index in completed or step.index < current_step:
                assert step.status in (StepStatus.completed, StepStatus.current)
        assert sum(step.status == StepStatus.current for step in steps) == (1 if current_step <= total_steps else 0)

    def test_current_past_total_marks_everything_completed(self):
        steps = build_steps(5, 3)
        assert [step.status for step in steps] == [StepStatus.completed] * 3

    def test_defaults(self):
        steps = build_steps(1, 3, step_names=["Details", ""], step_urls=["/a"])
        assert [step.name for step in steps] == ["Details", "Step 2", "Step 3"]
        assert [step.url for step in steps] == ["/a", None, None]

    def test_completed_without_url_is_not_navigable(self):
        steps = build_steps(3, 3, step_urls=["/a"])
        assert steps[0].navigable is True
        assert steps[1].status == StepStatus.completed
        assert steps[1].navigable is False

    def test_explicit_completion_of_upcoming_step(self):
        steps = build_steps(1, 3, step_urls=["/a", "/b", "/c"], completed_steps=[3])
        assert [step.status for step in steps] == [StepStatus.current, StepStatus.upcoming, StepStatus.completed]
        assert steps[2].navigable is True


class TestRender:
    def test_scenario_second_of_three(self, tracker):
        statuses = [step.status for step in tracker.steps]
        assert statuses == [StepStatus.completed, StepStatus.current, StepStatus.upcoming]

        view = str(tracker.view)
        assert (
            '<a class="step completed" href="/event/new/details" hx-get="/event/new/details" hx-target="body" '
            'hx-push-url="true" tabindex="0" role="link" aria-label="Go to completed Details" data-step="1">'
        ) in view
        assert '<div class="step current" tabindex="-1" role="text" aria-label="Current step: Location"' in view
        assert '<div class="step upcoming" tabindex="-1" role="text" aria-label="Upcoming step: Confirm"' in view
        assert 'href="/event/new/confirm"' not in view
        assert view.count('class="separator"') == 2
        assert 'aria-label="Workflow progress"' in view

    def test_render_is_idempotent(self, tracker):
        assert tracker.render() == tracker.render() == tracker.view

    def test_names_are_escaped(self):
        tracker = StepProgressTracker({"total_steps": 1, "step_names": "<script>alert(1)</script>"})
        assert "<script>alert" not in str(tracker.view)
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in str(tracker.view)

    def test_missing_attributes_use_defaults(self):
        tracker = StepProgressTracker()
        assert tracker.current_step == 1
        assert tracker.total_steps == 1
        assert "Current step: Step 1" in str(tracker.view)

    def test_malformed_numbers_use_defaults(self):
        tracker = StepProgressTracker({"current_step": "two", "total_steps": "3"})
        assert tracker.current_step == 1
        assert tracker.steps[0].status == StepStatus.current


class TestConfigure:
    def test_unchanged_attributes_do_not_rerender(self, tracker):
        renders = tracker.render_count
        assert tracker.configure(current_step="2", total_steps=3) is False
        assert tracker.render_count == renders

    def test_batch_renders_once(self, tracker):
        renders = tracker.render_count
        assert tracker.configure({"current_step": 3, "completed_steps": [1, 2]}) is True
        assert tracker.render_count == renders + 1
        assert "Current step: Confirm" in str(tracker.view)

    def test_update_progress(self, tracker):
        tracker.update_progress(3, [1, 2])
        assert tracker.state.raw("completed_steps") == "1,2"
        assert [step.status for step in tracker.steps] == [
            StepStatus.completed,
            StepStatus.completed,
            StepStatus.current,
        ]

    def test_set_step_names_and_urls(self):
        tracker = StepProgressTracker({"current_step": 2, "total_steps": 2})
        tracker.set_step_names(["One", "Two"])
        tracker.set_step_urls(["/one", "/two"])
        assert tracker.steps[0].name == "One"
        assert tracker.steps[0].navigable is True


class TestNavigation:
    def test_click_uses_enhanced_channel(self, httpx_mock, htmx_page, tracker):
        htmx_page.mount(tracker)

        def respond(request):
            # the navigation event is emitted before the request goes out
            assert [event.name for event in htmx_page.events] == [WORKFLOW_NAVIGATION]
            return httpx.Response(200, text="<body>details</body>")

        httpx_mock.add_callback(respond, url="http://registry.test/event/new/details")

        navigation = tracker.on_event(UIEvent(CLICK, target=1))

        assert navigation.mode == ENHANCED
        event = htmx_page.events[0]
        assert dict(event.detail) == {"fromStep": 2, "toStep": 1, "stepName": "Details"}
        request = httpx_mock.get_requests()[0]
        assert request.headers["HX-Request"] == "true"
        assert request.headers["HX-Current-URL"] == htmx_page.location
        assert htmx_page.navigations == []
        assert htmx_page.htmx.document == "<body>details</body>"

    def test_keyboard_activation(self, httpx_mock, htmx_page, tracker):
        htmx_page.mount(tracker)
        httpx_mock.add_response(url="http://registry.test/event/new/details", text="<body></body>")

        assert tracker.on_event(UIEvent(KEYDOWN, target=1, key="Tab")) is None
        assert tracker.on_event(UIEvent(KEYDOWN, target=1, key="Enter")).mode == ENHANCED
        assert len(htmx_page.events_named(WORKFLOW_NAVIGATION)) == 1

    def test_falls_back_to_full_page_navigation(self, httpx_mock, page, tracker):
        page.mount(tracker)
        httpx_mock.add_response(url="http://registry.test/event/new/details", text="<html>details</html>")

        navigation = tracker.on_event(UIEvent(CLICK, target="1"))

        assert navigation.mode == FULL_PAGE
        assert page.location == "/event/new/details"
        assert page.document == "<html>details</html>"
        assert len(page.events_named(WORKFLOW_NAVIGATION)) == 1

    def test_failed_navigation_is_not_raised(self, httpx_mock, htmx_page, tracker):
        htmx_page.mount(tracker)
        httpx_mock.add_exception(httpx.ConnectError("connection refused"), url="http://registry.test/event/new/details")

        assert tracker.on_event(UIEvent(CLICK, target=1)) is None
        assert len(htmx_page.events_named(WORKFLOW_NAVIGATION)) == 1
        assert htmx_page.htmx.navigations == []

    @pytest.mark.parametrize("target", [2, 3, 0, 9, "x", None])
    def test_current_upcoming_and_unknown_steps_are_inert(self, page, tracker, target):
        page.mount(tracker)
        assert tracker.on_event(UIEvent(CLICK, target=target)) is None
        assert page.events == []
        assert page.navigations == []

    def test_completed_step_without_url_is_inert(self, page):
        tracker = page.mount(StepProgressTracker({"current_step": 3, "total_steps": 3, "step_urls": "/a"}))
        assert tracker.on_event(UIEvent(CLICK, target=2)) is None
        assert page.events == []
