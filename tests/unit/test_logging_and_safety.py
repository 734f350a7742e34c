import logging

import pytest

from tests.helpers.sources import settle, wait_for_page


@pytest.mark.asyncio
async def test_logging_lifecycle(make_paginator, source, caplog):
    """Verify that logging occurs at expected levels during a page load."""
    caplog.set_level(logging.DEBUG, logger="pagerflow")

    paginator = make_paginator(source)
    await wait_for_page(paginator, 0)

    assert "Fetching page" in caplog.text  # DEBUG
    assert "Page loaded" in caplog.text  # INFO

    # We verify that 'extra' fields are present in the log records
    has_context = False
    for record in caplog.records:
        if getattr(record, "operation", None) == "fetch" and getattr(record, "page", None) == 0:
            has_context = True
            break
    assert has_context, "Log records missing 'page' context"

    # Ignored commands are traced
    source.block(1)
    paginator.load_next_page()
    await settle()
    paginator.load_next_page()
    assert "Ignoring load_next_page while loading" in caplog.text

    # Closing logs the cancelled fetch
    await paginator.aclose()
    assert "Job cancelled" in caplog.text
    assert "Paginator closed" in caplog.text


@pytest.mark.asyncio
async def test_fetch_failure_logged_as_warning(make_paginator, source, caplog):
    caplog.set_level(logging.DEBUG, logger="pagerflow")
    source.fail(0, RuntimeError("boom"))

    paginator = make_paginator(source)
    await wait_for_page(paginator, 0)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert [r.getMessage() for r in warnings] == ["Page fetch failed"]
    assert warnings[0].page == 0


@pytest.mark.asyncio
async def test_job_failure_logged_with_traceback(make_paginator, source, caplog, monkeypatch):
    caplog.set_level(logging.DEBUG, logger="pagerflow")
    paginator = make_paginator(source)
    await wait_for_page(paginator, 0)

    def broken_cursor(page):
        raise RuntimeError("advance broke")

    monkeypatch.setattr(paginator, "_set_cursor", broken_cursor)
    paginator.load_next_page()
    await settle()

    errors = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert errors[0].getMessage() == "Caught advance broke"
    assert errors[0].exc_info is not None
    assert errors[0].job == "pagerflow-advance"


@pytest.mark.asyncio
async def test_failing_state_observer_does_not_break_paginator(make_paginator, source, caplog):
    """A UI callback raising must not stop loading or reach the error channel."""
    paginator = make_paginator(source)

    def broken_render(state):
        if state.is_loading:
            raise RuntimeError("render failed")

    paginator.state.observe(broken_render)
    state = await wait_for_page(paginator, 0)

    assert state.item_count == 20
    assert paginator.error_event.has_pending is False
    assert "Observer raised" in caplog.text


@pytest.mark.asyncio
async def test_load_next_page_on_closed_paginator_warns(make_paginator, source, caplog):
    paginator = make_paginator(source)
    await paginator.aclose()

    paginator.load_next_page()

    assert "load_next_page called on a closed paginator" in caplog.text
    assert source.calls == []
