from __future__ import annotations

import pytest

from mathconv.logging import clear_sink


@pytest.fixture(autouse=True)
def _detached_event_sink():
    """Keep the module-level event sink from leaking between tests."""
    clear_sink()
    yield
    clear_sink()
