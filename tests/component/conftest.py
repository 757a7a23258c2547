"""Pytest configuration for NiceGUI component tests.

These tests use NiceGUI's User fixture for fast, lightweight testing
of the page sections without requiring a browser.

Note: The pytest_plugins for NiceGUI is registered in the root conftest.py.
"""

import pytest

from src.services import ServiceContainer
from src.ui.state import AppState


@pytest.fixture
def test_services(tmp_settings, fake_gateway) -> ServiceContainer:
    """Service container over the in-memory gateway."""
    return ServiceContainer(tmp_settings, gateway=fake_gateway)


@pytest.fixture
def seeded_comments(fake_gateway):
    """One approved and one pending comment on thought t1."""
    fake_gateway.seed(
        "comments",
        [
            {
                "id": "c1",
                "thought_id": "t1",
                "content": "A lovely reflection",
                "author": "Ana",
                "is_public": True,
                "created_at": "2024-03-01T10:00:00+00:00",
            },
            {
                "id": "c2",
                "thought_id": "t1",
                "content": "Waiting for a look",
                "author": None,
                "is_public": False,
                "created_at": "2024-03-02T10:00:00+00:00",
            },
        ],
    )
    return fake_gateway


@pytest.fixture
def philosophy_state(sample_thought, fake_gateway) -> AppState:
    """State with one placed thought that is also in the store."""
    fake_gateway.seed("thoughts", [sample_thought.model_dump(mode="json")])
    state = AppState()
    state.thoughts = [sample_thought]
    state.thoughts_loaded = True
    return state


@pytest.fixture
def timeline_state(sample_events) -> AppState:
    """State holding the sample events plus a grandchild under e2a."""
    state = AppState()
    state.events = [
        *sample_events,
        sample_events[2].model_copy(
            update={"id": "e2a1", "title": "Nested release", "parent_id": "e2a"}
        ),
    ]
    state.events_loaded = True
    return state
