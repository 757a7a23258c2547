"""Pytest fixtures for portfolio tests."""

import logging

import pytest

from src.memory.content import Comment, Event, EventCategory, Thought
from src.settings import ENV_GATEWAY_KEY, ENV_GATEWAY_URL, Settings
from tests.shared.fake_gateway import FakeGateway

# Enable NiceGUI testing plugin for component tests
pytest_plugins = ["nicegui.testing.user_plugin"]


@pytest.fixture(autouse=True, scope="function")
def cleanup_production_log_handlers():
    """Remove file handlers pointing to the production log after each test.

    This ensures tests don't accidentally leave handlers that write to
    output/logs/portfolio.log, while still allowing logging tests to work.
    """
    yield

    root_logger = logging.getLogger()
    production_log_name = "portfolio.log"

    handlers_to_remove = []
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            if hasattr(handler, "baseFilename") and production_log_name in handler.baseFilename:
                handlers_to_remove.append(handler)

    for handler in handlers_to_remove:
        handler.close()
        root_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def clear_settings_cache_per_test():
    """Clear Settings cache before each test to ensure isolation."""
    Settings.clear_cache()
    yield
    Settings.clear_cache()


@pytest.fixture(autouse=True)
def isolate_settings_files(tmp_path, monkeypatch):
    """Redirect settings.json and .env to a temp directory.

    Also removes gateway environment overrides so a developer's shell
    cannot leak real credentials into tests.
    """
    import src.settings._settings as settings_module

    monkeypatch.setattr(settings_module, "SETTINGS_FILE", tmp_path / "settings.json")
    monkeypatch.setattr(settings_module, "ENV_FILE", tmp_path / ".env")
    monkeypatch.delenv(ENV_GATEWAY_URL, raising=False)
    monkeypatch.delenv(ENV_GATEWAY_KEY, raising=False)
    yield


@pytest.fixture
def tmp_settings() -> Settings:
    """Default settings without loading from file."""
    settings = Settings()
    settings.validate()
    return settings


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Empty in-memory gateway."""
    return FakeGateway()


@pytest.fixture
def sample_events() -> list[Event]:
    """Two main events, one with two sub-events, plus an orphan.

    Returns:
        Events in ascending start-year order.
    """
    return [
        Event(id="e1", title="Moved abroad", start_year=2010, category=EventCategory.EXPLORATION),
        Event(
            id="e2",
            title="First job",
            start_year=2012,
            end_year=2015,
            category=EventCategory.CREATIVE,
        ),
        Event(
            id="e2a",
            title="Shipped v1",
            start_year=2013,
            category=EventCategory.CREATIVE,
            parent_id="e2",
        ),
        Event(
            id="e2b",
            title="Met the team",
            start_year=2014,
            category=EventCategory.CONNECTION,
            parent_id="e2",
        ),
        Event(
            id="e9",
            title="Lost child",
            start_year=2016,
            category=EventCategory.CONNECTION,
            parent_id="gone",
        ),
    ]


@pytest.fixture
def sample_thought() -> Thought:
    """A thought with a stored position."""
    return Thought(id="t1", title="On rivers", content="Everything flows.", x=40.0, y=60.0)


@pytest.fixture
def sample_comments() -> list[Comment]:
    """One approved and one pending comment on thought t1."""
    return [
        Comment(id="c1", thought_id="t1", content="Lovely", author="Ana", is_public=True),
        Comment(id="c2", thought_id="t1", content="Hmm", author=None, is_public=False),
    ]
