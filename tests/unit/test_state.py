"""Tests for AppState: the edit-mode gate and shared content lists."""

import logging

import pytest

from src.memory.content import Event, EventCategory, Thought
from src.ui.state import AppState


@pytest.fixture
def state() -> AppState:
    """State with the default secret."""
    return AppState()


class TestEditModeGate:
    """Tests for the password-gated edit mode."""

    def test_correct_password_unlocks(self, state):
        """Matching the secret turns on edit mode and closes the prompt."""
        state.open_password_modal()

        assert state.verify_password("life2024") is True
        assert state.is_edit_mode is True
        assert state.show_password_modal is False

    def test_wrong_password_changes_nothing(self, state):
        """A mismatch leaves the prompt open and edit mode off."""
        state.open_password_modal()

        assert state.verify_password("wrong") is False
        assert state.is_edit_mode is False
        assert state.show_password_modal is True

    @pytest.mark.parametrize("candidate", ["", "LIFE2024", " life2024", "life2024 "])
    def test_comparison_is_exact(self, state, candidate):
        """No trimming or case folding."""
        assert state.verify_password(candidate) is False

    def test_repeated_failures_never_lock_out(self, state):
        """There is no attempt limit."""
        for _ in range(20):
            assert state.verify_password("nope") is False
        assert state.verify_password("life2024") is True

    def test_custom_secret(self):
        """The secret comes from configuration."""
        state = AppState(edit_password="s3cret")
        assert state.verify_password("life2024") is False
        assert state.verify_password("s3cret") is True

    def test_close_modal_keeps_edit_mode(self, state):
        """Dismissing the prompt does not change edit mode."""
        state.open_password_modal()
        state.close_password_modal()
        assert state.show_password_modal is False
        assert state.is_edit_mode is False

    def test_exit_edit_mode(self, state):
        """Edit mode can be left without a password."""
        state.verify_password("life2024")
        state.exit_edit_mode()
        assert state.is_edit_mode is False

    def test_callbacks_fire_on_change_only(self, state):
        """Callbacks receive the new flag once per actual change."""
        seen: list[bool] = []
        state.on_edit_mode_change(seen.append)

        state.verify_password("life2024")
        state.verify_password("life2024")
        state.exit_edit_mode()

        assert seen == [True, False]

    def test_failing_callback_is_logged(self, state, caplog):
        """One broken callback does not stop the others."""
        seen: list[bool] = []

        def broken(_: bool) -> None:
            raise RuntimeError("boom")

        state.on_edit_mode_change(broken)
        state.on_edit_mode_change(seen.append)

        with caplog.at_level(logging.ERROR):
            state.verify_password("life2024")

        assert seen == [True]
        assert state.is_edit_mode is True
        assert "Edit mode callback failed" in caplog.text

    def test_secret_not_in_repr(self, state):
        """The secret is kept out of the dataclass repr."""
        assert "life2024" not in repr(state)


class TestEventState:
    """Tests for event selection and mutation helpers."""

    @pytest.fixture
    def loaded(self, state, sample_events) -> AppState:
        """State with the sample events."""
        state.events = list(sample_events)
        state.events_loaded = True
        return state

    def test_toggle_expanded(self, loaded):
        """Expanding twice collapses again."""
        assert loaded.toggle_expanded("e2") is True
        assert "e2" in loaded.expanded_event_ids
        assert loaded.toggle_expanded("e2") is False
        assert "e2" not in loaded.expanded_event_ids

    def test_toggle_category(self, loaded):
        """Selecting the selected category clears it."""
        loaded.toggle_category("creative")
        assert loaded.selected_category == "creative"
        loaded.toggle_category("connection")
        assert loaded.selected_category == "connection"
        loaded.toggle_category("connection")
        assert loaded.selected_category is None

    def test_apply_created_and_updated(self, loaded):
        """New events are appended and updates replace in place."""
        new = Event(id="n", title="New", start_year=2020, category=EventCategory.CREATIVE)
        loaded.apply_event_created(new)
        loaded.apply_event_updated(new.model_copy(update={"title": "Renamed"}))

        assert loaded.events[-1].title == "Renamed"
        assert len(loaded.events) == 6

    def test_apply_deleted_clears_selection(self, loaded):
        """Deleting the selected, expanded event clears both."""
        loaded.selected_event_id = "e2"
        loaded.expanded_event_ids.add("e2")

        loaded.apply_event_deleted("e2")

        assert loaded.selected_event is None
        assert loaded.selected_event_id is None
        assert "e2" not in loaded.expanded_event_ids
        # children survive with their dangling parent reference
        assert [e.id for e in loaded.events if e.parent_id == "e2"] == ["e2a", "e2b"]


class TestThoughtState:
    """Tests for thought selection and comment thread handling."""

    @pytest.fixture
    def loaded(self, state, sample_thought) -> AppState:
        """State with one thought."""
        state.thoughts = [sample_thought]
        state.thoughts_loaded = True
        return state

    def test_select_switch_clears_comments(self, loaded, sample_comments):
        """Switching thoughts drops the previous thread."""
        loaded.select_thought("t1")
        loaded.apply_comments("t1", sample_comments)
        assert loaded.selected_thought is not None

        loaded.select_thought("t1")
        assert loaded.comments == sample_comments

        loaded.select_thought(None)
        assert loaded.comments == []
        assert loaded.selected_thought is None

    def test_late_comments_applied_anyway(self, loaded, sample_comments, caplog):
        """A response for a thread no longer open is still applied."""
        loaded.select_thought("t1")
        loaded.select_thought(None)

        with caplog.at_level(logging.DEBUG, logger="src.ui.state"):
            loaded.apply_comments("t1", sample_comments)

        assert loaded.comments == sample_comments
        assert "while None is selected" in caplog.text

    def test_apply_thought_updated_keeps_position(self, loaded):
        """Only title and content change."""
        loaded.apply_thought_updated("t1", "New title", "New content")
        thought = loaded.thoughts[0]
        assert (thought.title, thought.content) == ("New title", "New content")
        assert (thought.x, thought.y) == (40.0, 60.0)

    def test_apply_thought_created(self, loaded):
        """New thoughts are appended."""
        loaded.apply_thought_created(Thought(id="t2", title="Second"))
        assert [t.id for t in loaded.thoughts] == ["t1", "t2"]

    def test_apply_thought_deleted_closes_detail(self, loaded, sample_comments):
        """Deleting the open thought closes it and drops its thread."""
        loaded.select_thought("t1")
        loaded.apply_comments("t1", sample_comments)

        loaded.apply_thought_deleted("t1")

        assert loaded.thoughts == []
        assert loaded.selected_thought_id is None
        assert loaded.comments == []
