"""Component tests for unlocking edit mode from the header."""

import pytest
from nicegui import ui
from nicegui.testing import User

from src.ui.components.header import Header
from src.ui.components.password_dialog import PasswordDialog
from src.ui.state import AppState


@pytest.mark.component
class TestEditModeUnlock:
    """Tests for the header toggle and the password dialog together."""

    async def test_wrong_password_keeps_edit_mode_off(self, user: User):
        """A wrong password shows the inline error and leaves the dialog open."""
        state = AppState()

        @ui.page("/test-edit-wrong")
        def test_page():
            """Build the header with its password dialog."""
            dialog = PasswordDialog(state)
            dialog.build()
            Header(state, "Portfolio", dialog).build()

        await user.open("/test-edit-wrong")
        await user.should_not_see("Wrong password, please try again")

        user.find(marker="edit-toggle").click()
        assert state.show_password_modal is True

        user.find(kind=ui.input).type("guess")
        user.find(marker="password-submit").click()

        await user.should_see("Wrong password, please try again")
        assert state.is_edit_mode is False
        assert state.show_password_modal is True

    async def test_correct_password_unlocks_and_toggle_locks(self, user: User):
        """The secret turns edit mode on; the header toggle turns it off again."""
        state = AppState()
        changes: list[bool] = []
        state.on_edit_mode_change(changes.append)

        @ui.page("/test-edit-unlock")
        def test_page():
            """Build the header with its password dialog."""
            dialog = PasswordDialog(state)
            dialog.build()
            Header(state, "Portfolio", dialog).build()

        await user.open("/test-edit-unlock")
        user.find(marker="edit-toggle").click()
        user.find(kind=ui.input).type("life2024")
        user.find(marker="password-submit").click()

        assert state.is_edit_mode is True
        assert state.show_password_modal is False

        user.find(marker="edit-toggle").click()

        assert state.is_edit_mode is False
        assert changes == [True, False]
