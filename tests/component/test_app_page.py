"""Component tests for the full portfolio page served at "/"."""

import pytest
from nicegui.testing import User


@pytest.mark.component
class TestPortfolioPage:
    """Tests for the page built by the app entry."""

    async def test_unconfigured_store_renders_empty_sections(self, user: User):
        """Without gateway credentials the page loads with empty content."""
        await user.open("/")

        await user.should_see("The timeline")
        await user.should_see("No events yet", retries=20)
        await user.should_see("No thoughts yet")
        await user.should_not_see("Add Event")
