"""
================================================================================
Panel Page Objects
================================================================================

Panels are shown one at a time; each one navigates to itself through the
menu when it is not visible yet.

These classes declare no static parent: DemoTab registers them under the
shell when it is constructed.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC
from typing import List

from pageweave import By, ControlObject, PageObject
from pageweave.controls import Button, Checkbox, Table, TextInput

from .menu import MenuPage


class StatusMessage(ControlObject):
    """Status line below the settings form."""

    search_pattern = By.id("status")


class PanelPage(PageObject, ABC):
    """Panel reachable through a menu entry named ``menu_entry``."""

    menu_entry: str = ""

    async def navigate(self) -> None:
        if not await self.is_visible():
            await self.on(MenuPage).open(self.menu_entry)
        await self.wait_for_visible()


class SettingsPage(PanelPage):
    """Settings panel: dark mode toggle and display name."""

    search_pattern = By.id("settings")
    menu_entry = "Settings"

    @property
    def dark_mode(self) -> Checkbox:
        return self.find(Checkbox, By.name("dark-mode"))

    @property
    def display_name(self) -> TextInput:
        return self.find(TextInput, By.name("display-name"))

    async def save(self, display_name: str) -> str:
        """
        Fill in the display name and save.

        Returns:
            The status message shown after saving
        """
        await self.display_name.set_text(display_name)
        await self.find(Button, By.test_id("save")).click()
        return await self.find(StatusMessage).text()


class PreferencesPage(PanelPage):
    """Preferences panel with a key/value table."""

    search_pattern = By.id("preferences")
    menu_entry = "Preferences"

    @property
    def table(self) -> Table:
        return self.find(Table)

    async def keys(self) -> List[str]:
        return [(await row.texts())[0] async for row in self.table.body.rows()]
