"""
================================================================================
Page Object
================================================================================

Cached nodes of the page object tree.

Page objects are resolved through ``on``/``goto`` and cached per root and
path. A page object without a search pattern shares its parent's locator.

Usage:
    class SettingsPage(PageObject, child_of=ShellPage):
        search_pattern = By.id("settings")

        async def navigate(self) -> None:
            if not await self.is_visible():
                await self.on(MenuPage).open(SettingsPage)
            await self.wait_for_visible()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC

from .ui_object import UIObject


class PageObject(UIObject, ABC):
    """Base class for page objects."""
    pass


__all__ = [
    "PageObject",
]
