"""
================================================================================
Menu Page Object
================================================================================

Navigation bar of the demo shell. Panels open themselves through it.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from pageweave import By, PageObject
from pageweave.controls import Link

from .shell import ShellPage


class MenuPage(PageObject, child_of=ShellPage):
    """Menu with one ``[data-page='Name']`` link per panel."""

    search_pattern = By.tag_name("nav")

    def entry(self, name: str) -> Link:
        """Link of the menu entry called ``name``."""
        return self.find(Link, By.css(f"[data-page='{name}']"))

    async def open(self, name: str) -> None:
        """
        Click the menu entry of a panel.

        Args:
            name: Value of the entry's data-page attribute
        """
        with allure.step(f"Open menu entry {name}"):
            logger.info(f"Opening menu entry: {name}")
            await self.entry(name).click()
