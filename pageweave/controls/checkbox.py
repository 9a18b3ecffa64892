"""Checkbox control."""

from __future__ import annotations

from typing import Optional

import allure

from ..control_object import ControlObject
from ..search import By


class Checkbox(ControlObject):
    """An ``<input type="checkbox">`` element."""

    search_pattern = By.tag_name("input").and_(By.css('[type="checkbox"]'))

    async def is_checked(self) -> bool:
        return await self.locator.is_checked()

    async def check(self, timeout: Optional[int] = None) -> None:
        with allure.step(f"Check: {self.descriptor}"):
            await self.locator.check(timeout=timeout)

    async def uncheck(self, timeout: Optional[int] = None) -> None:
        with allure.step(f"Uncheck: {self.descriptor}"):
            await self.locator.uncheck(timeout=timeout)

    async def set_checked(self, checked: bool) -> None:
        """Check or uncheck depending on ``checked``."""
        if checked:
            await self.check()
        else:
            await self.uncheck()
