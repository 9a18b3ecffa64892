"""Select and option controls."""

from __future__ import annotations

from typing import AsyncIterator, List, Optional

import allure

from ..control_object import ControlObject
from ..search import By


class Option(ControlObject):
    """An ``<option>`` of a select; found under its Select."""

    search_pattern = By.tag_name("option")

    async def value(self) -> Optional[str]:
        return await self.get_attribute("value")

    async def text(self) -> str:
        return await self.text_content() or ""

    async def is_selected(self) -> bool:
        return await self.locator.evaluate("option => option.selected")

    async def select(self) -> None:
        """Select this option in its parent select (no-op when already selected)."""
        if await self.is_selected():
            return
        value = await self.value()
        with allure.step(f"Select option: {value}"):
            await self.parent.locator.select_option(value)


class Select(ControlObject):
    """A ``<select>`` element."""

    search_pattern = By.tag_name("select")

    async def options(self) -> AsyncIterator[Option]:
        async for option in self.find_all(Option):
            yield option

    def option_at(self, index: int) -> Option:
        option = self.find(Option)
        option.index = index
        return option

    async def values(self) -> List[Optional[str]]:
        return [await option.value() async for option in self.options()]

    async def select(self, value: str) -> None:
        """
        Select the option with the given value.

        Args:
            value: Value attribute of the option
        """
        with allure.step(f"Select {self.descriptor}: {value}"):
            await self.locator.select_option(value)

    async def selected_value(self) -> str:
        return await self.locator.input_value()
