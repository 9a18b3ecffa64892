"""Text input control."""

from __future__ import annotations

import allure

from ..control_object import ControlObject
from ..search import By


class TextInput(ControlObject):
    """A single line ``<input>`` element."""

    search_pattern = By.tag_name("input")

    async def value(self) -> str:
        return await self.locator.input_value()

    async def set_text(self, value: str, mask: bool = False) -> None:
        """
        Replace the current content.

        Args:
            value: Text to fill
            mask: Hide the value in the Allure step title (passwords)
        """
        shown = "*" * len(value) if mask else value
        with allure.step(f"Fill {self.descriptor}: {shown}"):
            await self.locator.fill(value)

    async def clear(self) -> None:
        await self.locator.clear()
