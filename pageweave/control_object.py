"""
================================================================================
Control Object
================================================================================

Uncached leaf elements created with ``find``/``find_all``.

Controls never take part in the relationship graph: each ``find`` builds a
fresh instance bound to the caller, its search pattern and an index.

Usage:
    class SaveButton(Button):
        search_pattern = By.test_id("save")

    await page.find(SaveButton).click()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Optional

import allure

from .exceptions import ControlNotFoundError
from .ui_object import UIObject


class ControlObject(UIObject, ABC):
    """Base class for controls."""

    async def click(self, **kwargs: Any) -> None:
        """
        Click the control.

        Args:
            **kwargs: Additional Playwright click options
        """
        with allure.step(f"Click: {self.descriptor}"):
            await self.locator.click(**kwargs)

    async def focus(self) -> None:
        await self.locator.focus()

    async def fill(self, value: str) -> None:
        with allure.step(f"Fill: {self.descriptor}"):
            await self.locator.fill(value)

    async def text_content(self) -> Optional[str]:
        """Raw ``textContent`` of the element, hidden text included."""
        return await self.locator.text_content()

    def cast(self, control_type: Any) -> Any:
        """
        View the same element as another control type.

        The new control shares parent, search pattern and index with this one.

        Raises:
            ControlNotFoundError: No concrete control implements the type
        """
        descriptor = self.root.control_resolver.resolve_one(control_type)
        if descriptor is None:
            raise ControlNotFoundError(control_type, root=type(self.root))
        control = descriptor.instantiate()
        control._attach(self.parent, descriptor=descriptor)
        control._pattern = self._pattern
        control.index = self.index
        return control


__all__ = [
    "ControlObject",
]
