"""Link control."""

from __future__ import annotations

from typing import Optional

from ..control_object import ControlObject
from ..search import By


class Link(ControlObject):
    """An ``<a>`` element."""

    search_pattern = By.tag_name("a")

    async def url(self) -> Optional[str]:
        """Value of the ``href`` attribute."""
        return await self.get_attribute("href")
