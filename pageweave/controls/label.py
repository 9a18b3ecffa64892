"""Label control."""

from __future__ import annotations

from typing import Optional

from ..control_object import ControlObject
from ..search import By


class Label(ControlObject):
    """A ``<label>`` element."""

    search_pattern = By.tag_name("label")

    async def target_id(self) -> Optional[str]:
        """Id of the labelled element (the ``for`` attribute)."""
        return await self.get_attribute("for")
