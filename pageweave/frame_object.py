"""
================================================================================
Frame Objects
================================================================================

Page and control objects living inside an ``<iframe>``.

The search pattern of a frame object selects the frame element in the
parent's document; ``locator`` points at the frame's own document root, so
children of a frame object are located inside the frame.

Usage:
    class PaymentFrame(FramePageObject, child_of=CheckoutPage):
        search_pattern = By.id("payment")

    frame = tab.on(PaymentFrame)
    await frame.find(TextInput, By.name("card")).set_text("4111", mask=True)
    assert await frame.frame_element.is_visible()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC

from playwright.async_api import Locator

from .control_object import ControlObject
from .page_object import PageObject
from .search import By


class _FrameScope:
    """Locator overrides shared by frame page and control objects."""

    search_pattern = By.tag_name("iframe")

    @property
    def frame_element(self) -> Locator:
        """
        The ``<iframe>`` element itself, in the parent's document.

        Use it to check that the frame exists or is visible; use ``locator``
        for the content.
        """
        return self._parent.locator.locator(str(self._pattern)).nth(self._index)

    @property
    def locator(self) -> Locator:
        """Root element of the frame's document."""
        frame = self._parent.locator.frame_locator(str(self._pattern)).nth(self._index)
        return frame.locator(":root")


class FramePageObject(_FrameScope, PageObject, ABC):
    """Base class for page objects rendered in a frame."""
    pass


class FrameControlObject(_FrameScope, ControlObject, ABC):
    """Base class for controls rendered in a frame."""
    pass


__all__ = [
    "FramePageObject",
    "FrameControlObject",
]
