"""Button control."""

from __future__ import annotations

from ..control_object import ControlObject
from ..search import By


class Button(ControlObject):
    """A ``<button>`` element; ``click`` is inherited from ControlObject."""

    search_pattern = By.tag_name("button")
