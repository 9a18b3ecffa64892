"""
================================================================================
Search Patterns
================================================================================

Selector values used to scope UI objects under their parent.

Features:
    - Factories for the common strategies (css, xpath, id, tag, class, name,
      test id) plus coercion of free strings
    - Combination of simple selectors into one compound CSS selector
    - CSS escaping of id and class values

Usage:
    >>> str(By.id("submit"))
    '#submit'
    >>> str(By.tag_name("button").and_(By.class_name("primary")))
    'button.primary'
    >>> str(By.test_id("save"))
    '[data-testid="save"]'

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from .exceptions import SelectorError


# Characters that may appear unescaped in a CSS identifier
_CSS_IDENTIFIER_SAFE = re.compile(r"[A-Za-z0-9_\-\u00a0-\uffff]")
# Attribute name of a simple attribute fragment: [name], [name=value], ...
_ATTRIBUTE_NAME = re.compile(r"^\[\s*([^\s~|^$*=\]]+)")


def escape_css(value: str) -> str:
    """Backslash-escape characters that are not valid in a CSS identifier."""
    escaped = []
    for position, char in enumerate(value):
        if _CSS_IDENTIFIER_SAFE.match(char) and not (position == 0 and char.isdigit()):
            escaped.append(char)
        elif position == 0 and char.isdigit():
            escaped.append(f"\\{ord(char):x} ")
        else:
            escaped.append(f"\\{char}")
    return "".join(escaped)


def escape_css_string(value: str) -> str:
    """Escape a value for use inside a double-quoted CSS string."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


@dataclass(frozen=True)
class By:
    """
    A search pattern.

    Simple patterns built by the factories keep their parts (tag, id, classes,
    test id, attribute or pseudo fragments) so they can be combined with
    ``and_``. XPath and free-form patterns are rendered as given.
    """

    tag: Optional[str] = None
    element_id: Optional[str] = None
    classes: Tuple[str, ...] = ()
    data_test_id: Optional[str] = None
    fragments: Tuple[str, ...] = ()
    raw: Optional[str] = None

    # =========================================================================
    # Factories
    # =========================================================================

    @classmethod
    def css(cls, selector: str) -> "By":
        """
        CSS selector.

        Attribute (``[...]``) and pseudo-class (``:...``) selectors stay
        combinable; anything else is kept verbatim.
        """
        selector = selector.strip()
        if selector.startswith("[") or (selector.startswith(":") and not selector.startswith("::")):
            return cls(fragments=(selector,))
        return cls(raw=selector)

    @classmethod
    def xpath(cls, expression: str) -> "By":
        expression = expression.strip()
        if expression.startswith(("/", "(", "..")):
            return cls(raw=expression)
        return cls(raw=f"xpath={expression}")

    @classmethod
    def id(cls, element_id: str) -> "By":
        return cls(element_id=element_id)

    @classmethod
    def tag_name(cls, tag: str) -> "By":
        return cls(tag=tag)

    @classmethod
    def class_name(cls, class_name: str) -> "By":
        return cls(classes=(class_name,))

    @classmethod
    def name(cls, name: str) -> "By":
        return cls(fragments=(f'[name="{escape_css_string(name)}"]',))

    @classmethod
    def test_id(cls, test_id: str) -> "By":
        return cls(data_test_id=test_id)

    @classmethod
    def coerce(cls, value: Any) -> "By":
        """
        Convert a free string (or an existing By) to a search pattern.

        Raises:
            ValueError: If value is None or empty
        """
        if isinstance(value, By):
            return value
        if value is None:
            raise ValueError("Search pattern must not be None")
        text = str(value).strip()
        if not text:
            raise ValueError("Search pattern must not be empty")
        return cls(raw=text)

    # =========================================================================
    # Combination
    # =========================================================================

    @property
    def is_combinable(self) -> bool:
        return self.raw is None

    def and_(self, other: "By") -> "By":
        """
        Combine two simple patterns into one compound CSS selector.

        Raises:
            SelectorError: On multiple tags, ids or test ids, duplicate
                attribute names, or a verbatim pattern on either side
        """
        if not self.is_combinable or not other.is_combinable:
            raise SelectorError(
                f"Cannot combine verbatim selectors: '{self}' and '{other}'"
            )
        if self.tag and other.tag:
            raise SelectorError("Cannot combine multiple tag selectors")
        if self.element_id and other.element_id:
            raise SelectorError("Cannot combine multiple ID selectors")
        if self.data_test_id and other.data_test_id:
            raise SelectorError("Cannot combine multiple test id selectors")

        names = [_attribute_name(f) for f in self.fragments]
        for fragment in other.fragments:
            attribute = _attribute_name(fragment)
            if attribute is not None and attribute in names:
                raise SelectorError(
                    f"Cannot combine duplicate attribute selectors for '{attribute}'"
                )

        classes = self.classes + tuple(c for c in other.classes if c not in self.classes)
        return replace(
            self,
            tag=self.tag or other.tag,
            element_id=self.element_id or other.element_id,
            classes=classes,
            data_test_id=self.data_test_id or other.data_test_id,
            fragments=self.fragments + other.fragments,
        )

    # =========================================================================
    # Rendering
    # =========================================================================

    def to_selector(self) -> str:
        """Selector string passed to ``Locator.locator``."""
        if self.raw is not None:
            return self.raw
        parts = []
        if self.tag:
            parts.append(self.tag)
        if self.element_id:
            parts.append(f"#{escape_css(self.element_id)}")
        parts.extend(f".{escape_css(c)}" for c in self.classes)
        if self.data_test_id:
            parts.append(f'[data-testid="{escape_css_string(self.data_test_id)}"]')
        parts.extend(self.fragments)
        return "".join(parts) or "*"

    def __str__(self) -> str:
        return self.to_selector()


def _attribute_name(fragment: str) -> Optional[str]:
    match = _ATTRIBUTE_NAME.match(fragment)
    return match.group(1) if match else None


__all__ = [
    "By",
    "escape_css",
]
