"""
================================================================================
Framework Exceptions
================================================================================

Error taxonomy for page object resolution, registration and root lifecycle.

Every error raised by the framework derives from PageweaveError so test code
can catch framework failures without swallowing Playwright errors, which are
always propagated unmodified.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Optional


class PageweaveError(Exception):
    """Base class for all framework errors."""
    pass


class UIObjectNotFoundError(PageweaveError):
    """
    Raised when a requested UI object type cannot be resolved.

    Attributes:
        requested: The requested type (class, generic alias or descriptor)
        root: The root type the lookup started from (if any)
    """

    kind = "UI object"

    def __init__(
        self,
        requested: Any,
        root: Optional[type] = None,
        reason: str = "",
    ):
        self.requested = requested
        self.root = root
        message = f"{self.kind} not found: {_type_name(requested)}"
        if root is not None:
            message += f" (root: {_type_name(root)})"
        if reason:
            message += f" - {reason}"
        super().__init__(message)


class PageObjectNotFoundError(UIObjectNotFoundError):
    """No path from the root satisfies the requested page object type and condition."""

    kind = "Page object"


class ControlNotFoundError(UIObjectNotFoundError):
    """No concrete control type implements the requested control type."""

    kind = "Control object"


class TabObjectNotFoundError(UIObjectNotFoundError):
    """No concrete root type implements the requested root type."""

    kind = "Tab object"


class InvalidRegistrationError(PageweaveError, TypeError):
    """Raised when an abstract type or interface is used in a child relation."""
    pass


class ScopeNotReadyError(PageweaveError):
    """Raised when the browser page is accessed before the root is open."""
    pass


class ScopeClosedError(ScopeNotReadyError):
    """Raised when a closed root is used for resolution or navigation."""
    pass


class ConditionError(PageweaveError, TypeError):
    """Raised when an awaitable condition reaches the synchronous resolver."""
    pass


class SelectorError(PageweaveError, ValueError):
    """Raised when search patterns cannot be combined."""
    pass


def _type_name(tp: Any) -> str:
    """Readable name for classes, generic aliases and descriptors."""
    if isinstance(tp, type):
        return tp.__qualname__
    return str(tp)


__all__ = [
    "PageweaveError",
    "UIObjectNotFoundError",
    "PageObjectNotFoundError",
    "ControlNotFoundError",
    "TabObjectNotFoundError",
    "InvalidRegistrationError",
    "ScopeNotReadyError",
    "ScopeClosedError",
    "ConditionError",
    "SelectorError",
]
