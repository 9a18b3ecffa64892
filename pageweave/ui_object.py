"""
================================================================================
UI Object
================================================================================

Common base of every node in the page object tree.

Provides:
    - Static child declaration via the ``child_of=`` class keyword
    - Parent, root and positional index of a materialized node
    - Lazy locator scoped under the parent's locator
    - Resolution entry points (on, on_async, goto) and control lookup
      (find, find_all)
    - Element state helpers and waits

Usage:
    class ShellPage(PageObject, child_of=DemoTab):
        search_pattern = By.id("shell")

    shell = tab.on(ShellPage)
    await shell.wait_for_visible()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional, Tuple, Union

import allure
from loguru import logger
from playwright.async_api import Locator

from .catalog import default_catalog
from .descriptors import TypeDescriptor
from .exceptions import ControlNotFoundError
from .search import By

if TYPE_CHECKING:
    from .page_object_locator import Condition
    from .tab_object import TabObject


# Default output directory for screenshots
SCREENSHOT_DIR = Path("screenshots")

SearchPattern = Union[By, str]


class UIObject(ABC):
    """
    Base class for page objects, controls and roots.

    Subclasses declare where they live in the tree with ``child_of=``, which
    accepts one parent or a tuple of parents. The declaration is inherited.
    """

    # Override in subclasses
    search_pattern: Optional[SearchPattern] = None

    def __init_subclass__(cls, child_of: Any = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if child_of is None:
            parents: Tuple[Any, ...] = ()
        elif isinstance(child_of, (tuple, list)):
            parents = tuple(child_of)
        else:
            parents = (child_of,)
        default_catalog.register(cls, parents)

    def __init__(self) -> None:
        self._parent: Optional[UIObject] = None
        self._pattern: Optional[By] = None
        self._index = 0
        self._descriptor: Optional[TypeDescriptor] = None

    def _attach(
        self,
        parent: "UIObject",
        pattern: Optional[SearchPattern] = None,
        descriptor: Optional[TypeDescriptor] = None,
    ) -> None:
        """Bind a freshly constructed node to its parent."""
        self._parent = parent
        if pattern is None:
            pattern = self.search_pattern
        self._pattern = None if pattern is None else By.coerce(pattern)
        if descriptor is not None:
            self._descriptor = descriptor

    # =========================================================================
    # Tree Position
    # =========================================================================

    @property
    def parent(self) -> Optional["UIObject"]:
        """Parent node; None for roots and unattached objects."""
        return self._parent

    @property
    def root(self) -> "TabObject":
        node = self
        while node._parent is not None:
            node = node._parent
        return node  # type: ignore[return-value]

    @property
    def descriptor(self) -> TypeDescriptor:
        if self._descriptor is None:
            orig_class = getattr(self, "__orig_class__", None)
            self._descriptor = TypeDescriptor.of(orig_class or type(self))
        return self._descriptor

    @property
    def type_args(self) -> Tuple[Any, ...]:
        """Generic arguments this node was instantiated with."""
        return self.descriptor.args

    @property
    def index(self) -> int:
        """Position among the elements matching the search pattern."""
        return self._index

    @index.setter
    def index(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"Index must not be negative: {value}")
        self._index = value

    @property
    def pattern(self) -> Optional[By]:
        return self._pattern

    @property
    def locator(self) -> Locator:
        """
        Playwright locator of this node.

        Composed lazily from the parent's locator; nodes without a search
        pattern share their parent's locator.
        """
        parent_locator = self._parent.locator
        if self._pattern is None:
            return parent_locator
        return parent_locator.locator(str(self._pattern)).nth(self._index)

    @property
    def on_condition(self) -> Any:
        """
        Implicit condition used when ``on`` is called without a predicate.

        May return a bool or, for the async entry points, an awaitable of bool.
        """
        return True

    # =========================================================================
    # Resolution
    # =========================================================================

    def on(self, page_object_type: Any, condition: Optional["Condition"] = None) -> Any:
        """
        Resolve a page object reachable from this object's root.

        Args:
            page_object_type: Concrete class, abstract class or closed generic
            condition: Predicate over the candidate; defaults to its on_condition

        Returns:
            The cached page object instance

        Raises:
            PageObjectNotFoundError: No reachable candidate satisfies the condition
        """
        return self.root.page_object_locator.find(page_object_type, condition)

    async def on_async(self, page_object_type: Any, condition: Optional["Condition"] = None) -> Any:
        """Like ``on`` but awaits asynchronous conditions."""
        return await self.root.page_object_locator.find_async(page_object_type, condition)

    async def goto(self, page_object_type: Any, condition: Optional["Condition"] = None) -> Any:
        """
        Resolve a page object and run its navigation hook.

        Opens the root first if it has not been opened yet.
        """
        root = self.root
        await root._open_if_unopened()
        target = await root.page_object_locator.find_async(page_object_type, condition)
        with allure.step(f"Goto {target.descriptor}"):
            await target.navigate()
        return target

    async def navigate(self) -> None:
        """Navigation hook run by ``goto``; override to make the object visible."""
        logger.debug(f"No navigation defined for {self.descriptor}")

    def find(self, control_type: Any, pattern: Optional[SearchPattern] = None) -> Any:
        """
        Create a control under this object.

        Controls are not cached; every call builds a fresh instance.

        Args:
            control_type: Concrete or abstract control type
            pattern: Search pattern; defaults to the control's own search_pattern

        Raises:
            ControlNotFoundError: No concrete control implements the type
        """
        descriptor = self.root.control_resolver.resolve_one(control_type)
        if descriptor is None:
            raise ControlNotFoundError(control_type, root=type(self.root))
        control = descriptor.instantiate()
        control._attach(self, pattern, descriptor=descriptor)
        return control

    async def find_all(
        self,
        control_type: Any,
        pattern: Optional[SearchPattern] = None,
    ) -> AsyncIterator[Any]:
        """
        Yield one control per matching element, by index.

        Stops at the first index whose locator matches nothing.
        """
        index = 0
        while True:
            control = self.find(control_type, pattern)
            control.index = index
            if await control.locator.count() == 0:
                return
            yield control
            index += 1

    # =========================================================================
    # Element State
    # =========================================================================

    async def exists(self) -> bool:
        return await self.locator.count() > 0

    async def is_visible(self) -> bool:
        return await self.locator.is_visible()

    async def is_enabled(self) -> bool:
        return await self.locator.is_enabled()

    async def get_attribute(self, name: str) -> Optional[str]:
        """
        Read an attribute of this node's element.

        Args:
            name: Attribute name

        Returns:
            Attribute value, or None if the attribute is absent
        """
        return await self.locator.get_attribute(name)

    async def text(self) -> str:
        return await self.locator.inner_text()

    # =========================================================================
    # Queries
    # =========================================================================

    def get_by_test_id(self, test_id: str) -> Locator:
        """Locator of a descendant carrying the given test id attribute."""
        return self.locator.get_by_test_id(test_id)

    def get_by_role(self, role: str, **kwargs: Any) -> Locator:
        """
        Locator of a descendant by ARIA role.

        Args:
            role: ARIA role, e.g. "button" or "checkbox"
            **kwargs: Playwright role options (name, exact, checked, ...)
        """
        return self.locator.get_by_role(role, **kwargs)

    # =========================================================================
    # Wait Utilities
    # =========================================================================

    async def wait_for_visible(self, timeout: Optional[int] = None) -> None:
        """
        Wait until the element is visible.

        Args:
            timeout: Timeout in milliseconds; Playwright's default when None
        """
        await self.locator.wait_for(state="visible", timeout=timeout)

    async def wait_for_hidden(self, timeout: Optional[int] = None) -> None:
        await self.locator.wait_for(state="hidden", timeout=timeout)

    async def wait_for_attached(self, timeout: Optional[int] = None) -> None:
        await self.locator.wait_for(state="attached", timeout=timeout)

    async def wait_for_detached(self, timeout: Optional[int] = None) -> None:
        await self.locator.wait_for(state="detached", timeout=timeout)

    # =========================================================================
    # Screenshot
    # =========================================================================

    async def screenshot(self, name: str, attach_to_allure: bool = True) -> Path:
        """
        Capture this node's element and optionally attach it to Allure.

        Args:
            name: Screenshot name (without extension)
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.locator.screenshot(path=str(filepath))

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    def __repr__(self) -> str:
        return f"<{self.descriptor} index={self._index}>"


__all__ = [
    "UIObject",
    "SearchPattern",
]
