"""
================================================================================
Tab Object
================================================================================

Root of a page object tree: one browser page, one dynamic relationship
overlay and one instance cache.

Lifecycle:
    UNOPENED -> OPENING -> OPEN -> CLOSED

    Resolution with ``on`` works before the root is opened because locators
    are lazy; touching the page before ``open`` raises ScopeNotReadyError and
    anything after ``close`` raises ScopeClosedError.

Usage:
    class DemoTab(TabObject):
        url = "https://example.com"

        def __init__(self, page_factory=None):
            super().__init__(page_factory)
            self.register_child(ShellPage, DemoTab)

    tab = DemoTab()
    await tab.open()
    shell = await tab.goto(ShellPage)
    await tab.close()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import asyncio
from abc import ABC
from enum import Enum
from typing import Any, Awaitable, Callable, Optional

import allure
from loguru import logger
from playwright.async_api import Locator, Page

from .browser import BrowserManager
from .cache import InstanceCache
from .config import ConfigLoader
from .control_object import ControlObject
from .exceptions import ScopeClosedError, ScopeNotReadyError, TabObjectNotFoundError
from .page_object import PageObject
from .page_object_locator import PageObjectLocator
from .relationships import RelationshipGraph
from .resolver import InterfaceResolver


PageFactory = Callable[[], Awaitable[Page]]


class RootState(Enum):
    """Lifecycle states of a TabObject."""

    UNOPENED = "unopened"
    OPENING = "opening"
    OPEN = "open"
    CLOSED = "closed"


class TabObject(PageObject, ABC):
    """
    Base class for root page objects.

    Attributes:
        url: Address opened by ``open``; no navigation when None
    """

    # Override in subclasses
    url: Optional[str] = None

    def __init__(self, page_factory: Optional[PageFactory] = None):
        """
        Initialize root.

        Args:
            page_factory: Async callable returning the Playwright page; the
                default starts a browser through BrowserManager
        """
        super().__init__()
        self._page_factory = page_factory
        self._page: Optional[Page] = None
        self._page_task: Optional[asyncio.Future] = None
        self._browser_manager: Optional[BrowserManager] = None
        self._state = RootState.UNOPENED

        self._relationships = RelationshipGraph()
        self._resolver = InterfaceResolver(restrict_to=PageObject)
        self._control_resolver = InterfaceResolver(restrict_to=ControlObject)
        self._cache = InstanceCache()
        self._page_object_locator = PageObjectLocator(self)

    # =========================================================================
    # Collaborators
    # =========================================================================

    @property
    def relationships(self) -> RelationshipGraph:
        return self._relationships

    @property
    def resolver(self) -> InterfaceResolver:
        return self._resolver

    @property
    def control_resolver(self) -> InterfaceResolver:
        return self._control_resolver

    @property
    def cache(self) -> InstanceCache:
        return self._cache

    @property
    def page_object_locator(self) -> PageObjectLocator:
        return self._page_object_locator

    @property
    def state(self) -> RootState:
        return self._state

    # =========================================================================
    # Page Handling
    # =========================================================================

    @property
    def page(self) -> Page:
        """
        Playwright page of this root.

        Raises:
            ScopeNotReadyError: The root has not been opened
            ScopeClosedError: The root was closed
        """
        self._ensure_not_closed()
        if self._page is None:
            raise ScopeNotReadyError(
                f"{type(self).__qualname__} has not been opened; await open() first"
            )
        return self._page

    @property
    def locator(self) -> Locator:
        return self.page.locator("html")

    def set_page(self, page: Page) -> None:
        """Inject an existing page, bypassing the page factory."""
        self._ensure_not_closed()
        self._page = page
        self._state = RootState.OPEN

    def with_page(self, page: Page) -> "TabObject":
        self.set_page(page)
        return self

    async def create_page(self) -> Page:
        """
        Default page factory: start a configured browser and open a page.

        The started browser is stopped again by ``close``.
        """
        manager = BrowserManager.from_config()
        await manager.start()
        self._browser_manager = manager
        return await manager.new_page()

    async def open(self) -> "TabObject":
        """
        Acquire the page (once) and navigate to ``url``.

        Concurrent callers share the same in-flight page creation.
        """
        self._ensure_not_closed()
        if self._state is RootState.OPEN:
            return self

        if self._page_task is None:
            self._state = RootState.OPENING
            self._page_task = asyncio.ensure_future(self._acquire_page())
        await self._page_task
        return self

    async def _acquire_page(self) -> Page:
        factory = self._page_factory or self.create_page
        with allure.step(f"Open {type(self).__qualname__}"):
            try:
                page = await factory()
                if self._state is RootState.CLOSED:
                    await self._discard(page)
                timeout = ConfigLoader().get("ui.default_timeout", 0)
                if timeout:
                    page.set_default_timeout(timeout)
                if self.url:
                    await page.goto(self.url)
                if self._state is RootState.CLOSED:
                    await self._discard(page)
            except BaseException:
                if self._state is not RootState.CLOSED:
                    self._page_task = None
                    self._state = RootState.UNOPENED
                raise

        self._page = page
        self._state = RootState.OPEN
        logger.info(f"Opened {type(self).__qualname__}" + (f" at {self.url}" if self.url else ""))
        return page

    async def _discard(self, page: Page) -> None:
        """Close a page that arrived after the root was closed."""
        await page.close()
        if self._browser_manager is not None:
            await self._browser_manager.close()
            self._browser_manager = None
        raise ScopeClosedError(f"{type(self).__qualname__} was closed while opening")

    async def _open_if_unopened(self) -> None:
        self._ensure_not_closed()
        if self._state is not RootState.OPEN:
            await self.open()

    async def navigate(self) -> None:
        """Navigation hook of a root: open it when necessary."""
        await self._open_if_unopened()

    async def close(self) -> None:
        """Close the page (and a browser started by the default factory)."""
        if self._state is RootState.CLOSED:
            return

        with allure.step(f"Close {type(self).__qualname__}"):
            if self._page is not None:
                await self._page.close()
            if self._browser_manager is not None:
                await self._browser_manager.close()
                self._browser_manager = None

        self._page = None
        self._page_task = None
        self._state = RootState.CLOSED
        self._cache.clear()
        logger.info(f"Closed {type(self).__qualname__}")

    def _ensure_not_closed(self) -> None:
        if self._state is RootState.CLOSED:
            raise ScopeClosedError(f"{type(self).__qualname__} has been closed")

    # =========================================================================
    # Relationships and Casting
    # =========================================================================

    def register_child(self, child: Any, parent: Any) -> bool:
        """
        Register a child relation on this root only.

        Args:
            child: Concrete page object type
            parent: Concrete page object type

        Returns:
            True if newly registered, False if the relation was already known

        Raises:
            InvalidRegistrationError: If either type is abstract or an interface
        """
        return self._relationships.add(child, parent)

    def cast(self, root_type: Any) -> "TabObject":
        """
        View the same browser page through another root type.

        The new root has its own relationship overlay and cache. When this
        root has not been opened yet, opening either one opens both.

        Raises:
            TabObjectNotFoundError: No concrete root implements root_type
        """
        self._ensure_not_closed()
        result = TabObject.resolve(root_type)
        if self._page is not None:
            result.set_page(self._page)
        else:
            result._page_factory = self._shared_page
        logger.info(f"Cast {type(self).__qualname__} to {type(result).__qualname__}")
        return result

    async def _shared_page(self) -> Page:
        await self.open()
        return self.page

    @classmethod
    def resolve(cls, root_type: Any = None) -> "TabObject":
        """
        Construct the concrete root type implementing ``root_type``.

        Args:
            root_type: Concrete or abstract root type (defaults to cls)

        Raises:
            TabObjectNotFoundError: No concrete root implements root_type
        """
        requested = root_type if root_type is not None else cls
        descriptor = InterfaceResolver(restrict_to=TabObject).resolve_one(requested)
        if descriptor is None:
            raise TabObjectNotFoundError(requested)
        return descriptor.instantiate()


__all__ = [
    "TabObject",
    "RootState",
    "PageFactory",
]
