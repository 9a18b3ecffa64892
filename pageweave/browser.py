"""
================================================================================
Browser Manager
================================================================================

Browser lifecycle management backing the default page factory of TabObject.

Features:
    - One browser instance per manager
    - Isolated contexts per page
    - Browser settings from configuration (browser.* keys)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from .config import ConfigLoader


class BrowserManager:
    """
    Manages a browser instance and its contexts.

    Usage:
        async with BrowserManager() as manager:
            tab = DemoTab(page_factory=manager.page_factory())
            await tab.open()
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "headless": True,
        "args": [
            "--ignore-certificate-errors",
        ],
    }

    # Default context options
    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        headless: bool = True,
        browser_type: str = "chromium",
        slow_mo: float = 0,
        viewport: Optional[Dict[str, int]] = None,
    ):
        """
        Initialize browser manager.

        Args:
            headless: Run browser in headless mode
            browser_type: Browser to use - 'chromium', 'firefox', 'webkit'
            slow_mo: Delay between Playwright operations in milliseconds
            viewport: Context viewport, e.g. {"width": 1280, "height": 720}
        """
        self.headless = headless
        self.browser_type = browser_type
        self.slow_mo = slow_mo
        self.viewport = viewport

        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._contexts: List[BrowserContext] = []

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "BrowserManager":
        """Build a manager from the ``browser`` configuration section."""
        config = config or ConfigLoader()
        return cls(
            headless=config.get("browser.headless", True),
            browser_type=config.get("browser.type", "chromium"),
            slow_mo=config.get("browser.slow_mo", 0),
            viewport=config.get("browser.viewport", None),
        )

    async def __aenter__(self) -> "BrowserManager":
        """Async context manager entry - start browser."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit - close browser."""
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch browser."""
        self._playwright = await async_playwright().start()

        # Select browser type
        if self.browser_type == "firefox":
            browser_launcher = self._playwright.firefox
        elif self.browser_type == "webkit":
            browser_launcher = self._playwright.webkit
        else:
            browser_launcher = self._playwright.chromium

        launch_options = {
            **self.DEFAULT_LAUNCH_OPTIONS,
            "headless": self.headless,
            "slow_mo": self.slow_mo,
        }

        self._browser = await browser_launcher.launch(**launch_options)
        logger.debug(
            f"Browser started: {self.browser_type} "
            f"(headless={self.headless})"
        )

    async def close(self) -> None:
        """Close all contexts and browser."""
        for context in self._contexts:
            await context.close()
        self._contexts.clear()

        if self._browser:
            await self._browser.close()
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.debug("Browser closed")

    async def new_context(self, **options: Any) -> BrowserContext:
        """
        Create new browser context.

        Each context is isolated - separate cookies, localStorage, etc.

        Args:
            **options: Additional context options

        Returns:
            New BrowserContext
        """
        if not self._browser:
            raise RuntimeError("Browser not started. Call start() first.")

        context_options = dict(self.DEFAULT_CONTEXT_OPTIONS)
        if self.viewport:
            context_options["viewport"] = self.viewport
        context_options.update(options)

        context = await self._browser.new_context(**context_options)
        self._contexts.append(context)
        return context

    async def new_page(
        self,
        context: Optional[BrowserContext] = None,
        **context_options: Any,
    ) -> Page:
        """
        Create new page in new or existing context.

        Args:
            context: Existing context to use (creates new if None)
            **context_options: Options for new context
        """
        if context is None:
            context = await self.new_context(**context_options)
        return await context.new_page()

    def page_factory(self, **context_options: Any) -> Callable[[], Awaitable[Page]]:
        """
        Page factory for a TabObject; every call opens a page in a new context.

        The manager must be started before the factory is awaited.
        """
        async def factory() -> Page:
            return await self.new_page(**context_options)

        return factory

    @property
    def browser(self) -> Optional[Browser]:
        """Get browser instance."""
        return self._browser


__all__ = [
    "BrowserManager",
]
