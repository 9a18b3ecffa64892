"""
================================================================================
Unit Test Configuration
================================================================================

In-memory stand-ins for Playwright's Page and Locator so the object model can
be exercised without a browser.

A FakeLocator records its selector chain ("html >> #panel >> nth=0"). Tests
describe the document by filling the FakePage tables keyed by chain:
    - counts: matches of a chain (without the trailing nth)
    - visible / checked: chains considered visible / checked
    - attributes, texts, values: element state
    - evaluations: results of locator.evaluate keyed by (chain, expression)

Frames are entered with a "frame" step: "html >> iframe >> nth=0 >> frame >> :root".

================================================================================
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional, Set, Tuple

import pytest

from pageweave.config import ConfigLoader


class FakeLocator:
    """Records the selector chain and answers from the owning FakePage."""

    def __init__(self, page: "FakePage", chain: Tuple[str, ...]):
        self.page = page
        self.chain = chain

    @property
    def selector(self) -> str:
        return " >> ".join(self.chain)

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, self.chain + (selector,))

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.chain + (f"nth={index}",))

    async def count(self) -> int:
        last = self.chain[-1]
        if last.startswith("nth="):
            index = int(last[len("nth="):])
            base = " >> ".join(self.chain[:-1])
            return 1 if index < self.page.counts.get(base, 0) else 0
        return self.page.counts.get(self.selector, 0)

    async def is_visible(self) -> bool:
        return self.selector in self.page.visible

    async def is_enabled(self) -> bool:
        return True

    async def is_checked(self) -> bool:
        return self.selector in self.page.checked

    async def check(self, timeout: Optional[float] = None) -> None:
        self.page.record("check", self.selector)
        self.page.checked.add(self.selector)

    async def uncheck(self, timeout: Optional[float] = None) -> None:
        self.page.record("uncheck", self.selector)
        self.page.checked.discard(self.selector)

    async def click(self, **kwargs: Any) -> None:
        self.page.record("click", self.selector)
        handler = self.page.on_click.get(self.selector)
        if handler:
            handler()

    async def focus(self) -> None:
        self.page.record("focus", self.selector)

    async def fill(self, value: str) -> None:
        self.page.record("fill", self.selector, value)
        self.page.values[self.selector] = value

    async def clear(self) -> None:
        self.page.values[self.selector] = ""

    async def input_value(self) -> str:
        return self.page.values.get(self.selector, "")

    async def inner_text(self) -> str:
        return self.page.texts.get(self.selector, "")

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.page.attributes.get((self.selector, name))

    async def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.page.record("wait_for", self.selector, state)

    async def text_content(self) -> Optional[str]:
        return self.page.texts.get(self.selector)

    async def evaluate(self, expression: str, arg: Any = None) -> Any:
        return self.page.evaluations.get((self.selector, expression))

    async def select_option(self, value: str) -> None:
        self.page.record("select_option", self.selector, value)
        self.page.values[self.selector] = value

    def get_by_test_id(self, test_id: str) -> "FakeLocator":
        return FakeLocator(self.page, self.chain + (f"testid={test_id}",))

    def get_by_role(self, role: str, **kwargs: Any) -> "FakeLocator":
        options = "".join(f"[{k}={v}]" for k, v in sorted(kwargs.items()))
        return FakeLocator(self.page, self.chain + (f"role={role}{options}",))

    def frame_locator(self, selector: str) -> "FakeFrameLocator":
        return FakeFrameLocator(self.page, self.chain + (selector,))


class FakeFrameLocator:
    """Frame locator; entering the frame is recorded as "frame" in the chain."""

    def __init__(self, page: "FakePage", chain: Tuple[str, ...]):
        self.page = page
        self.chain = chain

    def nth(self, index: int) -> "FakeFrameLocator":
        return FakeFrameLocator(self.page, self.chain + (f"nth={index}",))

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.page, self.chain + ("frame", selector))


class FakePage:
    """Minimal async Page used by TabObject and UIObject."""

    def __init__(self) -> None:
        self.counts: Dict[str, int] = {}
        self.visible: Set[str] = set()
        self.checked: Set[str] = set()
        self.attributes: Dict[Tuple[str, str], str] = {}
        self.texts: Dict[str, str] = {}
        self.values: Dict[str, str] = {}
        self.evaluations: Dict[Tuple[str, str], Any] = {}
        self.on_click: Dict[str, Any] = {}
        self.actions: List[Tuple[Any, ...]] = []
        self.url: Optional[str] = None
        self.default_timeout: Optional[float] = None
        self.closed = False

    def record(self, *action: Any) -> None:
        self.actions.append(action)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, (selector,))

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.record("goto", url)
        self.url = url

    async def close(self) -> None:
        self.record("close")
        self.closed = True


class GatedFactory:
    """Page factory that blocks until ``release`` is called."""

    def __init__(self, page: FakePage):
        self.page = page
        self.calls = 0
        self._gate: Optional[asyncio.Event] = None

    @property
    def gate(self) -> asyncio.Event:
        if self._gate is None:
            self._gate = asyncio.Event()
        return self._gate

    def release(self) -> None:
        self.gate.set()

    async def __call__(self) -> FakePage:
        self.calls += 1
        await self.gate.wait()
        return self.page


class CountingFactory:
    """Page factory that counts its invocations."""

    def __init__(self, page: FakePage, fail_times: int = 0):
        self.page = page
        self.calls = 0
        self.fail_times = fail_times

    async def __call__(self) -> FakePage:
        self.calls += 1
        if self.calls <= self.fail_times:
            raise RuntimeError("browser unavailable")
        return self.page


@pytest.fixture(autouse=True)
def _reset_config():
    """Every test starts from the repository configuration."""
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def page_factory(fake_page: FakePage) -> CountingFactory:
    return CountingFactory(fake_page)


@pytest.fixture
def failing_factory(fake_page: FakePage) -> CountingFactory:
    """Fails on its first call, succeeds afterwards."""
    return CountingFactory(fake_page, fail_times=1)


@pytest.fixture
def gated_factory(fake_page: FakePage) -> GatedFactory:
    """Holds page creation until the test releases it."""
    return GatedFactory(fake_page)
