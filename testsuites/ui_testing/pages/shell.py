"""Application shell of the demo page."""

from pageweave import By, PageObject

from .roots import DemoRoot


class ShellPage(PageObject, child_of=DemoRoot):
    """Outer container holding the menu and the panels."""

    search_pattern = By.id("shell")
