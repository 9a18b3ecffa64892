"""
================================================================================
Demo Tab
================================================================================

Concrete demo root. The panels are composed at runtime: only DemoTab
registers them below the shell.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from .panels import PreferencesPage, SettingsPage
from .roots import DemoRoot
from .shell import ShellPage


class DemoTab(DemoRoot):
    """Browser tab showing the demo application with its panels."""

    def __init__(self, page_factory=None):
        super().__init__(page_factory)
        self.register_child(SettingsPage, ShellPage)
        self.register_child(PreferencesPage, ShellPage)
