"""
================================================================================
Demo Page Objects
================================================================================

Page objects for the bundled demo page (html/demo.html).

Tree:
    DemoRoot (DemoTab)
    └── ShellPage
        ├── MenuPage                (static)
        ├── SettingsPage            (registered by DemoTab)
        └── PreferencesPage         (registered by DemoTab)

Author: Automation Team
License: MIT
================================================================================
"""

from .demo_tab import DemoTab
from .menu import MenuPage
from .panels import PanelPage, PreferencesPage, SettingsPage
from .roots import BareTab, DemoRoot
from .shell import ShellPage

__all__ = [
    "DemoRoot",
    "DemoTab",
    "BareTab",
    "ShellPage",
    "MenuPage",
    "PanelPage",
    "SettingsPage",
    "PreferencesPage",
]
