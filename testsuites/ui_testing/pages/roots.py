"""
================================================================================
Demo Roots
================================================================================

Root types opened on the bundled html/demo.html.

DemoRoot is the abstract root the shell hangs below; DemoTab (demo_tab.py)
implements it. BareTab shows the same page without the demo tree and is
used to show casting.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC
from pathlib import Path

from pageweave import TabObject


DEMO_HTML = Path(__file__).resolve().parent.parent / "html" / "demo.html"


class DemoRoot(TabObject, ABC):
    """Any root showing the demo application."""

    url = DEMO_HTML.as_uri()


class BareTab(TabObject):
    """Same page without the demo page objects."""

    url = DEMO_HTML.as_uri()
