"""
================================================================================
Controls
================================================================================

Reusable control objects for common HTML elements.

Author: Automation Team
License: MIT
================================================================================
"""

from .button import Button
from .checkbox import Checkbox
from .label import Label
from .link import Link
from .select import Option, Select
from .table import Body, Cell, Foot, Head, Row, Table
from .text_input import TextInput

__all__ = [
    "Button",
    "Checkbox",
    "Label",
    "Link",
    "Select",
    "Option",
    "TextInput",
    "Table",
    "Head",
    "Body",
    "Foot",
    "Row",
    "Cell",
]
