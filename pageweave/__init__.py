"""
================================================================================
pageweave
================================================================================

Playwright page object framework built around a relationship graph of page
object types and a resolution engine that finds, parents and caches page
objects reachable from a root tab.

Modules:
    - ui_object / page_object / control_object / tab_object: Object model
    - frame_object: Page and control objects inside iframes
    - relationships: Static and dynamic child relations
    - resolver: Abstract type to concrete implementer resolution
    - page_object_locator: Path enumeration and resolution
    - cache: Per-root instance cache
    - search: Search patterns (By)
    - controls: Reusable controls
    - tree: Graphviz rendering of the relationship tree
    - config / browser: Configuration, logging and browser session

Author: Automation Team
License: MIT
================================================================================
"""

from .browser import BrowserManager
from .cache import InstanceCache
from .catalog import TypeCatalog, default_catalog
from .config import ConfigLoader, ConfigurationError, init_logger
from .control_object import ControlObject
from .descriptors import TypeDescriptor
from .exceptions import (
    ConditionError,
    ControlNotFoundError,
    InvalidRegistrationError,
    PageObjectNotFoundError,
    PageweaveError,
    ScopeClosedError,
    ScopeNotReadyError,
    SelectorError,
    TabObjectNotFoundError,
    UIObjectNotFoundError,
)
from .frame_object import FrameControlObject, FramePageObject
from .page_object import PageObject
from .page_object_locator import PageObjectLocator
from .relationships import Origin, Relationship, RelationshipGraph
from .resolver import InterfaceResolver
from .search import By
from .tab_object import RootState, TabObject
from .tree import PageObjectTree, attach_tree
from .ui_object import UIObject

__version__ = "1.0.0"

__all__ = [
    # Object model
    "UIObject",
    "PageObject",
    "ControlObject",
    "FramePageObject",
    "FrameControlObject",
    "TabObject",
    "RootState",
    # Resolution
    "TypeDescriptor",
    "TypeCatalog",
    "default_catalog",
    "Relationship",
    "RelationshipGraph",
    "Origin",
    "InterfaceResolver",
    "PageObjectLocator",
    "InstanceCache",
    # Search and rendering
    "By",
    "PageObjectTree",
    "attach_tree",
    # Session and configuration
    "BrowserManager",
    "ConfigLoader",
    "ConfigurationError",
    "init_logger",
    # Errors
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
