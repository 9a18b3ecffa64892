"""
================================================================================
Relationship Graph
================================================================================

Directed "is reachable as a child of" edges between page object types.

Two sources feed the graph:
    - Static edges, declared with the ``child_of=`` class keyword and recorded
      in the process-wide TypeCatalog
    - Dynamic edges, registered at runtime on one root's overlay through
      ``TabObject.register_child``

Usage:
    class SettingsPage(PageObject, child_of=ShellPage):
        ...

    tab.register_child(PreferencesPage, ShellPage)   # True
    tab.register_child(PreferencesPage, ShellPage)   # False, already known

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Set

from loguru import logger

from .catalog import TypeCatalog, default_catalog
from .descriptors import TypeDescriptor
from .exceptions import InvalidRegistrationError


class Origin(Enum):
    """Where an edge came from."""

    STATIC = "static"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class Relationship:
    """
    One child -> parent edge.

    Equality ignores the origin, so the same pair declared statically and
    registered dynamically counts as one edge.
    """

    child: TypeDescriptor
    parent: TypeDescriptor
    origin: Origin = field(default=Origin.STATIC, compare=False)

    def matches_child(self, descriptor: TypeDescriptor) -> bool:
        """A bare generic child stands for every instantiation of its class."""
        if self.child == descriptor:
            return True
        return not self.child.args and self.child.base is descriptor.base

    def __str__(self) -> str:
        return f"{self.child} -> {self.parent} ({self.origin.value})"


class StaticRelationships:
    """
    Read-only view of the edges declared on concrete catalog classes.

    The edge list is rebuilt whenever the catalog grows (a module defining
    new page objects was imported), never otherwise.
    """

    def __init__(self, catalog: Optional[TypeCatalog] = None):
        self._catalog = catalog or default_catalog
        self._edges: List[Relationship] = []
        self._built_version = -1
        self._lock = threading.Lock()

    @property
    def catalog(self) -> TypeCatalog:
        return self._catalog

    def edges(self) -> List[Relationship]:
        with self._lock:
            if self._built_version != self._catalog.version:
                self._edges = self._build()
                self._built_version = self._catalog.version
            return list(self._edges)

    def _build(self) -> List[Relationship]:
        edges: List[Relationship] = []
        for cls in self._catalog.types():
            parents = self._catalog.declared_parents(cls)
            if not parents:
                continue
            if not self._catalog.is_concrete(cls):
                continue
            child = TypeDescriptor.of(cls)
            for parent in parents:
                edge = Relationship(child, parent, Origin.STATIC)
                if edge not in edges:
                    edges.append(edge)
        return edges


default_relationships = StaticRelationships()


class RelationshipGraph:
    """
    Static edges plus one root's dynamic overlay.

    Lookups return static parents before dynamic ones, each group in
    declaration order.
    """

    def __init__(self, static: Optional[StaticRelationships] = None):
        self._static = static or default_relationships
        self._dynamic: List[Relationship] = []
        self._lock = threading.RLock()

    @property
    def catalog(self) -> TypeCatalog:
        return self._static.catalog

    def add(self, child: Any, parent: Any) -> bool:
        """
        Register a dynamic child -> parent edge.

        Args:
            child: Concrete page object type (class or closed generic)
            parent: Concrete page object type the child is reachable from

        Returns:
            True if the edge was added, False if it was already known

        Raises:
            InvalidRegistrationError: If either type is abstract or an interface
        """
        child_descriptor = TypeDescriptor.of(child)
        parent_descriptor = TypeDescriptor.of(parent)
        for descriptor in (child_descriptor, parent_descriptor):
            if not self.catalog.is_concrete(descriptor):
                raise InvalidRegistrationError(
                    f"{descriptor} must not be abstract nor an interface."
                )

        edge = Relationship(child_descriptor, parent_descriptor, Origin.DYNAMIC)
        with self._lock:
            if self.contains(child_descriptor, parent_descriptor):
                logger.debug(f"Child relation already known: {edge}")
                return False
            self._dynamic.append(edge)

        logger.debug(f"Registered child relation: {edge}")
        return True

    def contains(self, child: Any, parent: Any) -> bool:
        """Exact pair lookup over static and dynamic edges."""
        wanted = Relationship(TypeDescriptor.of(child), TypeDescriptor.of(parent))
        with self._lock:
            return wanted in self._static.edges() or wanted in self._dynamic

    def static_edges(self) -> List[Relationship]:
        return self._static.edges()

    def dynamic_edges(self) -> List[Relationship]:
        with self._lock:
            return list(self._dynamic)

    def edges(self) -> List[Relationship]:
        """All edges, static first."""
        result = self.static_edges()
        for edge in self.dynamic_edges():
            if edge not in result:
                result.append(edge)
        return result

    def parents_of(self, child: Any) -> List[TypeDescriptor]:
        """Declared parents of a concrete child descriptor, static first."""
        descriptor = TypeDescriptor.of(child)
        parents: List[TypeDescriptor] = []
        seen: Set[TypeDescriptor] = set()
        for edge in self.edges():
            if edge.matches_child(descriptor) and edge.parent not in seen:
                seen.add(edge.parent)
                parents.append(edge.parent)
        return parents


__all__ = [
    "Origin",
    "Relationship",
    "StaticRelationships",
    "RelationshipGraph",
    "default_relationships",
]
