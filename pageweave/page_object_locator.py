"""
================================================================================
Page Object Locator
================================================================================

Resolution engine: turns "an object of type T reachable from this root" into
a concrete, cached, correctly parented instance.

Algorithm:
    1. Rank the concrete candidates for T (InterfaceResolver)
    2. Enumerate every acyclic path from the root's type to each candidate over
       static and dynamic edges, shortest first
    3. Materialize each path through the root's InstanceCache and evaluate the
       condition (explicit predicate, else the object's ``on_condition``)
    4. Return the first object whose condition holds

Synchronous resolution never suspends. Awaitable conditions are only accepted
by ``find_async``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional, Tuple

from loguru import logger

from .cache import Signature
from .descriptors import TypeDescriptor
from .exceptions import ConditionError, PageObjectNotFoundError

if TYPE_CHECKING:
    from .tab_object import TabObject
    from .ui_object import UIObject


Condition = Callable[[Any], Any]


class PageObjectLocator:
    """
    Finds page objects reachable from one root.

    Args:
        root: The owning TabObject; its graph, resolver and cache are used
    """

    def __init__(self, root: "TabObject"):
        self._root = root

    @property
    def root_descriptor(self) -> TypeDescriptor:
        return self._root.descriptor

    def find(self, requested: Any, condition: Optional[Condition] = None) -> "UIObject":
        """
        Resolve ``requested`` synchronously.

        Raises:
            PageObjectNotFoundError: No reachable candidate satisfies the condition
            ConditionError: The condition returned an awaitable
            ScopeClosedError: The root was closed
        """
        self._root._ensure_not_closed()
        for signature, node in self._candidates(requested):
            outcome = self._evaluate(node, condition)
            if inspect.isawaitable(outcome):
                if inspect.iscoroutine(outcome):
                    outcome.close()
                raise ConditionError(
                    f"Condition for {TypeDescriptor.of(requested)} is asynchronous; "
                    f"use on_async() or goto() instead of on()"
                )
            if outcome:
                return self._accept(signature, node)
        raise self._not_found(requested)

    async def find_async(self, requested: Any, condition: Optional[Condition] = None) -> "UIObject":
        """Resolve ``requested``, awaiting awaitable conditions."""
        self._root._ensure_not_closed()
        for signature, node in self._candidates(requested):
            outcome = self._evaluate(node, condition)
            if inspect.isawaitable(outcome):
                outcome = await outcome
            if outcome:
                return self._accept(signature, node)
        raise self._not_found(requested)

    def paths_to(self, target: Any) -> List[Signature]:
        """
        Every acyclic path from the root's type to ``target``, shortest first.

        A path's first element is always the root's own descriptor. Parents
        declared as open generics are never traversed.
        """
        target_descriptor = TypeDescriptor.of(target)
        root_descriptor = self.root_descriptor
        graph = self._root.relationships
        resolver = self._root.resolver
        found: List[Signature] = []

        if root_descriptor.is_assignable_to(target_descriptor):
            found.append((root_descriptor,))

        def walk(node: TypeDescriptor, suffix: Signature) -> None:
            for parent in graph.parents_of(node):
                if parent.is_open:
                    logger.debug(f"Skipping open generic parent {parent} of {node}")
                    continue
                if root_descriptor.is_assignable_to(parent):
                    path = (root_descriptor,) + suffix
                    if path not in found:
                        found.append(path)
                for expanded in resolver.resolve(parent):
                    if expanded == root_descriptor or expanded in suffix:
                        continue
                    walk(expanded, (expanded,) + suffix)

        if target_descriptor != root_descriptor:
            walk(target_descriptor, (target_descriptor,))

        found.sort(key=len)
        return found

    def _candidates(self, requested: Any) -> Iterator[Tuple[Signature, "UIObject"]]:
        candidates = self._root.resolver.resolve(requested)
        for candidate in candidates:
            for path in self.paths_to(candidate):
                yield path, self._materialize(path)

    def _materialize(self, path: Signature) -> "UIObject":
        node: "UIObject" = self._root
        cache = self._root.cache
        for position in range(1, len(path)):
            parent = node
            descriptor = path[position]
            node = cache.get_or_create(
                path[:position + 1],
                lambda d=descriptor, p=parent: self._create(d, p),
            )
        return node

    @staticmethod
    def _create(descriptor: TypeDescriptor, parent: "UIObject") -> "UIObject":
        node = descriptor.instantiate()
        node._attach(parent, descriptor=descriptor)
        logger.debug(f"Materialized {descriptor} under {parent.descriptor}")
        return node

    @staticmethod
    def _evaluate(node: "UIObject", condition: Optional[Condition]) -> Any:
        if condition is not None:
            return condition(node)
        return node.on_condition

    def _accept(self, signature: Signature, node: "UIObject") -> "UIObject":
        self._root.cache.mark_resolved(signature)
        logger.debug(f"Resolved {' > '.join(str(step) for step in signature)}")
        return node

    def _not_found(self, requested: Any) -> PageObjectNotFoundError:
        return PageObjectNotFoundError(
            requested,
            root=type(self._root),
            reason="no reachable path satisfies the condition",
        )


__all__ = [
    "PageObjectLocator",
    "Condition",
]
