"""
================================================================================
Instance Cache
================================================================================

Path-keyed store of page object instances, owned by one root.

A path signature is the tuple of type descriptors from the root's type to the
object's type. Every node materialized along a path is stored so that parents
are shared; only the nodes handed out by a resolution are counted.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Optional, Tuple

from loguru import logger

from .descriptors import TypeDescriptor


Signature = Tuple[TypeDescriptor, ...]


class InstanceCache:
    """
    Thread-safe insert-if-absent cache of UI objects.

    Usage:
        >>> cache = InstanceCache()
        >>> node = cache.get_or_create(signature, factory)
        >>> cache.mark_resolved(signature)
        >>> cache.object_count
        1
    """

    def __init__(self) -> None:
        self._nodes: Dict[Signature, Any] = {}
        self._resolved: Dict[Signature, None] = {}
        self._lock = threading.RLock()

    def get(self, signature: Signature) -> Optional[Any]:
        with self._lock:
            return self._nodes.get(signature)

    def get_or_create(self, signature: Signature, factory: Callable[[], Any]) -> Any:
        """
        Return the node stored for ``signature``, creating it once if missing.

        Args:
            signature: Path from the root type to the node type
            factory: Builds the node; called at most once per signature
        """
        with self._lock:
            existing = self._nodes.get(signature)
            if existing is not None:
                logger.debug(f"Cache hit: {_render(signature)}")
                return existing

            node = factory()
            self._nodes[signature] = node
            logger.debug(f"Cache miss, stored: {_render(signature)}")
            return node

    def mark_resolved(self, signature: Signature) -> None:
        """Count a stored node as the result of a resolution."""
        with self._lock:
            self._resolved.setdefault(signature, None)

    @property
    def object_count(self) -> int:
        """Number of distinct resolved objects."""
        with self._lock:
            return len(self._resolved)

    @property
    def type_count(self) -> int:
        """Number of distinct descriptors among the resolved objects."""
        with self._lock:
            return len({signature[-1] for signature in self._resolved})

    @property
    def node_count(self) -> int:
        """Number of stored nodes, ancestry nodes included."""
        with self._lock:
            return len(self._nodes)

    def resolved_objects(self) -> List[Any]:
        with self._lock:
            return [self._nodes[s] for s in self._resolved if s in self._nodes]

    def unregister(self, tp: Any) -> int:
        """
        Drop every entry whose path passes through ``tp``.

        Descendants are dropped with the node so that no cached object keeps a
        parent that the cache no longer knows. Unknown types are a no-op.

        Returns:
            Number of removed nodes
        """
        target = TypeDescriptor.of(tp)
        with self._lock:
            doomed = [
                signature for signature in self._nodes
                if any(_matches(step, target) for step in signature)
            ]
            for signature in doomed:
                del self._nodes[signature]
                self._resolved.pop(signature, None)

        if doomed:
            logger.debug(f"Unregistered {target}: {len(doomed)} cached node(s) removed")
        return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._nodes.clear()
            self._resolved.clear()
        logger.debug("Instance cache cleared")


def _matches(step: TypeDescriptor, target: TypeDescriptor) -> bool:
    if target.args:
        return step == target
    return issubclass(step.base, target.base)


def _render(signature: Signature) -> str:
    return " > ".join(str(step) for step in signature)


__all__ = [
    "InstanceCache",
    "Signature",
]
