"""
================================================================================
Interface Resolver
================================================================================

Maps a requested type to the concrete types that can stand in for it.

Rules:
    - A concrete request resolves to itself
    - An abstract request resolves to every concrete catalog class assignable
      to it, closest implementer first (fewest ``__bases__`` hops), then in
      class definition order
    - A generic interface request such as ``IGrid[IFilter]`` resolves to the
      generic implementer closed over the resolved arguments: ``Grid[Filter]``

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional, Tuple, TypeVar

from loguru import logger

from .catalog import TypeCatalog, default_catalog
from .descriptors import TypeDescriptor, inheritance_distance, parameterized_ancestors


VIRTUAL_SUBCLASS_DISTANCE = sys.maxsize


class InterfaceResolver:
    """
    Ranks concrete candidates for a requested type.

    Args:
        catalog: Catalog to draw candidates from (process-wide by default)
        restrict_to: Only consider candidates deriving from this class
    """

    def __init__(
        self,
        catalog: Optional[TypeCatalog] = None,
        restrict_to: Optional[type] = None,
    ):
        self._catalog = catalog or default_catalog
        self._restrict_to = restrict_to

    def resolve(self, requested: Any) -> List[TypeDescriptor]:
        """
        Rank the concrete descriptors satisfying ``requested``.

        Args:
            requested: Class, generic alias or descriptor

        Returns:
            Candidates, best first; empty when nothing implements the request
        """
        descriptor = TypeDescriptor.of(requested)
        if self._catalog.is_concrete(descriptor) and self._admits(descriptor.base):
            return [descriptor]

        ranked: List[Tuple[int, int, TypeDescriptor]] = []
        for order, cls in enumerate(self._catalog.concrete_types()):
            if not self._admits(cls):
                continue
            candidate = self._close_over(cls, descriptor)
            if candidate is None:
                continue
            distance = inheritance_distance(cls, descriptor.base)
            # Virtual subclasses (ABC.register) have no __bases__ path; rank them last
            if distance is None:
                distance = VIRTUAL_SUBCLASS_DISTANCE
            ranked.append((distance, order, candidate))

        ranked.sort(key=lambda item: (item[0], item[1]))
        candidates = [candidate for _, _, candidate in ranked]
        logger.debug(
            f"Resolved {descriptor} to "
            f"[{', '.join(str(c) for c in candidates)}]"
        )
        return candidates

    def resolve_one(self, requested: Any) -> Optional[TypeDescriptor]:
        """Best candidate for ``requested``, or None."""
        candidates = self.resolve(requested)
        return candidates[0] if candidates else None

    def _admits(self, cls: type) -> bool:
        return self._restrict_to is None or issubclass(cls, self._restrict_to)

    def _close_over(self, cls: type, requested: TypeDescriptor) -> Optional[TypeDescriptor]:
        """Descriptor of ``cls`` that satisfies ``requested``, or None."""
        if not issubclass(cls, requested.base):
            return None
        if not requested.args:
            return TypeDescriptor(cls, ())

        params = tuple(getattr(cls, "__parameters__", ()))
        inherited = parameterized_ancestors(cls, params).get(requested.base)
        if inherited is None or len(inherited) != len(requested.args):
            return None

        bindings: Dict[TypeVar, Any] = {}
        for pattern, actual in zip(inherited, requested.args):
            if isinstance(pattern, TypeVar):
                if pattern in bindings and bindings[pattern] != actual:
                    return None
                bindings[pattern] = actual
            elif pattern != actual:
                return None

        if not params:
            return TypeDescriptor(cls, ())
        if any(param not in bindings for param in params):
            return None
        return TypeDescriptor(cls, tuple(self._concrete_argument(bindings[p]) for p in params))

    def _concrete_argument(self, argument: Any) -> Any:
        """Abstract class arguments are replaced by their best implementer."""
        if not isinstance(argument, type) or self._catalog.is_concrete(argument):
            return argument
        replacement = InterfaceResolver(self._catalog).resolve_one(argument)
        if replacement is None:
            return argument
        return replacement.runtime_type


__all__ = [
    "InterfaceResolver",
]
