"""
================================================================================
Type Catalog
================================================================================

Process-wide record of UI object classes.

Every subclass of UIObject is recorded here at class-definition time, together
with the parents it declares through the ``child_of=`` class keyword. Nothing
scans loaded modules: a class is known as soon as its module is imported.

Concreteness is decided at query time. ABCMeta computes the abstract method
set only after ``__init_subclass__`` has run, so a class cannot be classified
while it is being registered.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
import threading
from abc import ABC
from typing import Any, Dict, List, Tuple

from loguru import logger

from .descriptors import TypeDescriptor


class TypeCatalog:
    """
    Ordered catalog of UI object classes and their declared parents.

    Usage:
        >>> catalog = TypeCatalog()
        >>> catalog.register(LoginPage, (ShellTab,))
        >>> catalog.concrete_types()
        [<class 'LoginPage'>]
    """

    def __init__(self) -> None:
        self._types: List[type] = []
        self._declared: Dict[type, Tuple[Any, ...]] = {}
        self._lock = threading.RLock()
        self._version = 0

    def register(self, cls: type, parents: Tuple[Any, ...] = ()) -> None:
        """
        Record a class and the parents it declares itself.

        Args:
            cls: The newly defined class
            parents: Classes, closed generics or descriptors from ``child_of=``
        """
        with self._lock:
            if cls not in self._declared:
                self._types.append(cls)
            self._declared[cls] = tuple(parents)
            self._version += 1

        if parents:
            names = ", ".join(str(TypeDescriptor.of(p)) for p in parents)
            logger.debug(f"Registered {cls.__qualname__} as child of {names}")

    @property
    def version(self) -> int:
        """Incremented on every registration; used to invalidate derived views."""
        return self._version

    def types(self) -> List[type]:
        """All recorded classes in definition order."""
        with self._lock:
            return list(self._types)

    def concrete_types(self) -> List[type]:
        """Recorded classes that can be instantiated, in definition order."""
        return [cls for cls in self.types() if self.is_concrete(cls)]

    def order_of(self, cls: type) -> int:
        """Definition position of ``cls`` (classes outside the catalog sort last)."""
        with self._lock:
            try:
                return self._types.index(cls)
            except ValueError:
                return len(self._types)

    def declared_parents(self, cls: type) -> List[TypeDescriptor]:
        """
        Parents declared by ``cls`` or inherited from any of its bases.

        Own declarations come first, followed by those of the bases in MRO
        order. Duplicates are dropped.
        """
        result: List[TypeDescriptor] = []
        for klass in cls.__mro__:
            for parent in self._declared.get(klass, ()):
                descriptor = TypeDescriptor.of(parent)
                if descriptor not in result:
                    result.append(descriptor)
        return result

    @staticmethod
    def is_concrete(tp: Any) -> bool:
        """
        Check whether a class (or descriptor) can be constructed by the framework.

        A class is not concrete when it lists ``ABC`` directly among its bases,
        still has abstract methods, or requires constructor arguments.
        """
        descriptor = TypeDescriptor.of(tp)
        cls = descriptor.base
        if descriptor.is_open:
            return False
        if ABC in cls.__bases__ or inspect.isabstract(cls):
            return False
        return _default_constructible(cls)

    @staticmethod
    def is_interface(tp: Any) -> bool:
        """Abstract classes play the role of interfaces."""
        return not TypeCatalog.is_concrete(tp)


def _default_constructible(cls: type) -> bool:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        return True
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        if parameter.default is parameter.empty:
            return False
    return True


default_catalog = TypeCatalog()


__all__ = [
    "TypeCatalog",
    "default_catalog",
]
