"""
================================================================================
Type Descriptors
================================================================================

Structural identity for page object types.

Python erases generic arguments at runtime (``C[int]()`` is just a ``C``), so
the framework keys its graph and cache on an explicit descriptor made of the
base class and the ordered tuple of generic arguments:

    >>> TypeDescriptor.of(C[int]) == TypeDescriptor.of(C[int])
    True
    >>> TypeDescriptor.of(C[int]) == TypeDescriptor.of(C[object])
    False

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Dict, Generic, Mapping, Optional, Tuple, TypeVar, Union, get_args, get_origin


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Base class plus closed (or open) generic arguments.

    Attributes:
        base: The runtime class
        args: Generic arguments in declaration order; empty for plain classes
            and for bare generic classes used without subscription
    """

    base: type
    args: Tuple[Any, ...] = ()

    @classmethod
    def of(cls, tp: Union[type, "TypeDescriptor", Any]) -> "TypeDescriptor":
        """
        Build a descriptor from a class, a subscripted generic or a descriptor.

        Raises:
            TypeError: When ``tp`` is neither a class nor a generic alias of one
        """
        if isinstance(tp, TypeDescriptor):
            return tp

        origin = get_origin(tp)
        if origin is None:
            if not isinstance(tp, type):
                raise TypeError(f"Not a type: {tp!r}")
            return cls(tp, ())

        if not isinstance(origin, type):
            raise TypeError(f"Not a class-based generic: {tp!r}")
        return cls(origin, tuple(get_args(tp)))

    @property
    def is_open(self) -> bool:
        """True if any argument still contains a type variable."""
        return any(_contains_typevar(arg) for arg in self.args)

    @property
    def runtime_type(self) -> Any:
        """The class (or subscripted alias) to call for construction."""
        if not self.args:
            return self.base
        return self.base[self.args]

    def instantiate(self) -> Any:
        """Construct the type through its default constructor."""
        return self.runtime_type()

    def substitute(self, mapping: Mapping[TypeVar, Any]) -> "TypeDescriptor":
        """Replace type variables in the arguments."""
        return TypeDescriptor(self.base, tuple(_substitute(arg, mapping) for arg in self.args))

    def is_assignable_to(self, other: "TypeDescriptor") -> bool:
        """
        Check whether an instance described by self satisfies ``other``.

        A bare ``other`` (no arguments) accepts any parameterization of its
        subclasses. A parameterized ``other`` requires the inherited
        parameterization to match exactly (generic arguments are invariant).
        """
        if not issubclass(self.base, other.base):
            return False
        if not other.args:
            return True
        ancestors = parameterized_ancestors(self.base, self.args)
        return ancestors.get(other.base) == other.args

    def __str__(self) -> str:
        if not self.args:
            return self.base.__qualname__
        rendered = ", ".join(_arg_name(arg) for arg in self.args)
        return f"{self.base.__qualname__}[{rendered}]"


def parameterized_ancestors(base: type, args: Tuple[Any, ...] = ()) -> Dict[type, Tuple[Any, ...]]:
    """
    Map every ancestor of ``base`` to its arguments, expressed in terms of ``args``.

    For ``class G(ControlObject, IG[I])`` and ``args=(F,)`` the result contains
    ``{G: (F,), IG: (F,), ControlObject: (), ...}``. When ``args`` is empty the
    class's own type variables are used, which keeps the mapping symbolic.
    """
    params = tuple(getattr(base, "__parameters__", ()))
    if not args:
        args = params
    mapping = dict(zip(params, args))

    result: Dict[type, Tuple[Any, ...]] = {base: tuple(args)}
    for declared in base.__dict__.get("__orig_bases__", base.__bases__):
        origin = get_origin(declared)
        if origin is Generic or declared is Generic or declared is object:
            continue
        if origin is None:
            parent, parent_args = declared, ()
        else:
            parent = origin
            parent_args = tuple(_substitute(arg, mapping) for arg in get_args(declared))
        if not isinstance(parent, type):
            continue
        for ancestor, ancestor_args in parameterized_ancestors(parent, parent_args).items():
            result.setdefault(ancestor, ancestor_args)
    return result


def inheritance_distance(child: type, ancestor: type) -> Optional[int]:
    """Fewest ``__bases__`` hops from ``child`` to ``ancestor`` (None if unrelated)."""
    if child is ancestor:
        return 0
    seen = {child}
    queue = deque([(child, 0)])
    while queue:
        current, depth = queue.popleft()
        for parent in current.__bases__:
            if parent is ancestor:
                return depth + 1
            if parent not in seen:
                seen.add(parent)
                queue.append((parent, depth + 1))
    return None


def _substitute(arg: Any, mapping: Mapping[TypeVar, Any]) -> Any:
    if isinstance(arg, TypeVar):
        return mapping.get(arg, arg)
    origin = get_origin(arg)
    inner = get_args(arg)
    if origin is not None and inner and isinstance(origin, type) and hasattr(origin, "__class_getitem__"):
        substituted = tuple(_substitute(a, mapping) for a in inner)
        if substituted != inner:
            return origin[substituted]
    return arg


def _contains_typevar(arg: Any) -> bool:
    if isinstance(arg, TypeVar):
        return True
    return any(_contains_typevar(inner) for inner in get_args(arg))


def _arg_name(arg: Any) -> str:
    if isinstance(arg, type):
        return arg.__qualname__
    if isinstance(arg, TypeVar):
        return f"~{arg.__name__}"
    return repr(arg)


__all__ = [
    "TypeDescriptor",
    "parameterized_ancestors",
    "inheritance_distance",
]
