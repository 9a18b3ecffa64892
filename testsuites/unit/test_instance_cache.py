"""
================================================================================
Instance Cache Unit Tests
================================================================================

Counting, invalidation and concurrent materialization, including generic
page objects cached per closed instantiation.

================================================================================
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Generic, TypeVar

import allure
import pytest

from pageweave import (
    InstanceCache,
    InvalidRegistrationError,
    PageObject,
    PageObjectNotFoundError,
    TabObject,
    TypeDescriptor,
)


T = TypeVar("T")


class CacheTab(TabObject):
    pass


class CacheShell(PageObject, child_of=CacheTab):
    pass


class CacheGadget(PageObject, child_of=(CacheTab, CacheShell)):
    pass


class CacheBox(PageObject, Generic[T], child_of=CacheTab):
    pass


class CacheBag(PageObject, Generic[T]):
    pass


class CacheNested(PageObject, Generic[T], child_of=CacheBag[T]):
    pass


class GenericTab(CacheTab):
    def __init__(self, page_factory=None):
        super().__init__(page_factory)
        self.register_child(CacheBag[object], GenericTab)
        self.register_child(CacheBag[int], GenericTab)


@allure.feature("Instance Cache")
@allure.story("Counting")
class TestCounting:

    def test_same_type_on_two_paths(self):
        tab = CacheTab()
        direct = tab.on(CacheGadget, lambda g: g.parent is tab)
        nested = tab.on(CacheGadget, lambda g: type(g.parent) is CacheShell)

        assert direct is not nested
        assert tab.cache.object_count == 2
        assert tab.cache.type_count == 1

    def test_ancestry_nodes_are_not_counted(self):
        tab = CacheTab()
        tab.on(CacheGadget, lambda g: type(g.parent) is CacheShell)
        assert tab.cache.object_count == 1
        # shell, nested gadget and the rejected direct gadget stay cached as nodes
        assert tab.cache.node_count == 3

    def test_repeated_resolution_does_not_grow(self):
        tab = CacheTab()
        first = tab.on(CacheShell)
        second = tab.on(CacheShell)
        assert first is second
        assert tab.cache.object_count == 1

    def test_each_root_owns_its_cache(self):
        first, second = CacheTab(), CacheTab()
        assert first.on(CacheShell) is not second.on(CacheShell)
        assert first.cache is not second.cache


@allure.feature("Instance Cache")
@allure.story("Generics")
class TestGenericCaching:

    def test_closed_instantiations_are_cached_independently(self):
        tab = GenericTab()
        requested = [
            GenericTab,
            CacheShell,
            CacheBox[object],
            CacheBox[int],
            CacheBag[object],
            CacheBag[int],
        ]
        for tp in requested:
            tab.on(tp)
        assert tab.cache.type_count == 6

        for tp in requested:
            tab.on(tp)
        assert tab.cache.type_count == 6
        assert tab.cache.object_count == 6

    def test_open_generic_child_satisfied_by_any_instantiation(self):
        tab = CacheTab()
        as_int = tab.on(CacheBox[int])
        as_str = tab.on(CacheBox[str])

        assert as_int is not as_str
        assert as_int.type_args == (int,)
        assert as_str.type_args == (str,)
        assert as_int is tab.on(CacheBox[int])

    def test_registering_closed_pair_of_open_static_child(self):
        tab = CacheTab()
        assert tab.register_child(CacheBox[object], CacheTab) is True
        assert tab.register_child(CacheBox[object], CacheTab) is False

    def test_open_generic_cannot_be_registered(self):
        with pytest.raises(InvalidRegistrationError):
            CacheTab().register_child(CacheBox[T], CacheTab)

    def test_generic_parent_depending_on_child_parameter_is_unsupported(self):
        tab = GenericTab()
        assert isinstance(tab.on(CacheBag[object]), CacheBag)
        with pytest.raises(PageObjectNotFoundError):
            tab.on(CacheNested[object])


@allure.feature("Instance Cache")
@allure.story("Invalidation")
class TestInvalidation:

    def test_unregister_drops_type_and_descendants(self):
        tab = CacheTab()
        shell = tab.on(CacheShell)
        nested = tab.on(CacheGadget, lambda g: g.parent is shell)
        direct = tab.on(CacheGadget, lambda g: g.parent is tab)

        removed = tab.cache.unregister(CacheShell)

        assert removed == 2
        assert tab.cache.object_count == 1
        assert tab.on(CacheShell) is not shell
        assert tab.on(CacheGadget, lambda g: g.parent is tab) is direct
        assert tab.on(CacheGadget, lambda g: type(g.parent) is CacheShell) is not nested

    def test_unregister_unknown_type_is_noop(self):
        tab = CacheTab()
        tab.on(CacheShell)
        assert tab.cache.unregister(CacheGadget) == 0
        assert tab.cache.object_count == 1

    def test_unregister_closed_generic_only(self):
        tab = CacheTab()
        as_int = tab.on(CacheBox[int])
        as_str = tab.on(CacheBox[str])

        tab.cache.unregister(CacheBox[int])

        assert tab.on(CacheBox[str]) is as_str
        assert tab.on(CacheBox[int]) is not as_int

    def test_clear_empties_everything(self):
        tab = CacheTab()
        shell = tab.on(CacheShell)
        tab.cache.clear()

        assert tab.cache.object_count == 0
        assert tab.cache.type_count == 0
        assert tab.on(CacheShell) is not shell


@allure.feature("Instance Cache")
@allure.story("Concurrency")
class TestConcurrency:

    def test_concurrent_first_access_yields_one_instance(self):
        tab = CacheTab()
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda _: tab.on(CacheGadget), range(32)))

        assert all(result is results[0] for result in results)
        assert tab.cache.object_count == 1

    def test_factory_runs_once_per_signature(self):
        cache = InstanceCache()
        signature = (TypeDescriptor.of(CacheTab), TypeDescriptor.of(CacheShell))
        calls = []

        def factory():
            calls.append(1)
            return object()

        first = cache.get_or_create(signature, factory)
        second = cache.get_or_create(signature, factory)

        assert first is second
        assert len(calls) == 1
        assert cache.object_count == 0
        cache.mark_resolved(signature)
        assert cache.object_count == 1
