# tests/test_catalog_hierarchy.py
"""
Tests for catalog.hierarchy.

Covers:
- ancestor-first ordering of a single chain
- idempotent collection (duplicates collapse, positions never move)
- boundary handling (leaf outside, parent == boundary, mixins)
- display names for nested and function-local classes
"""

from __future__ import annotations

from catalog.hierarchy import (
    HierarchySet,
    collect_classes,
    full_class_name,
    parent_type,
    simple_name,
)


class Block:
    pass


class A(Block):
    pass


class B(A):
    pass


class Leaf(B):
    pass


class Sibling(A):
    pass


class Outside:
    pass


class Mixin:
    pass


class Outer:
    class Inner(Block):
        pass


def test_collect_inserts_ancestors_before_leaf():
    classes = HierarchySet()

    collect_classes(classes, Block, Leaf)

    assert list(classes) == [A, B, Leaf]


def test_collect_accepts_instances():
    classes = HierarchySet()

    collect_classes(classes, Block, Leaf())

    assert list(classes) == [A, B, Leaf]


def test_collect_is_idempotent():
    once = HierarchySet()
    collect_classes(once, Block, Leaf)

    many = HierarchySet()
    for _ in range(5):
        collect_classes(many, Block, Leaf)

    assert list(many) == list(once)
    assert len(many) == 3


def test_collect_orders_by_first_discovery():
    classes = HierarchySet()

    collect_classes(classes, Block, Leaf)
    collect_classes(classes, Block, Sibling)
    collect_classes(classes, Block, B)

    # A was already present; re-adding it does not move it behind Sibling.
    assert list(classes) == [A, B, Leaf, Sibling]


def test_parent_equal_to_boundary_yields_only_leaf():
    classes = HierarchySet()

    collect_classes(classes, Block, A)

    assert list(classes) == [A]


def test_leaf_outside_boundary_contributes_nothing():
    classes = HierarchySet()

    collect_classes(classes, Block, Outside)
    collect_classes(classes, Block, Outside())

    assert len(classes) == 0


def test_boundary_itself_is_recorded_when_it_is_the_leaf():
    classes = HierarchySet()

    collect_classes(classes, Block, Block())

    assert list(classes) == [Block]


def test_mixin_ahead_of_real_base_does_not_cut_chain():
    class Mixed(Mixin, B):
        pass

    classes = HierarchySet()
    collect_classes(classes, Block, Mixed)

    assert list(classes) == [A, B, Mixed]
    assert parent_type(Mixed, Block) is B
    assert parent_type(Mixed) is Mixin


def test_parent_type_of_object_is_none():
    assert parent_type(object) is None
    assert parent_type(A) is Block


def test_hierarchy_set_membership_and_repr():
    classes = HierarchySet([A, B, A])

    assert A in classes
    assert Leaf not in classes
    assert len(classes) == 2
    assert repr(classes) == "HierarchySet([A, B])"


def test_display_names():
    class Local(Block):
        class Nested:
            pass

    assert simple_name(Outer.Inner) == "Inner"
    assert full_class_name(Outer.Inner) == "Outer.Inner"
    assert full_class_name(Leaf) == "Leaf"
    assert full_class_name(Local) == "Local"
    assert full_class_name(Local.Nested) == "Local.Nested"
