# src/catalog/hierarchy.py
"""
Class-hierarchy collection for the exported catalog.

Responsibility:
  - Walk a content class's ancestor chain up to a boundary type
    (Block, Item, Entity, ...) and record every class it passes.
  - Keep one insertion-ordered, deduplicated set per content category so
    that base classes are listed before the classes that extend them.
  - Produce the display names used in the JSON document.

Usage:

    classes = HierarchySet()
    for block in registry:
        collect_classes(classes, Block, block)

    for cls in classes:
        ...  # ancestor-first, one entry per distinct class
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional


# ---------------------------------------------------------------------------
# Type helpers
# ---------------------------------------------------------------------------

def is_within(cls: type, boundary: type) -> bool:
    """True when `cls` is `boundary` or one of its descendants."""
    return isinstance(cls, type) and issubclass(cls, boundary)


def parent_type(cls: type, boundary: Optional[type] = None) -> Optional[type]:
    """
    Return the direct parent of `cls`.

    With a boundary, the first base that lies inside it wins, so a mixin
    listed ahead of the real base class does not cut the chain short.
    Returns None for `object`.
    """
    bases = cls.__bases__
    if not bases:
        return None
    if boundary is not None:
        for base in bases:
            if is_within(base, boundary):
                return base
    return bases[0]


def simple_name(cls: type) -> str:
    return cls.__name__


def full_class_name(cls: type) -> str:
    """
    Simple name qualified by enclosing class names, joined with ".".

    Function-local prefixes ("make_block.<locals>.") are dropped: only
    enclosing classes count.
    """
    parts = cls.__qualname__.split(".")
    if "<locals>" in parts:
        last_local = len(parts) - 1 - parts[::-1].index("<locals>")
        parts = parts[last_local + 1:]
    return ".".join(parts)


# ---------------------------------------------------------------------------
# HierarchySet
# ---------------------------------------------------------------------------

class HierarchySet:
    """
    Insertion-ordered set of classes.

    Re-adding a class is a no-op and never changes its position.
    """

    def __init__(self, classes: Iterable[type] = ()) -> None:
        self._classes: Dict[type, None] = {}
        self.update(classes)

    def add(self, cls: type) -> None:
        self._classes.setdefault(cls, None)

    def update(self, classes: Iterable[type]) -> None:
        for cls in classes:
            self.add(cls)

    def __contains__(self, cls: object) -> bool:
        return cls in self._classes

    def __iter__(self) -> Iterator[type]:
        return iter(self._classes)

    def __len__(self) -> int:
        return len(self._classes)

    def __repr__(self) -> str:
        names = ", ".join(simple_name(c) for c in self._classes)
        return f"HierarchySet([{names}])"


# ---------------------------------------------------------------------------
# Collector
# ---------------------------------------------------------------------------

def collect_classes(classes: HierarchySet, base_type: type, leaf: Any) -> None:
    """
    Add `leaf`'s class and its ancestors inside `base_type` to `classes`.

    `leaf` may be a class or an instance (its runtime type is used). The
    chain is added most-ancestral first. A leaf outside the boundary adds
    nothing. The boundary class itself is only recorded when it is the
    leaf; as an ancestor it ends the walk.
    """
    cls: Optional[type] = leaf if isinstance(leaf, type) else type(leaf)

    chain: List[type] = []
    while cls is not None and is_within(cls, base_type):
        chain.append(cls)
        if cls is base_type:
            break
        cls = parent_type(cls, base_type)
        if cls is base_type:
            break

    chain.reverse()
    classes.update(chain)
