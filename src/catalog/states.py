# src/catalog/states.py
"""
Default-state diffing.

Given a block's default state, keep only the assignments that differ from
each property's default value and render them as JSON-ready scalars:

    boolean -> bool
    integer -> int
    enum    -> constant name

An empty result means the block sits entirely on property defaults; the
caller decides whether to emit the key at all.
"""

from __future__ import annotations

from typing import Any, Dict

from contracts.host import BlockState

from .errors import UnknownPropertyKindError, read_attribute
from .properties import PropertyDescriptor, PropertyKind, PropertyTable


def render_value(descriptor: PropertyDescriptor, value: Any) -> Any:
    """Render a property value as a JSON scalar according to its kind."""
    if descriptor.kind is PropertyKind.BOOLEAN:
        return bool(value)
    if descriptor.kind is PropertyKind.INTEGER:
        return int(value)
    if descriptor.kind is PropertyKind.ENUM:
        return read_attribute(value, "name")
    raise UnknownPropertyKindError(
        code="unknown_property_kind",
        details={"property": descriptor.name, "kind": repr(descriptor.kind)},
    )


def diff_defaults(assignment: BlockState, table: PropertyTable) -> Dict[str, Any]:
    """
    Return {display name: rendered value} for every non-default assignment.

    `assignment` is a host block state exposing items() over
    (property, value) pairs. Properties missing from the table fall back to
    their own name so a value is never dropped.
    """
    result: Dict[str, Any] = {}
    for prop, value in assignment.items():
        descriptor = table.descriptor(prop)
        if descriptor.is_default(value):
            continue
        name = table.name_of(prop) or descriptor.name
        result[name] = render_value(descriptor, value)
    return result
