# src/catalog/properties.py
"""
Block-state property classification.

Responsibility:
  - Classify each host property once into boolean / enum / integer.
  - Keep the explicit registration table (display name <-> property) that
    every other pass uses to name properties.
  - Remember which enum classes were seen, for the enumClasses section.

The taxonomy is closed: a property of any other kind is a fatal
UnknownPropertyKindError, never a silent skip.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Tuple

from contracts.host import Property

from .errors import HostAccessError, UnknownPropertyKindError, read_attribute


log = logging.getLogger(__name__)


class PropertyKind(str, Enum):
    BOOLEAN = "boolean"
    ENUM = "enum"
    INTEGER = "integer"


_KINDS_BY_TAG: Dict[str, PropertyKind] = {kind.value: kind for kind in PropertyKind}


@dataclass(frozen=True)
class PropertyDescriptor:
    """
    Classified view of one host property.

    - possible_values: legal values in host order
    - default_value: host-supplied default, or the first legal value
    - enum_class / restricted_values: enum kind only; restricted_values is
      set only when the legal values are a strict subset of the enum
    - minimum / maximum: integer kind only, found by scanning
    """

    name: str
    kind: PropertyKind
    possible_values: Tuple[Any, ...]
    default_value: Any
    enum_class: Optional[type] = None
    restricted_values: Optional[Tuple[Enum, ...]] = None
    minimum: Optional[int] = None
    maximum: Optional[int] = None

    def is_default(self, value: Any) -> bool:
        """Compare a value with the default the way its kind requires."""
        if self.kind is PropertyKind.ENUM:
            return value is self.default_value
        return value == self.default_value


def _property_kind(prop: Property, values: Tuple[Any, ...]) -> PropertyKind:
    """
    Classify by the property's own attributes, never by its host type.

    An explicit `kind` tag wins. Otherwise a `value_class` marks an enum,
    and an all-bool or all-int domain marks a boolean or integer property.
    """
    tag = read_attribute(prop, "kind", None)
    if tag is not None:
        if tag in _KINDS_BY_TAG:
            return _KINDS_BY_TAG[tag]
    elif read_attribute(prop, "value_class", None) is not None:
        return PropertyKind.ENUM
    elif all(isinstance(value, bool) for value in values):
        return PropertyKind.BOOLEAN
    elif all(isinstance(value, int) and not isinstance(value, bool) for value in values):
        return PropertyKind.INTEGER
    raise UnknownPropertyKindError(
        code="unknown_property_kind",
        details={"property": repr(prop), "type": type(prop).__qualname__, "kind": repr(tag)},
    )


def classify_property(prop: Property) -> PropertyDescriptor:
    """Build the PropertyDescriptor for a host property."""
    name = read_attribute(prop, "name")
    values = tuple(read_attribute(prop, "possible_values"))
    if not values:
        raise HostAccessError(
            code="empty_property_domain",
            details={"property": name},
        )
    kind = _property_kind(prop, values)

    explicit_default = read_attribute(prop, "default", None)
    default_value = explicit_default if explicit_default is not None else values[0]

    if kind is PropertyKind.ENUM:
        enum_class = read_attribute(prop, "value_class")
        constants = list(enum_class)
        restricted = values if len(values) != len(constants) else None
        return PropertyDescriptor(
            name=name,
            kind=kind,
            possible_values=values,
            default_value=default_value,
            enum_class=enum_class,
            restricted_values=restricted,
        )

    if kind is PropertyKind.INTEGER:
        return PropertyDescriptor(
            name=name,
            kind=kind,
            possible_values=values,
            default_value=default_value,
            minimum=min(values),
            maximum=max(values),
        )

    return PropertyDescriptor(
        name=name,
        kind=kind,
        possible_values=values,
        default_value=default_value,
    )


class PropertyTable:
    """
    Explicit registration table for block-state properties.

    Built once from the host's published property table (display name ->
    property). Host properties hash by identity, so two distinct
    properties that happen to share a name stay separate.
    """

    def __init__(self) -> None:
        self._by_name: Dict[str, Any] = {}
        self._names: Dict[Any, str] = {}
        self._descriptors: Dict[Any, PropertyDescriptor] = {}
        self._enum_classes: Dict[type, None] = {}
        self._unregistered: Set[Any] = set()

    @classmethod
    def from_mapping(cls, properties: Mapping[str, Any]) -> "PropertyTable":
        table = cls()
        for display_name, prop in properties.items():
            table.register(display_name, prop)
        return table

    def register(self, display_name: str, prop: Any) -> PropertyDescriptor:
        """Register and classify a property. Re-registering keeps the first name."""
        if display_name in self._by_name and self._by_name[display_name] is not prop:
            raise ValueError(f"Display name {display_name!r} already bound to another property")
        descriptor = self.descriptor(prop)
        self._by_name.setdefault(display_name, prop)
        self._names.setdefault(prop, display_name)
        return descriptor

    def descriptor(self, prop: Any) -> PropertyDescriptor:
        """Return the cached classification for `prop`, classifying on first use."""
        descriptor = self._descriptors.get(prop)
        if descriptor is None:
            descriptor = classify_property(prop)
            self._descriptors[prop] = descriptor
            if descriptor.enum_class is not None:
                self._enum_classes.setdefault(descriptor.enum_class, None)
        return descriptor

    def name_of(self, prop: Any) -> Optional[str]:
        """Display name a property was registered under, or None."""
        name = self._names.get(prop)
        if name is None and prop not in self._unregistered:
            self._unregistered.add(prop)
            log.warning("Block-state property %r is not in the property table", prop)
        return name

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(list(self._by_name.items()))

    @property
    def enum_classes(self) -> List[type]:
        """Enum classes seen during classification, in first-seen order."""
        return list(self._enum_classes)

    def __len__(self) -> int:
        return len(self._by_name)
