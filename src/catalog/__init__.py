# catalog package
# src/catalog/__init__.py

"""
Core of the registry catalog exporter.

- HierarchySet / collect_classes -> ancestor-first class collection
- PropertyTable / classify_property -> block-state property taxonomy
- diff_defaults -> non-default block-state values
"""

from .errors import (
    ExportError,
    HostAccessError,
    HostBootstrapError,
    UnknownPropertyKindError,
)
from .hierarchy import (
    HierarchySet,
    collect_classes,
    full_class_name,
    parent_type,
    simple_name,
)
from .properties import PropertyDescriptor, PropertyKind, PropertyTable, classify_property
from .states import diff_defaults


__all__ = [
    "ExportError",
    "HostAccessError",
    "HostBootstrapError",
    "UnknownPropertyKindError",
    "HierarchySet",
    "collect_classes",
    "full_class_name",
    "parent_type",
    "simple_name",
    "PropertyDescriptor",
    "PropertyKind",
    "PropertyTable",
    "classify_property",
    "diff_defaults",
]
