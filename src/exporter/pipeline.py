# src/exporter/pipeline.py
"""
Catalog export pipeline.

One linear pass per content category, in this order:

  1. blockStateProperties
  2. blocks
  3. blockClasses
  4. items
  5. itemClasses
  6. entityTypes / entityClasses (only when the host has an entity registry)
  7. packets
  8. enumClasses

Later passes depend on earlier ones: block classes are collected while
blocks are exported, and enum classes are collected while properties are
classified. The whole document is built in memory; nothing touches disk
here (see exporter.writer).

Sparse encoding: optional per-entry keys are omitted when their value is
empty or at its default. A value that is present but None stays in the
document as null.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog.errors import HostAccessError, read_attribute
from catalog.hierarchy import (
    HierarchySet,
    collect_classes,
    full_class_name,
    is_within,
    parent_type,
    simple_name,
)
from catalog.properties import PropertyDescriptor, PropertyKind, PropertyTable
from catalog.states import diff_defaults
from contracts.host import HostRuntime, Registry


log = logging.getLogger(__name__)

DEFAULT_MAX_STACK_SIZE = 64


def registry_key(registry: Registry[Any], entry: Any) -> str:
    """Namespaced key of `entry`, or HostAccessError when it is not registered."""
    try:
        return str(registry.get_key(entry))
    except LookupError as exc:
        raise HostAccessError(
            code="unregistered_entry",
            details={"registry": getattr(registry, "name", repr(registry)), "entry": repr(entry)},
        ) from exc


def describe_property(descriptor: PropertyDescriptor) -> Dict[str, Any]:
    """JSON entry for one block-state property definition."""
    entry: Dict[str, Any] = {"name": descriptor.name, "type": descriptor.kind.value}
    if descriptor.kind is PropertyKind.ENUM:
        entry["class"] = full_class_name(descriptor.enum_class)
        if descriptor.restricted_values is not None:
            entry["values"] = [value.name for value in descriptor.restricted_values]
    elif descriptor.kind is PropertyKind.INTEGER:
        entry["min"] = descriptor.minimum
        entry["max"] = descriptor.maximum
    return entry


def describe_class(cls: type, boundary: type) -> Dict[str, Any]:
    """
    JSON entry for one collected class.

    "extends" names the direct parent when it lies strictly inside the
    boundary. The collector adds such a parent before its child, so the
    link always points at an earlier entry. A parent that is the boundary
    itself is never named.
    """
    entry: Dict[str, Any] = {"name": simple_name(cls)}
    parent = parent_type(cls, boundary)
    if parent is not None and parent is not boundary and is_within(parent, boundary):
        entry["extends"] = simple_name(parent)
    return entry


class CatalogExporter:
    """
    Builds the export document from a bootstrapped host.

    Usage:

        exporter = CatalogExporter(host)
        document = exporter.run()
        write_document(document, Path("export.json"))

    `counts` records how many entries each section received, for summaries.
    """

    def __init__(self, host: HostRuntime, include_entity_types: bool = True) -> None:
        self._host = host
        self._include_entity_types = include_entity_types

        self.properties = PropertyTable()
        self.block_classes = HierarchySet()
        self.item_classes = HierarchySet()
        self.entity_classes = HierarchySet()
        self.counts: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Driver
    # ------------------------------------------------------------------

    def run(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {}
        self.export_block_state_properties(document)
        self.export_blocks(document)
        self.export_block_classes(document)
        self.export_items(document)
        self.export_item_classes(document)
        if self._entity_registry() is not None:
            self.export_entity_types(document)
            self.export_entity_classes(document)
        self.export_packets(document)
        self.export_enum_classes(document)
        log.info("export finished")
        return document

    def _record(self, document: Dict[str, Any], key: str, value: Any, label: str) -> None:
        document[key] = value
        self.counts[key] = len(value)
        log.info("exported %d %s", len(value), label)

    def _entity_registry(self) -> Optional[Registry[Any]]:
        if not self._include_entity_types:
            return None
        registry = read_attribute(self._host, "entity_types", None)
        if registry is None:
            log.info("Host exposes no entity types; skipping entity export")
        return registry

    # ------------------------------------------------------------------
    # Block state properties
    # ------------------------------------------------------------------

    def export_block_state_properties(self, document: Dict[str, Any]) -> None:
        published = read_attribute(self._host, "block_state_properties")
        section: Dict[str, Any] = {}
        for display_name, prop in published.items():
            descriptor = self.properties.register(display_name, prop)
            section[display_name] = describe_property(descriptor)
        self._record(document, "blockStateProperties", section, "block state properties")

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def export_blocks(self, document: Dict[str, Any]) -> None:
        registry = read_attribute(self._host, "blocks")
        base_block = read_attribute(self._host, "base_block")
        blocks: List[Dict[str, Any]] = []
        for block in registry:
            entry: Dict[str, Any] = {
                "name": registry_key(registry, block),
                "class": simple_name(type(block)),
            }

            state_definition = read_attribute(block, "state_definition")
            names = [self.properties.name_of(p) for p in read_attribute(state_definition, "properties")]
            if names:
                entry["properties"] = names

            default_state = diff_defaults(block.default_state(), self.properties)
            if default_state:
                entry["defaultState"] = default_state

            blocks.append(entry)
            collect_classes(self.block_classes, base_block, block)
        self._record(document, "blocks", blocks, "blocks")

    def export_block_classes(self, document: Dict[str, Any]) -> None:
        base_block = read_attribute(self._host, "base_block")
        classes: List[Dict[str, Any]] = []
        for block_class in self.block_classes:
            entry = describe_class(block_class, base_block)
            declared = self._host.declared_properties(block_class)
            fields = {field: self.properties.name_of(prop) for field, prop in declared.items()}
            if fields:
                entry["properties"] = fields
            classes.append(entry)
        self._record(document, "blockClasses", classes, "block classes")

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def export_items(self, document: Dict[str, Any]) -> None:
        registry = read_attribute(self._host, "items")
        base_item = read_attribute(self._host, "base_item")
        items: List[Dict[str, Any]] = []
        for item in registry:
            entry: Dict[str, Any] = {
                "name": registry_key(registry, item),
                "class": simple_name(type(item)),
            }

            category = read_attribute(item, "category")
            if category is not None:
                entry["category"] = category

            rarity = read_attribute(item, "rarity")
            rarity_name = read_attribute(rarity, "name")
            if rarity_name != "COMMON":
                entry["rarity"] = rarity_name.lower()

            max_stack_size = read_attribute(item, "max_stack_size")
            if max_stack_size != DEFAULT_MAX_STACK_SIZE:
                entry["maxStackSize"] = max_stack_size

            max_damage = read_attribute(item, "max_damage")
            if max_damage != 0:
                entry["maxDamage"] = max_damage

            if read_attribute(item, "fire_resistant"):
                entry["isFireResistant"] = True

            remainder = read_attribute(item, "crafting_remainder")
            if remainder is not None:
                entry["craftingRemainingItem"] = registry_key(registry, remainder)

            items.append(entry)
            collect_classes(self.item_classes, base_item, item)
        self._record(document, "items", items, "items")

    def export_item_classes(self, document: Dict[str, Any]) -> None:
        base_item = read_attribute(self._host, "base_item")
        classes = [describe_class(cls, base_item) for cls in self.item_classes]
        self._record(document, "itemClasses", classes, "item classes")

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def export_entity_types(self, document: Dict[str, Any]) -> None:
        registry = read_attribute(self._host, "entity_types")
        blocks = read_attribute(self._host, "blocks")
        base_entity = read_attribute(self._host, "base_entity")
        entity_types: List[Dict[str, Any]] = []
        for entity_type in registry:
            entity_class = read_attribute(entity_type, "entity_class")
            entry: Dict[str, Any] = {
                "name": registry_key(registry, entity_type),
                "entityClass": simple_name(entity_class),
                "category": read_attribute(read_attribute(entity_type, "category"), "name").lower(),
            }

            immune_to = [registry_key(blocks, block) for block in read_attribute(entity_type, "immune_to")]
            if immune_to:
                entry["immuneTo"] = immune_to

            entry["canSerialize"] = read_attribute(entity_type, "can_serialize")
            entry["canSummon"] = read_attribute(entity_type, "can_summon")
            entry["fireImmune"] = read_attribute(entity_type, "fire_immune")
            entry["canSpawnFarFromPlayer"] = read_attribute(entity_type, "can_spawn_far_from_player")
            entry["clientTrackingRange"] = read_attribute(entity_type, "client_tracking_range")
            entry["width"] = read_attribute(entity_type, "width")
            entry["height"] = read_attribute(entity_type, "height")

            entity_types.append(entry)
            collect_classes(self.entity_classes, base_entity, entity_class)
        self._record(document, "entityTypes", entity_types, "entity types")

    def export_entity_classes(self, document: Dict[str, Any]) -> None:
        base_entity = read_attribute(self._host, "base_entity")
        classes = [describe_class(cls, base_entity) for cls in self.entity_classes]
        self._record(document, "entityClasses", classes, "entity classes")

    # ------------------------------------------------------------------
    # Packets
    # ------------------------------------------------------------------

    def export_packets(self, document: Dict[str, Any]) -> None:
        flows = list(read_attribute(self._host, "packet_flows"))
        protocols: Dict[str, Any] = {}
        total = 0
        for protocol in read_attribute(self._host, "protocols"):
            by_flow: Dict[str, Any] = {}
            for flow in flows:
                packets_by_id = protocol.packets_by_id(flow)
                packets = [{"name": full_class_name(packets_by_id[i])} for i in sorted(packets_by_id)]
                if packets:
                    by_flow[read_attribute(flow, "name").lower()] = packets
                    total += len(packets)
            protocols[read_attribute(protocol, "name").lower()] = by_flow
        document["packets"] = protocols
        self.counts["packets"] = total
        log.info("exported %d packets in %d protocols", total, len(protocols))

    # ------------------------------------------------------------------
    # Enum classes
    # ------------------------------------------------------------------

    def export_enum_classes(self, document: Dict[str, Any]) -> None:
        classes: List[Dict[str, Any]] = []
        for enum_class in self.properties.enum_classes:
            classes.append(
                {
                    "name": full_class_name(enum_class),
                    "constants": [{"name": constant.name} for constant in enum_class],
                }
            )
        self._record(document, "enumClasses", classes, "enum classes")
