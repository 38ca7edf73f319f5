# src/host/loader.py
"""
YAML content-pack loader.

Responsibility:
  - Read a content pack (YAML) describing enums, block-state properties,
    content classes, blocks, items, entity types and packet tables.
  - Create the declared classes at runtime, parents before children.
  - Register everything into a GameHost the exporter can walk.

Pack layout:

    namespace: mod
    enums:
      Direction: [NORTH, EAST, SOUTH, WEST, UP, DOWN]
      "ChestBlock.Type": [SINGLE, LEFT, RIGHT]       # nested qualname
    block_state_properties:
      LIT: {name: lit, type: boolean}
      FACING: {name: facing, type: enum, class: Direction, values: [NORTH, SOUTH]}
      AGE: {name: age, type: integer, min: 0, max: 3}
    classes:
      blocks:
        BaseBlock: {}                                 # extends Block
        Furnace: {extends: BaseBlock, properties: {LIT: LIT}}
      items:
        BlockItem: {}
      entities:
        Zombie: {}
      packets:
        ClientIntentionPacket: {}
    blocks:
      furnace: {class: Furnace, default_state: {LIT: true}}
    items:
      furnace: {class: BlockItem, crafting_remainder: bucket}
    entity_types:                                      # omit for hosts without one
      zombie: {class: Zombie, category: monster, immune_to: [furnace]}
    protocols:
      handshake:
        serverbound: [ClientIntentionPacket]

Every section is optional except that referenced names must exist.
"""

from __future__ import annotations

import logging
import types
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Type

import networkx as nx
import yaml

from .model import (
    DEFAULT_NAMESPACE,
    Block,
    BooleanProperty,
    Entity,
    EntityType,
    EnumProperty,
    GameHost,
    IntegerProperty,
    Item,
    MobCategory,
    Packet,
    PacketFlow,
    PacketProtocol,
    Property,
    Rarity,
    Registry,
)


log = logging.getLogger(__name__)

# Module that dynamically created classes report as their home.
PACK_MODULE = "host.content"

_CATEGORY_BASES: Dict[str, type] = {
    "blocks": Block,
    "items": Item,
    "entities": Entity,
    "packets": Packet,
}


# ---------------------------------------------------------------------------
# Low-level helpers
# ---------------------------------------------------------------------------

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML file and require a mapping at top level."""
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Content pack {path} must be a mapping at top level.")
    return data


def _mapping(raw: Any, where: str) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"'{where}' must be a mapping, got {type(raw).__name__}")
    return raw


def _split_qualname(qualname: str) -> str:
    """Return the simple name of a dotted class name ("Outer.Inner" -> "Inner")."""
    return qualname.rsplit(".", 1)[-1]


def _make_class(qualname: str, parent: type, kwds: Optional[Dict[str, Any]] = None) -> type:
    """Create `qualname` as a subclass of `parent`, forwarding class keywords."""

    def exec_body(ns: Dict[str, Any]) -> None:
        ns["__qualname__"] = qualname
        ns["__module__"] = PACK_MODULE

    return types.new_class(_split_qualname(qualname), (parent,), kwds or {}, exec_body)


# ---------------------------------------------------------------------------
# Enums and properties
# ---------------------------------------------------------------------------

def build_enums(raw: Mapping[str, Any]) -> Dict[str, Type[Enum]]:
    enums: Dict[str, Type[Enum]] = {}
    for qualname, constants in raw.items():
        if not isinstance(constants, list) or not constants:
            raise ValueError(f"Enum {qualname!r} must list at least one constant")
        enums[qualname] = Enum(  # type: ignore[misc]
            _split_qualname(qualname),
            [str(c) for c in constants],
            module=PACK_MODULE,
            qualname=qualname,
        )
    return enums


def _enum_constant(enum_class: Type[Enum], name: Any) -> Enum:
    try:
        return enum_class[str(name)]
    except KeyError:
        raise ValueError(f"{enum_class.__qualname__} has no constant {name!r}") from None


def build_property(display_name: str, raw: Mapping[str, Any], enums: Mapping[str, Type[Enum]]) -> Property:
    """Build one block-state property from its pack entry."""
    name = raw.get("name", display_name.lower())
    kind = raw.get("type")

    if kind == "boolean":
        default = raw.get("default")
        return BooleanProperty(name, default=bool(default) if default is not None else None)

    if kind == "enum":
        class_name = raw.get("class")
        if class_name not in enums:
            raise ValueError(f"Property {display_name!r} references unknown enum {class_name!r}")
        enum_class = enums[class_name]
        values = raw.get("values")
        constants = [_enum_constant(enum_class, v) for v in values] if values is not None else None
        default = raw.get("default")
        return EnumProperty(
            name,
            enum_class,
            values=constants,
            default=_enum_constant(enum_class, default) if default is not None else None,
        )

    if kind == "integer":
        values = raw.get("values")
        return IntegerProperty(
            name,
            minimum=raw.get("min"),
            maximum=raw.get("max"),
            values=[int(v) for v in values] if values is not None else None,
            default=raw.get("default"),
        )

    raise ValueError(f"Property {display_name!r} has unsupported type {kind!r}")


def coerce_state_value(prop: Property, raw: Any) -> Any:
    """Turn a YAML scalar into a legal value of `prop`."""
    if isinstance(prop, BooleanProperty):
        if not isinstance(raw, bool):
            raise ValueError(f"Property {prop.name!r} expects a boolean, got {raw!r}")
        value: Any = raw
    elif isinstance(prop, EnumProperty):
        value = _enum_constant(prop.value_class, raw)
    elif isinstance(prop, IntegerProperty):
        value = int(raw)
    else:
        raise ValueError(f"Cannot coerce value for {prop!r}")

    if value not in prop.possible_values:
        raise ValueError(f"{raw!r} is not a legal value of property {prop.name!r}")
    return value


# ---------------------------------------------------------------------------
# Classes
# ---------------------------------------------------------------------------

def build_class_graph(category: str, raw: Mapping[str, Any]) -> nx.DiGraph:
    """
    Build the extends-graph for one class category.

    Nodes are class names; an edge parent -> child exists for every parent
    declared in the same pack category.
    """
    base_name = _CATEGORY_BASES[category].__name__
    graph = nx.DiGraph()
    for name, spec in raw.items():
        spec = _mapping(spec, f"classes.{category}.{name}")
        graph.add_node(name)
        parent = spec.get("extends", base_name)
        if parent != base_name:
            if parent not in raw:
                raise ValueError(f"Class {name!r} extends unknown class {parent!r}")
            graph.add_edge(parent, name)

    if not nx.is_directed_acyclic_graph(graph):
        cycle = nx.find_cycle(graph)
        raise ValueError(f"Class hierarchy for {category} has a cycle: {cycle}")
    return graph


def build_classes(
    category: str,
    raw: Mapping[str, Any],
    properties: Mapping[str, Property],
) -> Dict[str, type]:
    """Create every class in a category, parents before children."""
    base = _CATEGORY_BASES[category]
    graph = build_class_graph(category, raw)

    classes: Dict[str, type] = {base.__name__: base}
    for name in nx.topological_sort(graph):
        spec = _mapping(raw[name], f"classes.{category}.{name}")
        parent = classes[spec.get("extends", base.__name__)]

        kwds: Dict[str, Any] = {}
        declared = _mapping(spec.get("properties"), f"classes.{category}.{name}.properties")
        if declared:
            if category != "blocks":
                raise ValueError(f"Only block classes declare state properties ({name!r})")
            missing = [p for p in declared.values() if p not in properties]
            if missing:
                raise ValueError(f"Class {name!r} declares unknown properties {missing}")
            kwds["properties"] = {field: properties[p] for field, p in declared.items()}

        classes[name] = _make_class(name, parent, kwds)
    return classes


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------

def _lookup_class(classes: Mapping[str, type], name: str, where: str) -> type:
    try:
        return classes[name]
    except KeyError:
        raise ValueError(f"{where} references unknown class {name!r}") from None


def register_blocks(
    registry: Registry[Block],
    raw: Mapping[str, Any],
    classes: Mapping[str, type],
    properties: Mapping[str, Property],
) -> None:
    for key, spec in raw.items():
        spec = _mapping(spec, f"blocks.{key}")
        block_class = _lookup_class(classes, spec.get("class", "Block"), f"blocks.{key}")

        state_properties: Optional[List[Property]] = None
        if "properties" in spec:
            names = spec.get("properties") or []
            unknown = [n for n in names if n not in properties]
            if unknown:
                raise ValueError(f"Block {key!r} uses unknown properties {unknown}")
            state_properties = [properties[n] for n in names]

        defaults: Dict[Property, Any] = {}
        for prop_name, raw_value in _mapping(spec.get("default_state"), f"blocks.{key}.default_state").items():
            if prop_name not in properties:
                raise ValueError(f"Block {key!r} default_state uses unknown property {prop_name!r}")
            prop = properties[prop_name]
            defaults[prop] = coerce_state_value(prop, raw_value)

        registry.register(key, block_class(state_properties=state_properties, default_values=defaults))


def register_items(
    registry: Registry[Item],
    raw: Mapping[str, Any],
    classes: Mapping[str, type],
) -> None:
    remainders: Dict[str, str] = {}
    for key, spec in raw.items():
        spec = _mapping(spec, f"items.{key}")
        item_class = _lookup_class(classes, spec.get("class", "Item"), f"items.{key}")
        rarity = spec.get("rarity", "common")
        try:
            rarity_value = Rarity[str(rarity).upper()]
        except KeyError:
            raise ValueError(f"Item {key!r} has unknown rarity {rarity!r}") from None

        item = item_class(
            category=spec.get("category"),
            rarity=rarity_value,
            max_stack_size=int(spec.get("max_stack_size", 64)),
            max_damage=int(spec.get("max_damage", 0)),
            fire_resistant=bool(spec.get("fire_resistant", False)),
        )
        registry.register(key, item)
        if spec.get("crafting_remainder"):
            remainders[key] = spec["crafting_remainder"]

    # Remainders may point at items registered later in the pack.
    for key, remainder_key in remainders.items():
        remainder = registry.get(remainder_key)
        if remainder is None:
            raise ValueError(f"Item {key!r} has unknown crafting_remainder {remainder_key!r}")
        registry.get(key).crafting_remainder = remainder


def register_entity_types(
    registry: Registry[EntityType],
    raw: Mapping[str, Any],
    classes: Mapping[str, type],
    blocks: Registry[Block],
) -> None:
    for key, spec in raw.items():
        spec = _mapping(spec, f"entity_types.{key}")
        entity_class = _lookup_class(classes, spec.get("class", "Entity"), f"entity_types.{key}")

        category = spec.get("category", "misc")
        try:
            category_value = MobCategory[str(category).upper()]
        except KeyError:
            raise ValueError(f"Entity type {key!r} has unknown category {category!r}") from None

        immune_to = []
        for block_key in spec.get("immune_to") or []:
            block = blocks.get(block_key)
            if block is None:
                raise ValueError(f"Entity type {key!r} is immune to unknown block {block_key!r}")
            immune_to.append(block)

        defaults = EntityType(entity_class=entity_class)
        registry.register(
            key,
            EntityType(
                entity_class=entity_class,
                category=category_value,
                immune_to=tuple(immune_to),
                can_serialize=bool(spec.get("can_serialize", defaults.can_serialize)),
                can_summon=bool(spec.get("can_summon", defaults.can_summon)),
                fire_immune=bool(spec.get("fire_immune", defaults.fire_immune)),
                can_spawn_far_from_player=bool(
                    spec.get("can_spawn_far_from_player", defaults.can_spawn_far_from_player)
                ),
                client_tracking_range=int(spec.get("client_tracking_range", defaults.client_tracking_range)),
                width=float(spec.get("width", defaults.width)),
                height=float(spec.get("height", defaults.height)),
            ),
        )


def build_protocols(raw: Mapping[str, Any], classes: Mapping[str, type]) -> List[PacketProtocol]:
    protocols: List[PacketProtocol] = []
    for protocol_name, flows in raw.items():
        protocol = PacketProtocol(protocol_name)
        for flow_name, packet_names in _mapping(flows, f"protocols.{protocol_name}").items():
            try:
                flow = PacketFlow[str(flow_name).upper()]
            except KeyError:
                raise ValueError(f"Protocol {protocol_name!r} has unknown flow {flow_name!r}") from None
            for packet_name in packet_names or []:
                protocol.register(flow, _lookup_class(classes, packet_name, f"protocols.{protocol_name}"))
        protocols.append(protocol)
    return protocols


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_host(pack: Mapping[str, Any]) -> GameHost:
    """Build a GameHost from an already-parsed content pack mapping."""
    namespace = pack.get("namespace", DEFAULT_NAMESPACE)

    enums = build_enums(_mapping(pack.get("enums"), "enums"))

    properties: Dict[str, Property] = {
        display_name: build_property(display_name, _mapping(spec, f"block_state_properties.{display_name}"), enums)
        for display_name, spec in _mapping(pack.get("block_state_properties"), "block_state_properties").items()
    }

    raw_classes = _mapping(pack.get("classes"), "classes")
    classes = {
        category: build_classes(category, _mapping(raw_classes.get(category), f"classes.{category}"), properties)
        for category in _CATEGORY_BASES
    }

    host = GameHost(
        blocks=Registry("block", namespace),
        items=Registry("item", namespace),
        entity_types=Registry("entity_type", namespace) if "entity_types" in pack else None,
        block_state_properties=properties,
    )

    register_blocks(host.blocks, _mapping(pack.get("blocks"), "blocks"), classes["blocks"], properties)
    register_items(host.items, _mapping(pack.get("items"), "items"), classes["items"])
    if host.entity_types is not None:
        register_entity_types(
            host.entity_types,
            _mapping(pack.get("entity_types"), "entity_types"),
            classes["entities"],
            host.blocks,
        )
    host.protocols = build_protocols(_mapping(pack.get("protocols"), "protocols"), classes["packets"])

    log.info(
        "Loaded content pack %r: %d blocks, %d items, %d properties",
        namespace,
        len(host.blocks),
        len(host.items),
        len(properties),
    )
    return host


def load_content_pack(path: Path) -> GameHost:
    """Load a YAML content pack from disk into a GameHost."""
    return build_host(_load_yaml(Path(path)))


__all__ = [
    "build_host",
    "load_content_pack",
]
