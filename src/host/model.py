# src/host/model.py
"""
In-process game content model.

This is the concrete host the exporter walks. It mirrors the shape of a
block-game engine closely enough for catalog extraction:

- Property types (BooleanProperty / EnumProperty / IntegerProperty)
- Block / Item / Entity base classes
- BlockState and StateDefinition
- Registry with namespaced keys
- EntityType, Rarity, MobCategory
- PacketFlow / PacketProtocol for the network packet table

Block classes declare their state properties explicitly:

    class Furnace(Block, properties={"LIT": LIT}):
        ...

which replaces scanning class attributes at export time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
)


T = TypeVar("T")

DEFAULT_NAMESPACE = "minecraft"


# ---------------------------------------------------------------------------
# Block-state properties
# ---------------------------------------------------------------------------

class Property:
    """
    Base block-state property.

    - name: property name as it appears in block-state strings ("lit", "facing")
    - possible_values: ordered legal values
    - default: explicit default value, or None to use the first legal value
    - kind: "boolean", "enum" or "integer" on the concrete subclasses

    Properties hash and compare by identity; two properties with the same
    name are still different registry entries.
    """

    kind: Optional[str] = None

    def __init__(
        self,
        name: str,
        possible_values: Sequence[Any],
        default: Any = None,
    ) -> None:
        self.name = name
        self._possible_values: Tuple[Any, ...] = tuple(possible_values)
        self.default = default

    @property
    def possible_values(self) -> Tuple[Any, ...]:
        return self._possible_values

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class BooleanProperty(Property):
    kind = "boolean"

    def __init__(self, name: str, default: Optional[bool] = None) -> None:
        super().__init__(name, (False, True), default)


class EnumProperty(Property):
    kind = "enum"

    def __init__(
        self,
        name: str,
        value_class: Type[Enum],
        values: Optional[Sequence[Enum]] = None,
        default: Optional[Enum] = None,
    ) -> None:
        if values is None:
            values = list(value_class)
        super().__init__(name, values, default)
        self.value_class = value_class


class IntegerProperty(Property):
    kind = "integer"

    def __init__(
        self,
        name: str,
        minimum: Optional[int] = None,
        maximum: Optional[int] = None,
        values: Optional[Sequence[int]] = None,
        default: Optional[int] = None,
    ) -> None:
        if values is None:
            if minimum is None or maximum is None:
                raise ValueError(f"IntegerProperty {name!r} needs min/max or explicit values")
            if maximum < minimum:
                raise ValueError(f"IntegerProperty {name!r}: max {maximum} < min {minimum}")
            values = range(minimum, maximum + 1)
        super().__init__(name, values, default)


# ---------------------------------------------------------------------------
# Block states
# ---------------------------------------------------------------------------

class StateDefinition:
    """Ordered set of properties a block instance exposes."""

    def __init__(self, properties: Iterable[Property]) -> None:
        seen: Dict[Property, None] = {}
        for prop in properties:
            seen.setdefault(prop, None)
        self._properties: Tuple[Property, ...] = tuple(seen)

    @property
    def properties(self) -> Tuple[Property, ...]:
        return self._properties


class BlockState:
    """
    Immutable assignment of one value per state property.

    Iteration order follows the block's StateDefinition.
    """

    def __init__(self, values: Mapping[Property, Any]) -> None:
        self._values: Dict[Property, Any] = dict(values)

    def items(self) -> Iterator[Tuple[Property, Any]]:
        return iter(list(self._values.items()))

    def get_value(self, prop: Property) -> Any:
        return self._values[prop]

    def __repr__(self) -> str:
        body = ", ".join(f"{p.name}={v!r}" for p, v in self._values.items())
        return f"BlockState({body})"


def property_default(prop: Property) -> Any:
    """Explicit default when the property has one, else its first legal value."""
    if prop.default is not None:
        return prop.default
    return prop.possible_values[0]


# ---------------------------------------------------------------------------
# Content base classes
# ---------------------------------------------------------------------------

class Block:
    """
    Base class of all blocks.

    Subclasses list the properties they declare as a class keyword:

        class Furnace(BaseBlock, properties={"LIT": LIT}): ...

    A block instance exposes the declared properties of its whole class
    chain (ancestor first) unless an explicit list is given.
    """

    _declared_properties: Dict[str, Property] = {}

    def __init_subclass__(cls, properties: Optional[Mapping[str, Property]] = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._declared_properties = dict(properties or {})

    def __init__(
        self,
        state_properties: Optional[Iterable[Property]] = None,
        default_values: Optional[Mapping[Property, Any]] = None,
    ) -> None:
        if state_properties is None:
            state_properties = inherited_properties(type(self))
        self._state_definition = StateDefinition(state_properties)

        overrides = dict(default_values or {})
        unknown = [p for p in overrides if p not in self._state_definition.properties]
        if unknown:
            raise ValueError(f"default values given for undeclared properties: {unknown}")

        self._default_state = BlockState(
            {
                prop: overrides.get(prop, property_default(prop))
                for prop in self._state_definition.properties
            }
        )

    @property
    def state_definition(self) -> StateDefinition:
        return self._state_definition

    def default_state(self) -> BlockState:
        return self._default_state


def declared_properties(block_class: type) -> Dict[str, Property]:
    """Properties declared directly on `block_class` (field name -> property)."""
    return dict(block_class.__dict__.get("_declared_properties", {}))


def inherited_properties(block_class: type) -> List[Property]:
    """Declared properties along the class chain, ancestors first."""
    result: List[Property] = []
    for cls in reversed(block_class.__mro__):
        for prop in declared_properties(cls).values():
            if prop not in result:
                result.append(prop)
    return result


class Rarity(Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    EPIC = "epic"


class Item:
    """Base class of all items. Defaults match a plain, stackable item."""

    def __init__(
        self,
        *,
        category: Optional[str] = None,
        rarity: Rarity = Rarity.COMMON,
        max_stack_size: int = 64,
        max_damage: int = 0,
        fire_resistant: bool = False,
        crafting_remainder: Optional["Item"] = None,
    ) -> None:
        self.category = category
        self.rarity = rarity
        self.max_stack_size = max_stack_size
        self.max_damage = max_damage
        self.fire_resistant = fire_resistant
        self.crafting_remainder = crafting_remainder


class Entity:
    """Base class of all entities."""


class MobCategory(Enum):
    MONSTER = "monster"
    CREATURE = "creature"
    AMBIENT = "ambient"
    AXOLOTLS = "axolotls"
    UNDERGROUND_WATER_CREATURE = "underground_water_creature"
    WATER_CREATURE = "water_creature"
    WATER_AMBIENT = "water_ambient"
    MISC = "misc"


@dataclass(eq=False)
class EntityType:
    """Registry entry describing one kind of entity."""

    entity_class: Type[Entity]
    category: MobCategory = MobCategory.MISC
    immune_to: Tuple[Block, ...] = ()
    can_serialize: bool = True
    can_summon: bool = True
    fire_immune: bool = False
    can_spawn_far_from_player: bool = False
    client_tracking_range: int = 5
    width: float = 0.6
    height: float = 1.8


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

def namespaced(key: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Normalize "path" to "namespace:path"; keys with a namespace are kept."""
    if ":" in key:
        ns, _, path = key.partition(":")
        if not ns or not path:
            raise ValueError(f"Malformed registry key: {key!r}")
        return key
    if not key:
        raise ValueError("Registry key must not be empty")
    return f"{namespace}:{key}"


class Registry(Generic[T]):
    """
    Keyed, insertion-ordered registry.

    Entries are looked up by identity, so the same object cannot be
    registered twice and unhashable entries are fine.
    """

    def __init__(self, name: str, default_namespace: str = DEFAULT_NAMESPACE) -> None:
        self.name = name
        self.default_namespace = default_namespace
        self._entries: Dict[str, T] = {}
        self._keys: Dict[int, str] = {}

    def register(self, key: str, entry: T) -> T:
        full_key = namespaced(key, self.default_namespace)
        if full_key in self._entries:
            raise ValueError(f"Duplicate key {full_key!r} in registry {self.name!r}")
        if id(entry) in self._keys:
            raise ValueError(f"Entry already registered in {self.name!r} as {self._keys[id(entry)]!r}")
        self._entries[full_key] = entry
        self._keys[id(entry)] = full_key
        return entry

    def get(self, key: str) -> Optional[T]:
        return self._entries.get(namespaced(key, self.default_namespace))

    def get_key(self, entry: T) -> str:
        try:
            return self._keys[id(entry)]
        except KeyError:
            raise KeyError(f"{entry!r} is not registered in {self.name!r}") from None

    def keys(self) -> List[str]:
        return list(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)


# ---------------------------------------------------------------------------
# Network packets
# ---------------------------------------------------------------------------

class Packet:
    """Base class of all network packets."""


class PacketFlow(Enum):
    SERVERBOUND = "serverbound"
    CLIENTBOUND = "clientbound"


class PacketProtocol:
    """
    Packet table for one connection phase.

    Ids are assigned sequentially per flow in registration order.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._packets: Dict[PacketFlow, Dict[int, type]] = {flow: {} for flow in PacketFlow}

    def register(self, flow: PacketFlow, packet_class: type) -> int:
        table = self._packets[flow]
        if packet_class in table.values():
            raise ValueError(f"{packet_class.__qualname__} already registered for {self.name}/{flow.name}")
        packet_id = len(table)
        table[packet_id] = packet_class
        return packet_id

    def packets_by_id(self, flow: PacketFlow) -> Dict[int, type]:
        return dict(self._packets[flow])

    def __repr__(self) -> str:
        return f"PacketProtocol({self.name!r})"


# ---------------------------------------------------------------------------
# Runtime
# ---------------------------------------------------------------------------

@dataclass
class GameHost:
    """
    A bootstrapped host: every registry the exporter reads.

    - block_state_properties: display name -> property, in registration order
    - entity_types: None when the host has no entity registry
    """

    blocks: Registry[Block] = field(default_factory=lambda: Registry("block"))
    items: Registry[Item] = field(default_factory=lambda: Registry("item"))
    entity_types: Optional[Registry[EntityType]] = field(default_factory=lambda: Registry("entity_type"))
    block_state_properties: Dict[str, Property] = field(default_factory=dict)
    protocols: List[PacketProtocol] = field(default_factory=list)
    packet_flows: Sequence[PacketFlow] = tuple(PacketFlow)

    base_block: type = Block
    base_item: type = Item
    base_entity: type = Entity

    def declared_properties(self, block_class: type) -> Dict[str, Property]:
        return declared_properties(block_class)
