# Host runtime interface definitions
# src/contracts/host.py

"""
Read-only view of a game host's content registries.

The exporter never constructs or mutates host objects; it only iterates
registries and reads attributes off the entries they hold. Anything that
satisfies these protocols can be exported, whether it comes from the
in-process model in `host.model`, a YAML content pack, or a third-party
factory passed on the command line.
"""

from __future__ import annotations

from typing import (
    Any,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
)


T = TypeVar("T")


class Registry(Protocol[T]):
    """Ordered, keyed collection of content entries."""

    def __iter__(self) -> Iterator[T]:
        """Iterate entries in registration order."""
        ...

    def get_key(self, entry: T) -> str:
        """Return the namespaced key ("namespace:path") for an entry."""
        ...


class Property(Protocol):
    """
    A named, typed block-state attribute.

    Properties are classified from these attributes alone. `kind` is
    "boolean", "enum" or "integer"; a host may leave it None, in which case
    an EnumValuedProperty is an enum and an all-bool or all-int domain is a
    boolean or integer property. `default` None means the first legal value.
    """

    name: str
    kind: Optional[str]
    default: Any

    @property
    def possible_values(self) -> Sequence[Any]:
        """Ordered legal values; the first one is the conventional default."""
        ...


class EnumValuedProperty(Property, Protocol):
    """Enum property; its legal values are constants of `value_class`."""

    value_class: type


class StateDefinition(Protocol):
    @property
    def properties(self) -> Sequence[Property]:
        ...


class BlockState(Protocol):
    """Concrete assignment of values to a block's state properties."""

    def items(self) -> Iterable[tuple[Property, Any]]:
        ...

    def get_value(self, prop: Property) -> Any:
        ...


class Block(Protocol):
    @property
    def state_definition(self) -> StateDefinition:
        ...

    def default_state(self) -> BlockState:
        ...


class Item(Protocol):
    category: Optional[str]
    rarity: Any
    max_stack_size: int
    max_damage: int
    fire_resistant: bool
    crafting_remainder: Optional["Item"]


class EntityType(Protocol):
    entity_class: type
    category: Any
    immune_to: Iterable[Block]
    can_serialize: bool
    can_summon: bool
    fire_immune: bool
    can_spawn_far_from_player: bool
    client_tracking_range: int
    width: float
    height: float


class PacketProtocol(Protocol):
    """One connection phase (handshake, play, status, login, ...)."""

    name: str

    def packets_by_id(self, flow: Any) -> Mapping[int, type]:
        """Return registered packet classes for a flow, keyed by numeric id."""
        ...


class HostRuntime(Protocol):
    """
    Everything the exporter reads from a bootstrapped host.

    `entity_types` is optional: hosts that do not expose an entity-type
    registry leave it as None and the entity passes are skipped.
    """

    blocks: Registry[Block]
    items: Registry[Item]
    entity_types: Optional[Registry[EntityType]]
    block_state_properties: Mapping[str, Property]
    protocols: Sequence[PacketProtocol]
    packet_flows: Sequence[Any]

    base_block: type
    base_item: type
    base_entity: type

    def declared_properties(self, block_class: type) -> Mapping[str, Property]:
        """Return the state properties a block class declares itself (field -> property)."""
        ...
