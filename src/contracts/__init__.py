# contracts package
# src/contracts/__init__.py

"""
Interfaces the exporter expects from a game host.
"""

from .host import (
    Block,
    BlockState,
    EntityType,
    EnumValuedProperty,
    HostRuntime,
    Item,
    PacketProtocol,
    Property,
    Registry,
    StateDefinition,
)

__all__ = [
    "Block",
    "BlockState",
    "EntityType",
    "EnumValuedProperty",
    "HostRuntime",
    "Item",
    "PacketProtocol",
    "Property",
    "Registry",
    "StateDefinition",
]
