# host package
# src/host/__init__.py

"""
In-process game host: content model, YAML content packs, bootstrap.
"""

from .bootstrap import bootstrap_host
from .loader import build_host, load_content_pack
from .model import (
    Block,
    BlockState,
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

__all__ = [
    "bootstrap_host",
    "build_host",
    "load_content_pack",
    "Block",
    "BlockState",
    "BooleanProperty",
    "Entity",
    "EntityType",
    "EnumProperty",
    "GameHost",
    "IntegerProperty",
    "Item",
    "MobCategory",
    "Packet",
    "PacketFlow",
    "PacketProtocol",
    "Property",
    "Rarity",
    "Registry",
]
