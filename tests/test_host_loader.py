# tests/test_host_loader.py
"""
Tests for host.loader content packs.

Keeps tests hermetic by writing small packs into tmp_path.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from catalog.hierarchy import full_class_name, parent_type, simple_name
from exporter.pipeline import CatalogExporter
from host.loader import build_host, load_content_pack
from host.model import Block, BooleanProperty, EnumProperty, IntegerProperty, PacketFlow


PACK_YAML = """
namespace: mod

enums:
  Direction: [NORTH, SOUTH, WEST, EAST]
  "ChestBlock.ChestType": [SINGLE, LEFT, RIGHT]

block_state_properties:
  lit: {name: lit, type: boolean}
  FACING: {name: facing, type: enum, class: Direction, values: [NORTH, EAST]}
  CHEST_TYPE: {name: type, type: enum, class: ChestBlock.ChestType}
  AGE: {name: age, type: integer, values: [2, 4, 1, 3]}

classes:
  blocks:
    Furnace: {extends: BaseBlock}
    BaseBlock: {}
    ChestBlock: {properties: {TYPE: CHEST_TYPE, FACING: FACING}}
  items:
    BucketItem: {}
  entities:
    Zombie: {}
  packets:
    "ServerboundMovePlayerPacket.Pos": {}
    ClientIntentionPacket: {}

blocks:
  furnace:
    class: Furnace
    properties: [lit]
    default_state: {lit: true}
  chest:
    class: ChestBlock
    default_state: {FACING: EAST}

items:
  water_bucket: {class: BucketItem, max_stack_size: 1, crafting_remainder: bucket}
  bucket: {class: BucketItem, max_stack_size: 16}
  nether_star: {rarity: uncommon, fire_resistant: true}

entity_types:
  zombie: {class: Zombie, category: monster, immune_to: [furnace], height: 1.95}

protocols:
  handshaking:
    serverbound: [ClientIntentionPacket]
  play:
    serverbound: ["ServerboundMovePlayerPacket.Pos"]
"""


def _write_pack(tmp_path: Path, text: str = PACK_YAML) -> Path:
    path = tmp_path / "pack.yaml"
    path.write_text(text.lstrip(), encoding="utf-8")
    return path


def test_load_content_pack_builds_registries(tmp_path):
    host = load_content_pack(_write_pack(tmp_path))

    assert host.blocks.keys() == ["mod:furnace", "mod:chest"]
    assert host.items.keys() == ["mod:water_bucket", "mod:bucket", "mod:nether_star"]
    assert host.entity_types is not None
    assert host.entity_types.keys() == ["mod:zombie"]

    props = host.block_state_properties
    assert isinstance(props["lit"], BooleanProperty)
    assert isinstance(props["FACING"], EnumProperty)
    assert isinstance(props["AGE"], IntegerProperty)
    assert props["AGE"].possible_values == (2, 4, 1, 3)


def test_classes_are_created_parent_first_with_nested_names(tmp_path):
    host = load_content_pack(_write_pack(tmp_path))

    furnace = host.blocks.get("furnace")
    furnace_class = type(furnace)
    assert simple_name(furnace_class) == "Furnace"
    assert simple_name(parent_type(furnace_class, Block)) == "BaseBlock"
    assert parent_type(parent_type(furnace_class, Block), Block) is Block

    chest_type = host.block_state_properties["CHEST_TYPE"].value_class
    assert full_class_name(chest_type) == "ChestBlock.ChestType"
    assert [c.name for c in chest_type] == ["SINGLE", "LEFT", "RIGHT"]

    play = host.protocols[1]
    (packet,) = play.packets_by_id(PacketFlow.SERVERBOUND).values()
    assert full_class_name(packet) == "ServerboundMovePlayerPacket.Pos"


def test_block_states_and_declared_properties(tmp_path):
    host = load_content_pack(_write_pack(tmp_path))
    props = host.block_state_properties

    chest = host.blocks.get("chest")
    assert chest.state_definition.properties == (props["CHEST_TYPE"], props["FACING"])
    assert chest.default_state().get_value(props["FACING"]).name == "EAST"
    assert host.declared_properties(type(chest)) == {"TYPE": props["CHEST_TYPE"], "FACING": props["FACING"]}

    furnace = host.blocks.get("furnace")
    assert furnace.default_state().get_value(props["lit"]) is True


def test_items_resolve_remainders_declared_later(tmp_path):
    host = load_content_pack(_write_pack(tmp_path))

    water_bucket = host.items.get("water_bucket")
    assert water_bucket.crafting_remainder is host.items.get("bucket")
    assert host.items.get("nether_star").rarity.name == "UNCOMMON"


def test_pack_without_entity_types_has_no_entity_registry():
    host = build_host({"namespace": "mod", "blocks": {"stone": {}}})

    assert host.entity_types is None
    assert host.blocks.keys() == ["mod:stone"]


def test_loaded_pack_exports_end_to_end(tmp_path):
    host = load_content_pack(_write_pack(tmp_path))

    document = CatalogExporter(host).run()

    assert document["blocks"][0] == {
        "name": "mod:furnace",
        "class": "Furnace",
        "properties": ["lit"],
        "defaultState": {"lit": True},
    }
    assert document["blockClasses"] == [
        {"name": "BaseBlock"},
        {"name": "Furnace", "extends": "BaseBlock"},
        {"name": "ChestBlock", "properties": {"TYPE": "CHEST_TYPE", "FACING": "FACING"}},
    ]
    assert document["blockStateProperties"]["AGE"] == {"name": "age", "type": "integer", "min": 1, "max": 4}
    assert document["entityTypes"][0]["immuneTo"] == ["mod:furnace"]
    assert [e["name"] for e in document["enumClasses"]] == ["Direction", "ChestBlock.ChestType"]


@pytest.mark.parametrize(
    "pack, message",
    [
        ({"classes": {"blocks": {"A": {"extends": "B"}, "B": {"extends": "A"}}}}, "cycle"),
        ({"classes": {"blocks": {"A": {"extends": "Missing"}}}}, "unknown class"),
        ({"blocks": {"stone": {"class": "Nope"}}}, "unknown class"),
        ({"block_state_properties": {"X": {"type": "float"}}}, "unsupported type"),
        ({"block_state_properties": {"X": {"type": "enum", "class": "Nope"}}}, "unknown enum"),
        ({"items": {"a": {"crafting_remainder": "missing"}}}, "crafting_remainder"),
        (
            {
                "block_state_properties": {"lit": {"type": "boolean"}},
                "blocks": {"lamp": {"properties": ["lit"], "default_state": {"lit": "yes"}}},
            },
            "expects a boolean",
        ),
    ],
)
def test_invalid_packs_raise_value_error(pack, message):
    with pytest.raises(ValueError, match=message):
        build_host(pack)


def test_non_mapping_pack_is_rejected(tmp_path):
    path = _write_pack(tmp_path, "- just\n- a list\n")

    with pytest.raises(ValueError):
        load_content_pack(path)
