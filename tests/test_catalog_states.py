# tests/test_catalog_states.py
"""
Tests for catalog.states.diff_defaults.
"""

from __future__ import annotations

from enum import Enum

import pytest

from catalog.errors import UnknownPropertyKindError
from catalog.properties import PropertyTable
from catalog.states import diff_defaults
from host.model import BlockState, BooleanProperty, EnumProperty, IntegerProperty, Property


class Half(Enum):
    UPPER = 1
    LOWER = 2


LIT = BooleanProperty("lit")
HALF = EnumProperty("half", Half)
AGE = IntegerProperty("age", minimum=0, maximum=7)


@pytest.fixture
def table() -> PropertyTable:
    return PropertyTable.from_mapping({"lit": LIT, "half": HALF, "age": AGE})


def test_default_boolean_is_suppressed(table):
    assert diff_defaults(BlockState({LIT: False}), table) == {}


def test_non_default_boolean_is_emitted(table):
    assert diff_defaults(BlockState({LIT: True}), table) == {"lit": True}


def test_values_are_rendered_per_kind(table):
    state = BlockState({LIT: True, HALF: Half.LOWER, AGE: 5})

    result = diff_defaults(state, table)

    assert result == {"lit": True, "half": "LOWER", "age": 5}
    assert list(result) == ["lit", "half", "age"]


def test_only_deviating_properties_are_kept(table):
    state = BlockState({LIT: False, HALF: Half.LOWER, AGE: 0})

    assert diff_defaults(state, table) == {"half": "LOWER"}


def test_explicit_property_default_is_the_baseline():
    open_door = BooleanProperty("open", default=True)
    table = PropertyTable.from_mapping({"open": open_door})

    assert diff_defaults(BlockState({open_door: True}), table) == {}
    assert diff_defaults(BlockState({open_door: False}), table) == {"open": False}


def test_unregistered_property_falls_back_to_its_own_name(table):
    extra = IntegerProperty("power", minimum=0, maximum=15)

    assert diff_defaults(BlockState({extra: 9}), table) == {"power": 9}


def test_unknown_kind_in_state_is_fatal(table):
    class OddProperty(Property):
        pass

    odd = OddProperty("odd", ["a", "b"])

    with pytest.raises(UnknownPropertyKindError):
        diff_defaults(BlockState({odd: "b"}), table)
