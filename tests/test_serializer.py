from __future__ import annotations

import json

import pytest

from blockstategen import blocks
from blockstategen.assignments import ModelAssignment, ModelAssignmentGroup
from blockstategen.errors import IncompleteStateSpaceError
from blockstategen.multipart import MultipartAssembler, when
from blockstategen.properties import AXIS, NORTH, Axis
from blockstategen.serializer import dumps, serialize, serialize_variants
from blockstategen.variants import VariantAssembler, VariantTable
from conftest import model


def test_single_assignment_serializes_as_object():
    block = blocks.simple_block("testmod:stone")
    assembler = VariantAssembler(block)
    assembler.set_models(assembler.partial_state(), model("stone"))

    assert serialize(assembler.assemble()) == {"variants": {"": {"model": "testmod:block/stone"}}}


def test_weighted_options_serialize_as_array():
    block = blocks.simple_block("testmod:grass")
    assembler = VariantAssembler(block)
    assembler.set_models(
        assembler.partial_state(),
        [ModelAssignment(model=model("grass"), weight=3), ModelAssignment(model=model("grass"), y=90)],
    )

    assert serialize(assembler.assemble()) == {
        "variants": {
            "": [
                {"model": "testmod:block/grass", "weight": 3},
                {"model": "testmod:block/grass", "y": 90},
            ]
        }
    }


def test_serializing_incomplete_table_fails():
    block = blocks.pillar_block("testmod:oak_log")
    partial = block.partial_state().where(AXIS, Axis.Y).build()
    table = VariantTable(block, ((partial, ModelAssignmentGroup.coerce(model("log"))),))

    with pytest.raises(IncompleteStateSpaceError):
        serialize_variants(table)


def test_multipart_serialization_keeps_part_order():
    block = blocks.fence_block("testmod:oak_fence")
    assembler = MultipartAssembler(block)
    assembler.part(model("post"))
    assembler.part(ModelAssignment(model=model("side"), uvlock=True), when(NORTH, True))

    assert serialize(assembler.assemble()) == {
        "multipart": [
            {"apply": {"model": "testmod:block/post"}},
            {"apply": {"model": "testmod:block/side", "uvlock": True}, "when": {"north": "true"}},
        ]
    }


def test_dumps_is_pretty_by_default_and_compact_on_zero_indent():
    document = {"variants": {"": {"model": "testmod:block/stone"}}}

    pretty = dumps(document)
    compact = dumps(document, indent=0)

    assert pretty.endswith("}\n")
    assert pretty.count("\n") > 1
    assert compact.count("\n") == 1
    assert json.loads(pretty) == json.loads(compact) == document
