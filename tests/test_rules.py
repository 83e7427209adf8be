from __future__ import annotations

import pytest

from blockstategen import blocks
from blockstategen.assignments import QUARTER_TURNS
from blockstategen.properties import Axis, SlabType
from blockstategen.rules import (
    AxisRule,
    DirectionalRule,
    DoorRule,
    FenceGateRule,
    HorizontalFaceRule,
    HorizontalRule,
    SlabRule,
    StairsRule,
    TrapdoorRule,
)
from conftest import model

STAIRS = StairsRule(model("stairs"), model("stairs_inner"), model("stairs_outer"))
DOOR = DoorRule(model("door_bottom"), model("door_bottom_hinge"), model("door_top"), model("door_top_hinge"))
GATE = FenceGateRule(model("gate"), model("gate_open"), model("gate_wall"), model("gate_wall_open"))


def stairs_state(facing="north", half="bottom", shape="straight"):
    return blocks.stairs_block("testmod:oak_stairs").state(facing=facing, half=half, shape=shape, waterlogged=False)


def door_state(facing="north", half="lower", hinge="left", open=False):
    return blocks.door_block("testmod:oak_door").state(facing=facing, half=half, hinge=hinge, open=open, powered=False)


def trapdoor_state(facing="north", half="bottom", open=False):
    return blocks.trapdoor_block("testmod:oak_trapdoor").state(
        facing=facing, half=half, open=open, powered=False, waterlogged=False
    )


def test_stairs_straight_bottom_north_has_no_rotation():
    (assignment,) = STAIRS.assign(stairs_state())

    assert assignment.model == model("stairs")
    assert (assignment.x, assignment.y, assignment.uvlock) == (0, 0, False)


def test_stairs_left_shapes_reuse_right_models_turned_270():
    (assignment,) = STAIRS.assign(stairs_state(shape="inner_left"))

    assert assignment.model == model("stairs_inner")
    assert (assignment.x, assignment.y, assignment.uvlock) == (0, 270, True)


def test_stairs_top_half_is_flipped_and_uvlocked():
    (assignment,) = STAIRS.assign(stairs_state(half="top"))

    assert (assignment.x, assignment.y, assignment.uvlock) == (180, 0, True)


def test_stairs_top_corner_gets_extra_quarter_turn():
    (outer_left,) = STAIRS.assign(stairs_state(facing="east", half="top", shape="outer_left"))
    (outer_right,) = STAIRS.assign(stairs_state(facing="east", half="top", shape="outer_right"))

    assert outer_left.model == model("stairs_outer")
    assert outer_left.y == (90 + 270 + 90) % 360
    assert outer_right.y == 180


def test_stairs_ignore_waterlogged():
    assert StairsRule.excluded == ("powered", "waterlogged")


def test_door_closed_left_hinge():
    (assignment,) = DOOR.assign(door_state())

    assert assignment.model == model("door_bottom")
    assert (assignment.x, assignment.y) == (0, 90)


def test_door_opening_swaps_handedness():
    (lower,) = DOOR.assign(door_state(open=True))
    (upper,) = DOOR.assign(door_state(half="upper", open=True))

    assert lower.model == model("door_bottom_hinge")
    assert upper.model == model("door_top_hinge")
    assert lower.y == 180


def test_door_right_hinge_open_turns_back_to_left_models():
    (closed,) = DOOR.assign(door_state(hinge="right"))
    (opened,) = DOOR.assign(door_state(hinge="right", open=True))

    assert closed.model == model("door_bottom_hinge")
    assert closed.y == 90
    assert opened.model == model("door_bottom")
    assert opened.y == (0 + 90 + 90 + 180) % 360


def test_orientable_open_top_trapdoor_hangs_flipped():
    rule = TrapdoorRule(model("td_bottom"), model("td_top"), model("td_open"), orientable=True)
    (assignment,) = rule.assign(trapdoor_state(facing="east", half="top", open=True))

    assert assignment.model == model("td_open")
    assert assignment.x == 180
    assert assignment.y == (90 + 180 + 180) % 360


def test_plain_closed_trapdoor_drops_rotation():
    rule = TrapdoorRule(model("td_bottom"), model("td_top"), model("td_open"), orientable=False)
    (closed_top,) = rule.assign(trapdoor_state(facing="west", half="top"))
    (opened,) = rule.assign(trapdoor_state(facing="north", open=True))

    assert closed_top.model == model("td_top")
    assert (closed_top.x, closed_top.y) == (0, 0)
    assert opened.y == 180


def test_orientable_closed_trapdoor_keeps_rotation():
    rule = TrapdoorRule(model("td_bottom"), model("td_top"), model("td_open"), orientable=True)
    (assignment,) = rule.assign(trapdoor_state(facing="south"))

    assert assignment.model == model("td_bottom")
    assert assignment.y == 0


def test_axis_rule_shares_one_model():
    rule = AxisRule(model("log"))
    results = {axis: rule.for_axis(axis)[0] for axis in Axis}

    assert {a.model for a in results.values()} == {model("log")}
    assert (results[Axis.Y].x, results[Axis.Y].y) == (0, 0)
    assert (results[Axis.X].x, results[Axis.X].y) == (90, 90)
    assert (results[Axis.Z].x, results[Axis.Z].y) == (90, 0)


@pytest.mark.parametrize(
    "facing, offset, expected",
    [("north", 180, 180), ("east", 180, 270), ("south", 180, 0), ("west", 0, 270)],
)
def test_horizontal_rule_adds_offset(facing, offset, expected):
    block = blocks.horizontal_block("testmod:furnace")
    (assignment,) = HorizontalRule(model("furnace"), offset).assign(block.state(facing=facing))

    assert assignment.y == expected


def test_horizontal_rule_accepts_model_function():
    block = blocks.horizontal_block("testmod:furnace")
    rule = HorizontalRule(lambda state: model(f"furnace_{state['facing'].value}"))

    assert rule.assign(block.state(facing="west"))[0].model == model("furnace_west")


@pytest.mark.parametrize(
    "face, facing, expected",
    [("floor", "south", (0, 0)), ("wall", "east", (90, 270)), ("ceiling", "north", (180, 0))],
)
def test_face_attached_rule(face, facing, expected):
    block = blocks.face_attached_block("testmod:button")
    (assignment,) = HorizontalFaceRule(model("button")).assign(block.state(face=face, facing=facing, powered=False))

    assert (assignment.x, assignment.y) == expected


@pytest.mark.parametrize(
    "facing, expected",
    [("down", (180, 0)), ("up", (0, 0)), ("west", (90, 90)), ("north", (90, 180))],
)
def test_directional_rule(facing, expected):
    block = blocks.directional_block("testmod:dispenser")
    (assignment,) = DirectionalRule(model("dispenser")).assign(block.state(facing=facing))

    assert (assignment.x, assignment.y) == expected


@pytest.mark.parametrize(
    "in_wall, open, expected",
    [(False, False, "gate"), (False, True, "gate_open"), (True, False, "gate_wall"), (True, True, "gate_wall_open")],
)
def test_fence_gate_model_choice(in_wall, open, expected):
    block = blocks.fence_gate_block("testmod:oak_fence_gate")
    (assignment,) = GATE.assign(block.state(facing="east", in_wall=in_wall, open=open, powered=False))

    assert assignment.model == model(expected)
    assert assignment.y == 90
    assert assignment.uvlock is True


def test_slab_rule_maps_types_directly():
    rule = SlabRule(model("slab"), model("slab_top"), model("planks"))

    assert rule.for_type(SlabType.DOUBLE)[0].model == model("planks")
    assert rule.for_type(SlabType.TOP)[0].model == model("slab_top")
    assert (rule.for_type(SlabType.BOTTOM)[0].x, rule.for_type(SlabType.BOTTOM)[0].y) == (0, 0)


@pytest.mark.parametrize(
    "rule, block",
    [
        (STAIRS, blocks.stairs_block("testmod:oak_stairs")),
        (DOOR, blocks.door_block("testmod:oak_door")),
        (GATE, blocks.fence_gate_block("testmod:oak_fence_gate")),
        (TrapdoorRule(model("b"), model("t"), model("o"), True), blocks.trapdoor_block("testmod:oak_trapdoor")),
        (HorizontalFaceRule(model("button")), blocks.face_attached_block("testmod:button")),
        (DirectionalRule(model("dispenser"), 90), blocks.directional_block("testmod:dispenser")),
    ],
)
def test_every_rule_emits_quarter_turns_only(rule, block):
    for state in block.state_space():
        for assignment in rule.assign(state):
            assert assignment.x in QUARTER_TURNS
            assert assignment.y in QUARTER_TURNS
