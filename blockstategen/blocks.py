"""Property sets of the standard block families."""

from __future__ import annotations

from .properties import (
    AXIS,
    DOOR_HINGE,
    DOUBLE_BLOCK_HALF,
    EAST,
    FACE,
    FACING,
    HALF,
    HORIZONTAL_FACING,
    IN_WALL,
    NORTH,
    OPEN,
    POWERED,
    SLAB_TYPE,
    SOUTH,
    STAIRS_SHAPE,
    UP,
    WATERLOGGED,
    WEST,
    Block,
)

STAIRS_PROPERTIES = (HORIZONTAL_FACING, HALF, STAIRS_SHAPE, WATERLOGGED)
SLAB_PROPERTIES = (SLAB_TYPE, WATERLOGGED)
DOOR_PROPERTIES = (HORIZONTAL_FACING, DOUBLE_BLOCK_HALF, DOOR_HINGE, OPEN, POWERED)
TRAPDOOR_PROPERTIES = (HORIZONTAL_FACING, HALF, OPEN, POWERED, WATERLOGGED)
FENCE_GATE_PROPERTIES = (HORIZONTAL_FACING, IN_WALL, OPEN, POWERED)
FOUR_WAY_PROPERTIES = (NORTH, EAST, SOUTH, WEST, WATERLOGGED)
WALL_PROPERTIES = (UP, NORTH, EAST, SOUTH, WEST, WATERLOGGED)


def simple_block(location: str) -> Block:
    return Block(location)


def pillar_block(location: str) -> Block:
    return Block(location, (AXIS,))


def horizontal_block(location: str) -> Block:
    return Block(location, (HORIZONTAL_FACING,))


def face_attached_block(location: str) -> Block:
    return Block(location, (FACE, HORIZONTAL_FACING, POWERED))


def directional_block(location: str) -> Block:
    return Block(location, (FACING,))


def stairs_block(location: str) -> Block:
    return Block(location, STAIRS_PROPERTIES)


def slab_block(location: str) -> Block:
    return Block(location, SLAB_PROPERTIES)


def door_block(location: str) -> Block:
    return Block(location, DOOR_PROPERTIES)


def trapdoor_block(location: str) -> Block:
    return Block(location, TRAPDOOR_PROPERTIES)


def fence_gate_block(location: str) -> Block:
    return Block(location, FENCE_GATE_PROPERTIES)


def fence_block(location: str) -> Block:
    return Block(location, FOUR_WAY_PROPERTIES)


def pane_block(location: str) -> Block:
    return Block(location, FOUR_WAY_PROPERTIES)


def wall_block(location: str) -> Block:
    return Block(location, WALL_PROPERTIES)
