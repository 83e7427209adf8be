"""Per-family rules mapping a block state to its oriented model assignments.

Angles are compass angles (north=0, clockwise). Each rule lists the
properties that never change the drawn model in ``excluded``; properties
named there but absent from a block are ignored by the assembler.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, ClassVar, Tuple, Union

from .assignments import ModelAssignment, ModelAssignmentGroup, ModelRef
from .properties import (
    AXIS,
    DOOR_HINGE,
    DOUBLE_BLOCK_HALF,
    FACE,
    FACING,
    HALF,
    HORIZONTAL_FACING,
    IN_WALL,
    OPEN,
    SLAB_TYPE,
    STAIRS_SHAPE,
    AttachFace,
    Axis,
    Direction,
    DoorHingeSide,
    DoubleBlockHalf,
    Half,
    SlabType,
    StairsShape,
    StateCombination,
)

DEFAULT_ANGLE_OFFSET = 180

ModelSource = Union[ModelRef, Callable[[StateCombination], ModelRef]]


def _resolve_model(source: ModelSource, state: StateCombination) -> ModelRef:
    if isinstance(source, ModelRef):
        return source
    return source(state)


def _single(model: ModelRef, x: int = 0, y: int = 0, uvlock: bool = False) -> ModelAssignmentGroup:
    return ModelAssignmentGroup(ModelAssignment(model=model, x=x, y=y, uvlock=uvlock))


class ShapeRule:
    excluded: ClassVar[Tuple[str, ...]] = ()

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        raise NotImplementedError


@dataclass(frozen=True)
class AxisRule(ShapeRule):
    """One model shared by all three axes; only the rotation differs."""

    model: ModelRef

    def for_axis(self, axis: Axis) -> ModelAssignmentGroup:
        if axis is Axis.Y:
            return _single(self.model)
        if axis is Axis.Z:
            return _single(self.model, x=90)
        return _single(self.model, x=90, y=90)

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        return self.for_axis(state[AXIS])


@dataclass(frozen=True)
class HorizontalRule(ShapeRule):
    model: ModelSource
    angle_offset: int = DEFAULT_ANGLE_OFFSET

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        facing: Direction = state[HORIZONTAL_FACING]
        return _single(_resolve_model(self.model, state), y=(facing.angle + self.angle_offset) % 360)


@dataclass(frozen=True)
class HorizontalFaceRule(ShapeRule):
    """Buttons, levers and other blocks mounted on a floor, wall or ceiling."""

    model: ModelSource
    angle_offset: int = DEFAULT_ANGLE_OFFSET

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        face: AttachFace = state[FACE]
        facing: Direction = state[HORIZONTAL_FACING]
        y = facing.angle + self.angle_offset
        # models are authored floor-mounted
        if face is AttachFace.CEILING:
            y += 180
        return _single(_resolve_model(self.model, state), x=face.index * 90, y=y % 360)


@dataclass(frozen=True)
class DirectionalRule(ShapeRule):
    model: ModelSource
    angle_offset: int = DEFAULT_ANGLE_OFFSET

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        facing: Direction = state[FACING]
        if facing is Direction.DOWN:
            x = 180
        elif facing.is_horizontal:
            x = 90
        else:
            x = 0
        y = (facing.angle + self.angle_offset) % 360 if facing.is_horizontal else 0
        return _single(_resolve_model(self.model, state), x=x, y=y)


@dataclass(frozen=True)
class StairsRule(ShapeRule):
    excluded: ClassVar[Tuple[str, ...]] = ("powered", "waterlogged")

    straight: ModelRef
    inner: ModelRef
    outer: ModelRef

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        facing: Direction = state[HORIZONTAL_FACING]
        half: Half = state[HALF]
        shape: StairsShape = state[STAIRS_SHAPE]

        y = facing.angle
        # only right-handed corner models exist
        if shape.is_left:
            y += 270
        if shape is not StairsShape.STRAIGHT and half is Half.TOP:
            y += 90
        y %= 360

        if shape is StairsShape.STRAIGHT:
            model = self.straight
        elif shape.is_inner:
            model = self.inner
        else:
            model = self.outer
        return _single(
            model,
            x=180 if half is Half.TOP else 0,
            y=y,
            uvlock=y != 0 or half is Half.TOP,
        )


@dataclass(frozen=True)
class SlabRule(ShapeRule):
    bottom: ModelRef
    top: ModelRef
    double: ModelRef

    def for_type(self, slab_type: SlabType) -> ModelAssignmentGroup:
        if slab_type is SlabType.BOTTOM:
            return _single(self.bottom)
        if slab_type is SlabType.TOP:
            return _single(self.top)
        return _single(self.double)

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        return self.for_type(state[SLAB_TYPE])


@dataclass(frozen=True)
class FenceGateRule(ShapeRule):
    excluded: ClassVar[Tuple[str, ...]] = ("powered",)

    gate: ModelRef
    gate_open: ModelRef
    wall: ModelRef
    wall_open: ModelRef

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        if state[IN_WALL]:
            model = self.wall_open if state[OPEN] else self.wall
        else:
            model = self.gate_open if state[OPEN] else self.gate
        facing: Direction = state[HORIZONTAL_FACING]
        return _single(model, y=facing.angle, uvlock=True)


@dataclass(frozen=True)
class DoorRule(ShapeRule):
    excluded: ClassVar[Tuple[str, ...]] = ("powered",)

    bottom_left: ModelRef
    bottom_right: ModelRef
    top_left: ModelRef
    top_right: ModelRef

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        facing: Direction = state[HORIZONTAL_FACING]
        hinge_right = state[DOOR_HINGE] is DoorHingeSide.RIGHT
        is_open: bool = state[OPEN]
        # an open door swings onto the other hinge's footprint
        right = hinge_right != is_open

        y = facing.angle + 90
        if is_open:
            y += 90
        if hinge_right and is_open:
            y += 180

        if state[DOUBLE_BLOCK_HALF] is DoubleBlockHalf.LOWER:
            model = self.bottom_right if right else self.bottom_left
        else:
            model = self.top_right if right else self.top_left
        return _single(model, y=y % 360)


@dataclass(frozen=True)
class TrapdoorRule(ShapeRule):
    excluded: ClassVar[Tuple[str, ...]] = ("powered", "waterlogged")

    bottom: ModelRef
    top: ModelRef
    opened: ModelRef
    orientable: bool = False

    def assign(self, state: StateCombination) -> ModelAssignmentGroup:
        facing: Direction = state[HORIZONTAL_FACING]
        half: Half = state[HALF]
        is_open: bool = state[OPEN]

        x = 0
        y = facing.angle + 180
        if self.orientable and is_open and half is Half.TOP:
            x += 180
            y += 180
        if not self.orientable and not is_open:
            y = 0

        if is_open:
            model = self.opened
        else:
            model = self.top if half is Half.TOP else self.bottom
        return _single(model, x=x, y=y % 360)
