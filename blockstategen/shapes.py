"""Registration helpers binding the shape families to a registry."""

from __future__ import annotations

from .assignments import AssignmentLike, ModelAssignment, ModelAssignmentGroup, ModelRef
from .multipart import MultipartAssembler, when
from .properties import AXIS, FACING_TO_PROPERTY, SLAB_TYPE, Axis, Block, Direction, SlabType
from .registry import BlockStateRegistry
from .rules import (
    DEFAULT_ANGLE_OFFSET,
    AxisRule,
    DirectionalRule,
    DoorRule,
    FenceGateRule,
    HorizontalFaceRule,
    HorizontalRule,
    ModelSource,
    ShapeRule,
    SlabRule,
    StairsRule,
    TrapdoorRule,
)
from .variants import VariantAssembler

_NO_SIDE_YAW = {Direction.SOUTH: 90, Direction.WEST: 270}


def apply_rule(registry: BlockStateRegistry, block: Block, rule: ShapeRule) -> VariantAssembler:
    return registry.variants(block).for_all(rule.assign, excluding=rule.excluded)


def simple_block(registry: BlockStateRegistry, block: Block, *assignments: AssignmentLike) -> VariantAssembler:
    group = ModelAssignmentGroup(*(item for models in assignments for item in ModelAssignmentGroup.coerce(models)))
    assembler = registry.variants(block)
    return assembler.set_models(assembler.partial_state(), group)


def axis_block(registry: BlockStateRegistry, block: Block, model: ModelRef) -> VariantAssembler:
    rule = AxisRule(model)
    assembler = registry.variants(block)
    for axis in (Axis.Y, Axis.Z, Axis.X):
        assembler.set_models(assembler.partial_state().where(AXIS, axis), rule.for_axis(axis))
    return assembler


def horizontal_block(
    registry: BlockStateRegistry, block: Block, model: ModelSource, angle_offset: int = DEFAULT_ANGLE_OFFSET
) -> VariantAssembler:
    return apply_rule(registry, block, HorizontalRule(model, angle_offset))


def horizontal_face_block(
    registry: BlockStateRegistry, block: Block, model: ModelSource, angle_offset: int = DEFAULT_ANGLE_OFFSET
) -> VariantAssembler:
    return apply_rule(registry, block, HorizontalFaceRule(model, angle_offset))


def directional_block(
    registry: BlockStateRegistry, block: Block, model: ModelSource, angle_offset: int = DEFAULT_ANGLE_OFFSET
) -> VariantAssembler:
    return apply_rule(registry, block, DirectionalRule(model, angle_offset))


def stairs_block(
    registry: BlockStateRegistry, block: Block, straight: ModelRef, inner: ModelRef, outer: ModelRef
) -> VariantAssembler:
    return apply_rule(registry, block, StairsRule(straight, inner, outer))


def slab_block(
    registry: BlockStateRegistry, block: Block, bottom: ModelRef, top: ModelRef, double: ModelRef
) -> VariantAssembler:
    rule = SlabRule(bottom, top, double)
    assembler = registry.variants(block)
    for slab_type in (SlabType.BOTTOM, SlabType.TOP, SlabType.DOUBLE):
        assembler.set_models(assembler.partial_state().where(SLAB_TYPE, slab_type), rule.for_type(slab_type))
    return assembler


def fence_gate_block(
    registry: BlockStateRegistry,
    block: Block,
    gate: ModelRef,
    gate_open: ModelRef,
    wall: ModelRef,
    wall_open: ModelRef,
) -> VariantAssembler:
    return apply_rule(registry, block, FenceGateRule(gate, gate_open, wall, wall_open))


def door_block(
    registry: BlockStateRegistry,
    block: Block,
    bottom_left: ModelRef,
    bottom_right: ModelRef,
    top_left: ModelRef,
    top_right: ModelRef,
) -> VariantAssembler:
    return apply_rule(registry, block, DoorRule(bottom_left, bottom_right, top_left, top_right))


def trapdoor_block(
    registry: BlockStateRegistry,
    block: Block,
    bottom: ModelRef,
    top: ModelRef,
    opened: ModelRef,
    orientable: bool = False,
) -> VariantAssembler:
    return apply_rule(registry, block, TrapdoorRule(bottom, top, opened, orientable))


def four_way_multipart(assembler: MultipartAssembler, side: ModelRef) -> MultipartAssembler:
    return assembler.for_all_directions(
        lambda direction: ModelAssignment(model=side, y=(direction.angle + 180) % 360, uvlock=True)
    )


def four_way_block(registry: BlockStateRegistry, block: Block, post: ModelRef, side: ModelRef) -> MultipartAssembler:
    return four_way_multipart(registry.multipart(block).part(post), side)


def fence_block(registry: BlockStateRegistry, block: Block, post: ModelRef, side: ModelRef) -> MultipartAssembler:
    return four_way_block(registry, block, post, side)


def wall_block(registry: BlockStateRegistry, block: Block, post: ModelRef, side: ModelRef) -> MultipartAssembler:
    return four_way_block(registry, block, post, side)


def pane_block(
    registry: BlockStateRegistry,
    block: Block,
    post: ModelRef,
    side: ModelRef,
    side_alt: ModelRef,
    no_side: ModelRef,
    no_side_alt: ModelRef,
) -> MultipartAssembler:
    assembler = registry.multipart(block).part(post)
    for direction, prop in FACING_TO_PROPERTY.items():
        if not direction.is_horizontal:
            continue
        # alternate models keep the glass texture from repeating across a seam
        connected = ModelAssignment(
            model=side_alt if direction in (Direction.SOUTH, Direction.WEST) else side,
            y=90 if direction.axis is Axis.X else 0,
        )
        unconnected = ModelAssignment(
            model=no_side_alt if direction in (Direction.SOUTH, Direction.EAST) else no_side,
            y=_NO_SIDE_YAW.get(direction, 0),
        )
        assembler.part(connected, when(prop, True)).part(unconnected, when(prop, False))
    return assembler
