"""Block state properties, state combinations and partial state matchers."""

from __future__ import annotations

import itertools
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Tuple, Union

from .errors import UnknownPropertyError

PROPERTY_NAME_RE = re.compile(r"^[a-z0-9_]+$")
BLOCK_ID_RE = re.compile(r"^(?P<namespace>[a-z0-9_.-]+):(?P<path>[a-z0-9_./-]+)$")


class Axis(Enum):
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def is_horizontal(self) -> bool:
        return self is not Axis.Y


class Direction(Enum):
    DOWN = "down"
    UP = "up"
    NORTH = "north"
    SOUTH = "south"
    WEST = "west"
    EAST = "east"

    @property
    def axis(self) -> Axis:
        return _DIRECTION_AXIS[self]

    @property
    def is_horizontal(self) -> bool:
        return self.axis.is_horizontal

    @property
    def angle(self) -> int:
        """Compass angle in degrees, north=0 turning clockwise."""
        try:
            return _COMPASS_ANGLE[self]
        except KeyError:
            raise ValueError(f"{self.value} has no horizontal angle") from None

    def clockwise(self) -> "Direction":
        try:
            return _CLOCKWISE[self]
        except KeyError:
            raise ValueError(f"cannot rotate {self.value} around the Y axis") from None


_DIRECTION_AXIS = {
    Direction.DOWN: Axis.Y,
    Direction.UP: Axis.Y,
    Direction.NORTH: Axis.Z,
    Direction.SOUTH: Axis.Z,
    Direction.WEST: Axis.X,
    Direction.EAST: Axis.X,
}
_COMPASS_ANGLE = {
    Direction.NORTH: 0,
    Direction.EAST: 90,
    Direction.SOUTH: 180,
    Direction.WEST: 270,
}
_CLOCKWISE = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}
HORIZONTAL_DIRECTIONS = (Direction.NORTH, Direction.EAST, Direction.SOUTH, Direction.WEST)


class AttachFace(Enum):
    FLOOR = "floor"
    WALL = "wall"
    CEILING = "ceiling"

    @property
    def index(self) -> int:
        return list(AttachFace).index(self)


class Half(Enum):
    TOP = "top"
    BOTTOM = "bottom"


class DoubleBlockHalf(Enum):
    UPPER = "upper"
    LOWER = "lower"


class StairsShape(Enum):
    STRAIGHT = "straight"
    INNER_LEFT = "inner_left"
    INNER_RIGHT = "inner_right"
    OUTER_LEFT = "outer_left"
    OUTER_RIGHT = "outer_right"

    @property
    def is_left(self) -> bool:
        return self in (StairsShape.INNER_LEFT, StairsShape.OUTER_LEFT)

    @property
    def is_inner(self) -> bool:
        return self in (StairsShape.INNER_LEFT, StairsShape.INNER_RIGHT)


class SlabType(Enum):
    TOP = "top"
    BOTTOM = "bottom"
    DOUBLE = "double"


class DoorHingeSide(Enum):
    LEFT = "left"
    RIGHT = "right"


def value_name(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


@dataclass(frozen=True)
class Property:
    name: str
    values: Tuple[Any, ...]
    _by_name: Dict[str, Any] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not PROPERTY_NAME_RE.match(self.name):
            raise ValueError(f"invalid property name: {self.name!r}")
        values = tuple(self.values)
        if not values:
            raise ValueError(f"property {self.name!r} has an empty domain")
        by_name = {value_name(value): value for value in values}
        if len(by_name) != len(values):
            raise ValueError(f"property {self.name!r} has duplicate values")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "_by_name", by_name)

    def coerce(self, value: Any) -> Any:
        """Return the domain member matching ``value`` (a member or its name)."""
        member = self._by_name.get(value_name(value))
        if member is None or (not isinstance(value, str) and member != value):
            raise UnknownPropertyError(f"{value!r} is not a value of property {self.name!r}")
        return member

    def value_name(self, value: Any) -> str:
        return value_name(self.coerce(value))

    def __str__(self) -> str:
        return self.name


def boolean_property(name: str) -> Property:
    return Property(name, (True, False))


def enum_property(name: str, enum_cls: type[Enum], allowed: Iterable[Enum] | None = None) -> Property:
    return Property(name, tuple(allowed) if allowed is not None else tuple(enum_cls))


AXIS = enum_property("axis", Axis)
FACING = enum_property("facing", Direction)
HORIZONTAL_FACING = enum_property("facing", Direction, HORIZONTAL_DIRECTIONS)
FACE = enum_property("face", AttachFace)
HALF = enum_property("half", Half)
DOUBLE_BLOCK_HALF = enum_property("half", DoubleBlockHalf)
STAIRS_SHAPE = enum_property("shape", StairsShape)
SLAB_TYPE = enum_property("type", SlabType)
DOOR_HINGE = enum_property("hinge", DoorHingeSide)
OPEN = boolean_property("open")
POWERED = boolean_property("powered")
WATERLOGGED = boolean_property("waterlogged")
IN_WALL = boolean_property("in_wall")
DOWN = boolean_property("down")
UP = boolean_property("up")
NORTH = boolean_property("north")
SOUTH = boolean_property("south")
WEST = boolean_property("west")
EAST = boolean_property("east")

FACING_TO_PROPERTY = {
    Direction.DOWN: DOWN,
    Direction.UP: UP,
    Direction.NORTH: NORTH,
    Direction.SOUTH: SOUTH,
    Direction.WEST: WEST,
    Direction.EAST: EAST,
}

PropertyLike = Union[Property, str]


def _prop_name(prop: PropertyLike) -> str:
    return prop.name if isinstance(prop, Property) else prop


@dataclass(frozen=True)
class Block:
    location: str
    properties: Tuple[Property, ...] = ()

    def __post_init__(self) -> None:
        if not BLOCK_ID_RE.match(self.location):
            raise ValueError(f"invalid block id: {self.location!r}")
        properties = tuple(self.properties)
        names = [prop.name for prop in properties]
        if len(set(names)) != len(names):
            raise ValueError(f"{self.location}: duplicate property names in {names}")
        object.__setattr__(self, "properties", properties)

    @property
    def namespace(self) -> str:
        return self.location.split(":", 1)[0]

    @property
    def path(self) -> str:
        return self.location.split(":", 1)[1]

    @property
    def state_count(self) -> int:
        count = 1
        for prop in self.properties:
            count *= len(prop.values)
        return count

    def has_property(self, prop: PropertyLike) -> bool:
        name = _prop_name(prop)
        return any(p.name == name for p in self.properties)

    def property(self, prop: PropertyLike) -> Property:
        name = _prop_name(prop)
        for candidate in self.properties:
            if candidate.name == name:
                if isinstance(prop, Property) and prop != candidate:
                    raise UnknownPropertyError(f"{self.location}: property {name!r} has a different domain")
                return candidate
        raise UnknownPropertyError(f"{self.location} has no property {name!r}")

    def index_of(self, prop: PropertyLike) -> int:
        return self.properties.index(self.property(prop))

    def state_space(self) -> Iterator["StateCombination"]:
        for values in itertools.product(*(prop.values for prop in self.properties)):
            yield StateCombination(self, values)

    def state(self, **values: Any) -> "StateCombination":
        unknown = set(values) - {prop.name for prop in self.properties}
        if unknown:
            raise UnknownPropertyError(f"{self.location} has no properties {sorted(unknown)}")
        resolved = []
        for prop in self.properties:
            if prop.name not in values:
                raise UnknownPropertyError(f"{self.location}: missing value for {prop.name!r}")
            resolved.append(prop.coerce(values[prop.name]))
        return StateCombination(self, tuple(resolved))

    def partial_state(self) -> "PartialStateBuilder":
        return PartialStateBuilder(self)

    def __str__(self) -> str:
        return self.location


@dataclass(frozen=True)
class StateCombination:
    block: Block
    values: Tuple[Any, ...]

    def __getitem__(self, prop: PropertyLike) -> Any:
        return self.values[self.block.index_of(prop)]

    def items(self) -> Iterator[Tuple[Property, Any]]:
        return zip(self.block.properties, self.values)

    def project(self, excluding: Iterable[PropertyLike] = ()) -> "PartialState":
        excluded = {_prop_name(prop) for prop in excluding}
        builder = PartialStateBuilder(self.block)
        for prop, value in self.items():
            if prop.name not in excluded:
                builder = builder.where(prop, value)
        return builder.build()

    def key(self) -> str:
        return str(self.project())

    def __str__(self) -> str:
        return f"{self.block}[{self.key()}]"


@dataclass(frozen=True)
class PartialState:
    """Constraints on a subset of a block's properties; the rest are wildcards."""

    block: Block
    constraints: Tuple[Tuple[Property, Any], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "constraints", tuple(sorted(self.constraints, key=lambda item: item[0].name)))

    def matches(self, state: StateCombination) -> bool:
        if state.block != self.block:
            return False
        return all(state[prop] == value for prop, value in self.constraints)

    def is_disjoint(self, other: "PartialState") -> bool:
        mine = {prop.name: value for prop, value in self.constraints}
        for prop, value in other.constraints:
            if prop.name in mine and mine[prop.name] != value:
                return True
        return False

    def states(self) -> Iterator[StateCombination]:
        fixed = {prop.name: value for prop, value in self.constraints}
        domains = [(fixed[prop.name],) if prop.name in fixed else prop.values for prop in self.block.properties]
        return (StateCombination(self.block, values) for values in itertools.product(*domains))

    def __str__(self) -> str:
        return ",".join(f"{prop.name}={prop.value_name(value)}" for prop, value in self.constraints)


@dataclass(frozen=True)
class PartialStateBuilder:
    block: Block
    constraints: Tuple[Tuple[Property, Any], ...] = ()

    def where(self, prop: PropertyLike, value: Any) -> "PartialStateBuilder":
        resolved = self.block.property(prop)
        member = resolved.coerce(value)
        for existing, _ in self.constraints:
            if existing.name == resolved.name:
                raise ValueError(f"{self.block}: property {resolved.name!r} is already constrained")
        return PartialStateBuilder(self.block, self.constraints + ((resolved, member),))

    def build(self) -> PartialState:
        return PartialState(self.block, self.constraints)
