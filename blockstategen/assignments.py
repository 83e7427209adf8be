from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Iterable, Iterator, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import EmptyModelGroupError, UndeclaredModelError

MODEL_LOCATION_RE = re.compile(r"^(?:[a-z0-9_.-]+:)?[a-z0-9_./-]+$")
QUARTER_TURNS = (0, 90, 180, 270)


class ModelRef(BaseModel):
    """Handle on a model owned by the model collaborator."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    location: str = Field(min_length=1)
    declared: bool = True

    @field_validator("location")
    @classmethod
    def validate_location(cls, value: str) -> str:
        if not MODEL_LOCATION_RE.match(value):
            raise ValueError(f"invalid model location: {value!r}")
        return value

    @classmethod
    def of(cls, location: str) -> "ModelRef":
        return cls(location=location)

    @classmethod
    def unchecked(cls, location: str) -> "ModelRef":
        return cls(location=location, declared=False)

    def __str__(self) -> str:
        return self.location


class ModelAssignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: ModelRef
    x: int = 0
    y: int = 0
    uvlock: bool = False
    weight: int = Field(default=1, ge=1)

    @field_validator("x", "y")
    @classmethod
    def normalize_rotation(cls, value: int) -> int:
        if value % 90 != 0:
            raise ValueError(f"rotation must be a multiple of 90 degrees, got {value}")
        return value % 360

    @model_validator(mode="after")
    def require_declared_model(self) -> "ModelAssignment":
        if not self.model.declared:
            raise UndeclaredModelError(f"model {self.model.location!r} was not declared to the model provider")
        return self

    @classmethod
    def builder(cls) -> "AssignmentBuilder":
        return AssignmentBuilder()

    def to_json(self, include_weight: bool = False) -> dict[str, Any]:
        out: dict[str, Any] = {"model": self.model.location}
        if self.x != 0:
            out["x"] = self.x
        if self.y != 0:
            out["y"] = self.y
        if self.uvlock:
            out["uvlock"] = True
        if include_weight and self.weight != 1:
            out["weight"] = self.weight
        return out


AssignmentLike = Union[ModelAssignment, ModelRef, "ModelAssignmentGroup", Iterable[ModelAssignment]]


class ModelAssignmentGroup:
    """Non-empty, immutable sequence of model assignments for one state."""

    __slots__ = ("_assignments",)

    def __init__(self, *assignments: ModelAssignment) -> None:
        if not assignments:
            raise EmptyModelGroupError("a model assignment group needs at least one assignment")
        for assignment in assignments:
            if not isinstance(assignment, ModelAssignment):
                raise TypeError(f"expected ModelAssignment, got {type(assignment).__name__}")
        self._assignments: Tuple[ModelAssignment, ...] = tuple(assignments)

    @classmethod
    def coerce(cls, value: AssignmentLike) -> "ModelAssignmentGroup":
        if isinstance(value, ModelAssignmentGroup):
            return value
        if isinstance(value, ModelAssignment):
            return cls(value)
        if isinstance(value, ModelRef):
            return cls(ModelAssignment(model=value))
        return cls(*value)

    @property
    def assignments(self) -> Tuple[ModelAssignment, ...]:
        return self._assignments

    def append(self, *assignments: ModelAssignment) -> "ModelAssignmentGroup":
        return ModelAssignmentGroup(*self._assignments, *assignments)

    def to_json(self) -> Union[dict[str, Any], list[dict[str, Any]]]:
        if len(self._assignments) == 1:
            return self._assignments[0].to_json(include_weight=False)
        return [assignment.to_json(include_weight=True) for assignment in self._assignments]

    def __iter__(self) -> Iterator[ModelAssignment]:
        return iter(self._assignments)

    def __len__(self) -> int:
        return len(self._assignments)

    def __getitem__(self, index: int) -> ModelAssignment:
        return self._assignments[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelAssignmentGroup):
            return NotImplemented
        return self._assignments == other._assignments

    def __hash__(self) -> int:
        return hash(self._assignments)

    def __repr__(self) -> str:
        return f"ModelAssignmentGroup{self._assignments!r}"


@dataclass(frozen=True)
class AssignmentBuilder:
    """Immutable builder: every setter returns a new builder."""

    model_ref: Optional[ModelRef] = None
    rotation_x_deg: int = 0
    rotation_y_deg: int = 0
    uvlock_flag: bool = False
    weight_value: int = 1
    previous: Tuple[ModelAssignment, ...] = ()

    def model(self, model: ModelRef) -> "AssignmentBuilder":
        return replace(self, model_ref=model)

    def rotation_x(self, degrees: int) -> "AssignmentBuilder":
        return replace(self, rotation_x_deg=degrees)

    def rotation_y(self, degrees: int) -> "AssignmentBuilder":
        return replace(self, rotation_y_deg=degrees)

    def uvlock(self, value: bool = True) -> "AssignmentBuilder":
        return replace(self, uvlock_flag=value)

    def weight(self, value: int) -> "AssignmentBuilder":
        return replace(self, weight_value=value)

    def build(self) -> ModelAssignment:
        if self.model_ref is None:
            raise ValueError("no model set on assignment builder")
        return ModelAssignment(
            model=self.model_ref,
            x=self.rotation_x_deg,
            y=self.rotation_y_deg,
            uvlock=self.uvlock_flag,
            weight=self.weight_value,
        )

    def next_model(self) -> "AssignmentBuilder":
        return AssignmentBuilder(previous=self.previous + (self.build(),))

    def build_group(self) -> ModelAssignmentGroup:
        return ModelAssignmentGroup(*self.previous, self.build())


def all_y_rotations(model: ModelRef, x: int = 0, uvlock: bool = False, weight: int = 1) -> ModelAssignmentGroup:
    return ModelAssignmentGroup(
        *(ModelAssignment(model=model, x=x, y=y, uvlock=uvlock, weight=weight) for y in QUARTER_TURNS)
    )


def all_rotations(model: ModelRef, uvlock: bool = False, weight: int = 1) -> ModelAssignmentGroup:
    return ModelAssignmentGroup(
        *(assignment for x in QUARTER_TURNS for assignment in all_y_rotations(model, x, uvlock, weight))
    )
