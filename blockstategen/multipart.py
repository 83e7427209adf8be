from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from .assignments import AssignmentLike, ModelAssignmentGroup
from .properties import (
    FACING_TO_PROPERTY,
    Block,
    Direction,
    Property,
    StateCombination,
    value_name,
)

LOG = logging.getLogger("blockstategen.multipart")

DirectionFilter = Callable[[Direction], bool]
GroupFactory = Callable[[Direction], AssignmentLike]


def horizontal_only(direction: Direction) -> bool:
    return direction.is_horizontal


def vertical_only(direction: Direction) -> bool:
    return not direction.is_horizontal


@dataclass(frozen=True)
class Condition:
    """Conjunction of ``property in {values}`` terms; no terms means always."""

    terms: Tuple[Tuple[Property, Tuple[Any, ...]], ...] = ()

    @classmethod
    def always(cls) -> "Condition":
        return cls()

    @property
    def is_always(self) -> bool:
        return not self.terms

    def where(self, prop: Property, *values: Any) -> "Condition":
        if not values:
            raise ValueError(f"condition on {prop.name!r} needs at least one value")
        if any(existing.name == prop.name for existing, _ in self.terms):
            raise ValueError(f"condition already constrains {prop.name!r}")
        members = tuple(prop.coerce(value) for value in values)
        return Condition(self.terms + ((prop, members),))

    def bind(self, block: Block) -> "Condition":
        """Resolve every term against ``block``'s declared properties."""
        bound = Condition()
        for prop, values in self.terms:
            bound = bound.where(block.property(prop.name), *values)
        return bound

    def matches(self, state: StateCombination) -> bool:
        return all(state[prop] in values for prop, values in self.terms)

    def to_json(self) -> dict[str, str]:
        return {prop.name: "|".join(value_name(value) for value in values) for prop, values in self.terms}


def when(prop: Property, *values: Any) -> Condition:
    return Condition().where(prop, *values)


@dataclass(frozen=True)
class MultipartEntry:
    group: ModelAssignmentGroup
    condition: Condition = Condition()

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"apply": self.group.to_json()}
        if not self.condition.is_always:
            out["when"] = self.condition.to_json()
        return out


class MultipartAssembler:
    kind = "multipart"

    def __init__(self, block: Block) -> None:
        self.block = block
        self._parts: List[MultipartEntry] = []

    def part(self, models: AssignmentLike, condition: Optional[Condition] = None) -> "MultipartAssembler":
        bound = (condition or Condition.always()).bind(self.block)
        self._parts.append(MultipartEntry(ModelAssignmentGroup.coerce(models), bound))
        return self

    def for_all_directions(
        self,
        factory: GroupFactory,
        axis_filter: DirectionFilter = horizontal_only,
        connected: bool = True,
    ) -> "MultipartAssembler":
        """Add one part per direction, gated on that direction's connection flag."""
        for direction, prop in FACING_TO_PROPERTY.items():
            if not axis_filter(direction):
                continue
            self.part(factory(direction), when(prop, connected))
        return self

    def resolve(self, state: StateCombination) -> List[ModelAssignmentGroup]:
        return [entry.group for entry in self._parts if entry.condition.matches(state)]

    def assemble(self) -> Tuple[MultipartEntry, ...]:
        if not self._parts:
            LOG.warning("%s: multipart definition has no parts", self.block)
        return tuple(self._parts)

