from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Tuple

from .assignments import AssignmentLike, ModelAssignment, ModelAssignmentGroup
from .errors import IncompleteStateSpaceError, OverlappingStateError
from .properties import Block, PartialState, PartialStateBuilder, PropertyLike, StateCombination

LOG = logging.getLogger("blockstategen.variants")
_MISSING_PREVIEW = 8

StateMapper = Callable[[StateCombination], AssignmentLike]


@dataclass(frozen=True)
class VariantTable:
    """Assembled variant definition: disjoint partial states covering the whole state space."""

    block: Block
    entries: Tuple[Tuple[PartialState, ModelAssignmentGroup], ...]

    def lookup(self, state: StateCombination) -> ModelAssignmentGroup:
        for partial, group in self.entries:
            if partial.matches(state):
                return group
        raise IncompleteStateSpaceError(f"{self.block}: no variant covers {state}")

    def check_coverage(self) -> None:
        """Every state of the block must match exactly one entry."""
        owners: Dict[StateCombination, PartialState] = {}
        for partial, _ in self.entries:
            for state in partial.states():
                previous = owners.setdefault(state, partial)
                if previous is not partial:
                    raise OverlappingStateError(f"{self.block}: {state} matches [{previous}], [{partial}]")
        if len(owners) == self.block.state_count:
            return
        for state in self.block.state_space():
            if state not in owners:
                raise IncompleteStateSpaceError(f"{self.block}: no variant covers {state}")

    def __iter__(self) -> Iterator[Tuple[PartialState, ModelAssignmentGroup]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


class VariantAssembler:
    kind = "variants"

    def __init__(self, block: Block) -> None:
        self.block = block
        self._models: Dict[PartialState, ModelAssignmentGroup] = {}
        self._covered: Dict[StateCombination, PartialState] = {}

    def partial_state(self) -> PartialStateBuilder:
        return self.block.partial_state()

    def set_models(self, partial: PartialState | PartialStateBuilder, models: AssignmentLike) -> "VariantAssembler":
        partial = self._resolve(partial)
        if partial in self._models:
            raise OverlappingStateError(f"{self.block}: partial state [{partial}] already has models")
        states = list(partial.states())
        for state in states:
            existing = self._covered.get(state)
            if existing is not None:
                raise OverlappingStateError(
                    f"{self.block}: partial state [{partial}] overlaps already assigned [{existing}]"
                )
        self._models[partial] = ModelAssignmentGroup.coerce(models)
        self._covered.update(dict.fromkeys(states, partial))
        return self

    def add_models(self, partial: PartialState | PartialStateBuilder, *models: ModelAssignment) -> "VariantAssembler":
        partial = self._resolve(partial)
        if partial not in self._models:
            return self.set_models(partial, models)
        self._models[partial] = self._models[partial].append(*models)
        return self

    def for_all(self, mapper: StateMapper, excluding: Iterable[PropertyLike] = ()) -> "VariantAssembler":
        """Assign every state, calling ``mapper`` once per projection that drops ``excluding``."""
        excluded = [prop for prop in excluding if self.block.has_property(prop)]
        seen: set[PartialState] = set()
        for state in self.block.state_space():
            partial = state.project(excluded)
            if partial in seen:
                continue
            seen.add(partial)
            self.set_models(partial, mapper(state))
        LOG.debug("%s: %d variants from %d states", self.block, len(seen), self.block.state_count)
        return self

    def missing_states(self) -> List[StateCombination]:
        return [state for state in self.block.state_space() if state not in self._covered]

    def assemble(self) -> VariantTable:
        missing = self.missing_states()
        if missing:
            preview = ", ".join(f"[{state.key()}]" for state in missing[:_MISSING_PREVIEW])
            if len(missing) > _MISSING_PREVIEW:
                preview += f", ... ({len(missing) - _MISSING_PREVIEW} more)"
            raise IncompleteStateSpaceError(f"{self.block} does not cover all states. Missing: {preview}")
        return VariantTable(self.block, tuple(self._models.items()))

    def _resolve(self, partial: PartialState | PartialStateBuilder) -> PartialState:
        if isinstance(partial, PartialStateBuilder):
            partial = partial.build()
        if partial.block != self.block:
            raise ValueError(f"partial state for {partial.block} used on {self.block}")
        return partial

