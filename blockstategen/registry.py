from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Type, TypeVar, Union

from .errors import AssemblerConflictError, BlockStateError, FlushError
from .multipart import MultipartAssembler
from .properties import Block
from .serializer import serialize
from .sinks import WriteSink
from .variants import VariantAssembler

LOG = logging.getLogger("blockstategen.registry")

Assembler = Union[VariantAssembler, MultipartAssembler]
_A = TypeVar("_A", VariantAssembler, MultipartAssembler)


@dataclass
class FlushReport:
    written: List[str] = field(default_factory=list)
    assembly_failures: Dict[str, str] = field(default_factory=dict)
    write_failures: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.assembly_failures and not self.write_failures

    def to_dict(self) -> dict[str, object]:
        return {
            "written": list(self.written),
            "assembly_failures": dict(self.assembly_failures),
            "write_failures": dict(self.write_failures),
        }


class BlockStateRegistry:
    """Caller-owned map of block -> assembler; register everything, then flush once."""

    def __init__(self) -> None:
        self._entries: Dict[Block, Assembler] = {}

    def variants(self, block: Block) -> VariantAssembler:
        return self._get(block, VariantAssembler)

    def multipart(self, block: Block) -> MultipartAssembler:
        return self._get(block, MultipartAssembler)

    def _get(self, block: Block, kind: Type[_A]) -> _A:
        existing = self._entries.get(block)
        if existing is None:
            created = kind(block)
            self._entries[block] = created
            LOG.debug("Registered %s as %s", block, created.kind)
            return created
        if not isinstance(existing, kind):
            raise AssemblerConflictError(
                f"{block} is already registered as {existing.kind}, cannot reuse it as {kind.kind}"
            )
        return existing

    def __contains__(self, block: object) -> bool:
        return block in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Block]:
        return iter(list(self._entries))

    def flush(self, sink: WriteSink) -> FlushReport:
        entries, self._entries = self._entries, {}
        report = FlushReport()
        for block, assembler in entries.items():
            try:
                document = serialize(assembler.assemble())
            except BlockStateError as exc:
                LOG.exception("Failed to assemble blockstate for %s", block)
                report.assembly_failures[block.location] = str(exc)
                continue

            try:
                sink.write(block.namespace, block.path, document)
            except OSError as exc:
                LOG.error("Couldn't save blockstate for %s: %s", block, exc)
                report.write_failures[block.location] = str(exc)
                continue

            LOG.info("Wrote %s blockstate for %s", assembler.kind, block)
            report.written.append(block.location)

        LOG.info(
            "Flushed %d blockstate(s): %d written, %d assembly failure(s), %d write failure(s)",
            len(entries),
            len(report.written),
            len(report.assembly_failures),
            len(report.write_failures),
        )
        if report.assembly_failures:
            raise FlushError(
                f"{len(report.assembly_failures)} blockstate(s) failed to assemble: "
                + ", ".join(sorted(report.assembly_failures)),
                report,
            )
        return report
