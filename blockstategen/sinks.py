from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

from .serializer import dumps
from .settings import GeneratorSettings


class WriteSink(Protocol):
    def write(self, namespace: str, path: str, document: dict[str, Any]) -> None: ...


class DirectoryWriteSink:
    """Writes ``<root>/assets/<namespace>/blockstates/<path>.json``."""

    def __init__(self, root: Path, indent: int = 2) -> None:
        self.root = Path(root)
        self.indent = indent

    @classmethod
    def from_settings(cls, settings: GeneratorSettings) -> "DirectoryWriteSink":
        return cls(settings.output_root, indent=settings.indent)

    def target(self, namespace: str, path: str) -> Path:
        return self.root / "assets" / namespace / "blockstates" / f"{path}.json"

    def write(self, namespace: str, path: str, document: dict[str, Any]) -> None:
        target = self.target(namespace, path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(dumps(document, indent=self.indent), encoding="utf-8")
