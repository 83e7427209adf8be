from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from blockstategen.assignments import ModelRef  # noqa: E402
from blockstategen.registry import BlockStateRegistry  # noqa: E402


class FakeSink:
    def __init__(self, fail_for: tuple[str, ...] = ()) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.calls: list[tuple[str, str]] = []
        self.fail_for = set(fail_for)

    def write(self, namespace: str, path: str, document: dict[str, Any]) -> None:
        self.calls.append((namespace, path))
        if path in self.fail_for:
            raise OSError(f"disk full while writing {path}")
        self.documents[f"{namespace}:{path}"] = document


def model(name: str) -> ModelRef:
    return ModelRef.of(f"testmod:block/{name}")


def parse_key(key: str) -> dict[str, str]:
    if not key:
        return {}
    return dict(part.split("=", 1) for part in key.split(","))


def state_names(state) -> dict[str, str]:
    return {prop.name: prop.value_name(value) for prop, value in state.items()}


@pytest.fixture()
def registry() -> BlockStateRegistry:
    return BlockStateRegistry()


@pytest.fixture()
def sink() -> FakeSink:
    return FakeSink()
