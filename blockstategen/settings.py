from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .errors import ConfigError

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{name} must not be negative, got {value}")
    return value


@dataclass(frozen=True)
class GeneratorSettings:
    output_root: Path
    indent: int
    log_level: str

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "GeneratorSettings":
        env = os.environ if env is None else env
        output_root = Path(env.get("BLOCKSTATEGEN_OUTPUT_ROOT", "generated")).resolve()
        indent = _int_env(env, "BLOCKSTATEGEN_INDENT", 2)
        log_level = env.get("BLOCKSTATEGEN_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if not isinstance(logging.getLevelName(log_level), int):
            raise ConfigError(f"BLOCKSTATEGEN_LOG_LEVEL is not a logging level: {log_level!r}")
        return cls(output_root=output_root, indent=indent, log_level=log_level)


def configure_logging(settings: GeneratorSettings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
