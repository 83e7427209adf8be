from __future__ import annotations


class BlockStateError(RuntimeError):
    """Raised when a blockstate definition cannot be built."""


class AssemblerConflictError(BlockStateError):
    pass


class IncompleteStateSpaceError(BlockStateError):
    pass


class OverlappingStateError(BlockStateError):
    pass


class EmptyModelGroupError(BlockStateError, ValueError):
    pass


class UnknownPropertyError(BlockStateError, LookupError):
    pass


class UndeclaredModelError(BlockStateError):
    pass


class ConfigError(BlockStateError):
    pass


class FlushError(BlockStateError):
    """Raised after a flush in which one or more blocks failed to assemble."""

    def __init__(self, message: str, report) -> None:
        super().__init__(message)
        self.report = report
