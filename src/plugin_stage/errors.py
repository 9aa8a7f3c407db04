from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plugin_stage.models import Coordinate


class PluginStageError(Exception):
    """Base class for every failure raised while staging a plugin."""


class InvalidVersionError(PluginStageError, ValueError):
    def __init__(self, version: str, reason: str) -> None:
        super().__init__(f"Invalid test version {version!r}: {reason}")
        self.version = version
        self.reason = reason


class ParseError(PluginStageError):
    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read descriptor {path}: {reason}")
        self.path = path
        self.reason = reason


class CyclicAncestryError(PluginStageError):
    def __init__(self, path: Path, visited: list[Path]) -> None:
        trail = " -> ".join(str(p) for p in [*visited, path])
        super().__init__(f"Parent reference cycles back to {path} ({trail})")
        self.path = path
        self.visited = visited


class BuildError(PluginStageError):
    def __init__(self, message: str, build_log: Path | None = None) -> None:
        if build_log is not None:
            message = f"{message} (see build log: {build_log})"
        super().__init__(message)
        self.build_log = build_log


class InstallError(PluginStageError):
    def __init__(self, coordinate: Coordinate, source: Path, reason: str) -> None:
        super().__init__(f"Cannot install {coordinate} from {source}: {reason}")
        self.coordinate = coordinate
        self.source = source
        self.reason = reason


class TestStagingError(PluginStageError):
    """Single error surfaced by a failed staging call; the cause is chained."""

    __test__ = False  # not a pytest test class

    def __init__(self, message: str, build_log: Path | None = None) -> None:
        super().__init__(message)
        self.build_log = build_log
