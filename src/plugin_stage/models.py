from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict

DESCRIPTOR_EXTENSION = "pom"

# Packaging types whose primary artifact is not named after the packaging.
_PACKAGING_EXTENSIONS = {
    "maven-plugin": "jar",
    "ejb": "jar",
    "bundle": "jar",
}


def extension_for_packaging(packaging: str) -> str:
    return _PACKAGING_EXTENSIONS.get(packaging, packaging)


class Coordinate(BaseModel):
    """Identity of one file in a coordinate-addressed repository."""

    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str
    extension: str = DESCRIPTOR_EXTENSION

    @property
    def file_name(self) -> str:
        return f"{self.artifact_id}-{self.version}.{self.extension}"

    def with_version(self, version: str) -> Coordinate:
        return self.model_copy(update={"version": version})

    def with_extension(self, extension: str) -> Coordinate:
        return self.model_copy(update={"extension": extension})

    def __str__(self) -> str:
        base = f"{self.group_id}:{self.artifact_id}:{self.version}"
        if self.extension != DESCRIPTOR_EXTENSION:
            return f"{base}:{self.extension}"
        return base


class ParentReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    group_id: str
    artifact_id: str
    version: str | None = None
    relative_path: str | None = None


class Descriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    source_path: Path
    packaging: str = "jar"
    parent: ParentReference | None = None
    final_name: str | None = None

    @property
    def directory(self) -> Path:
        return self.source_path.parent

    def with_version(self, version: str, source_path: Path | None = None) -> Descriptor:
        return self.model_copy(
            update={
                "coordinate": self.coordinate.with_version(version),
                "source_path": source_path if source_path is not None else self.source_path,
            }
        )


@dataclass(frozen=True)
class AncestryChain:
    """Descriptors from the plugin up through its locally resolvable parents."""

    descriptors: tuple[Descriptor, ...]

    def __post_init__(self) -> None:
        if not self.descriptors:
            raise ValueError("An ancestry chain always contains at least the starting descriptor.")

    @property
    def plugin(self) -> Descriptor:
        return self.descriptors[0]

    @property
    def ancestors(self) -> tuple[Descriptor, ...]:
        return self.descriptors[1:]

    def __len__(self) -> int:
        return len(self.descriptors)

    def __iter__(self) -> Iterator[Descriptor]:
        return iter(self.descriptors)


@dataclass(frozen=True)
class PackagedArtifact:
    coordinate: Coordinate
    file: Path


@dataclass(frozen=True)
class StagingRequest:
    test_version: str
    skip_unit_tests: bool = False
    repository_root: Path | None = None
