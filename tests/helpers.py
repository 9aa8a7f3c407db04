"""POM tree builders and fakes shared by the test suites."""

from pathlib import Path

from plugin_stage.errors import BuildError
from plugin_stage.maven.pom import PomDescriptorReader
from plugin_stage.models import PackagedArtifact, extension_for_packaging

_UNSET = object()


def write_pom(
    path: Path,
    artifact_id: str,
    group_id: str | None = None,
    version: str | None = None,
    packaging: str | None = None,
    parent: tuple[str, str, str] | None = None,
    relative_path: object = _UNSET,
    body: str = "",
) -> Path:
    """Write a minimal namespaced ``pom.xml`` and return its path.

    *relative_path* is omitted from ``<parent>`` unless given; ``None`` writes
    an empty ``<relativePath/>``.
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<project xmlns="http://maven.apache.org/POM/4.0.0"',
        '         xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"',
        '         xsi:schemaLocation="http://maven.apache.org/POM/4.0.0 '
        'http://maven.apache.org/xsd/maven-4.0.0.xsd">',
        "  <modelVersion>4.0.0</modelVersion>",
    ]
    if parent is not None:
        p_group, p_artifact, p_version = parent
        lines += [
            "  <parent>",
            f"    <groupId>{p_group}</groupId>",
            f"    <artifactId>{p_artifact}</artifactId>",
            f"    <version>{p_version}</version>",
        ]
        if relative_path is None:
            lines.append("    <relativePath/>")
        elif relative_path is not _UNSET:
            lines.append(f"    <relativePath>{relative_path}</relativePath>")
        lines.append("  </parent>")
    if group_id is not None:
        lines.append(f"  <groupId>{group_id}</groupId>")
    lines.append(f"  <artifactId>{artifact_id}</artifactId>")
    if version is not None:
        lines.append(f"  <version>{version}</version>")
    if packaging is not None:
        lines.append(f"  <packaging>{packaging}</packaging>")
    if body:
        lines.append(body)
    lines.append("</project>")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def list_files(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


class FakePackager:
    """Stands in for ``mvn package``: reads the stamped POM from disk and fakes the jar."""

    def __init__(self, fail_with: Exception | None = None) -> None:
        self.calls: list[tuple[Path, str, bool, Path]] = []
        self.seen_versions: list[str] = []
        self._fail_with = fail_with
        self._reader = PomDescriptorReader()

    def package_artifact(
        self,
        descriptor_file: Path,
        version: str,
        skip_tests: bool,
        log_file: Path,
    ) -> PackagedArtifact:
        self.calls.append((descriptor_file, version, skip_tests, log_file))
        if self._fail_with is not None:
            raise self._fail_with

        descriptor = self._reader.read(descriptor_file)
        self.seen_versions.append(descriptor.coordinate.version)
        if descriptor.coordinate.version != version:
            raise BuildError("descriptor was not stamped", log_file)

        log_file.write_text("BUILD SUCCESS\n", encoding="utf-8")
        extension = extension_for_packaging(descriptor.packaging)
        coordinate = descriptor.coordinate.with_extension(extension)
        artifact = descriptor.directory / "target" / coordinate.file_name
        artifact.parent.mkdir(parents=True, exist_ok=True)
        artifact.write_bytes(f"jar for {coordinate}".encode())
        return PackagedArtifact(coordinate=coordinate, file=artifact)
