import logging
import re
import subprocess
from pathlib import Path

from plugin_stage.core.ports.descriptor import DescriptorReader
from plugin_stage.errors import BuildError
from plugin_stage.models import Coordinate, PackagedArtifact, extension_for_packaging

logger = logging.getLogger(__name__)

_BUILD_DIRECTORY = "target"
_EXPRESSION = re.compile(r"\$\{([^}]*)\}")


def resolve_final_name(final_name: str | None, coordinate: Coordinate) -> str:
    """Expand project expressions in a <finalName>.

    Falls back to Maven's default ``artifactId-version`` when the name is
    absent or uses an expression other than the project's own coordinate.
    """
    default = f"{coordinate.artifact_id}-{coordinate.version}"
    if not final_name:
        return default

    values: dict[str, str] = {}
    for prefix in ("project.", "pom.", ""):
        values[f"{prefix}groupId"] = coordinate.group_id
        values[f"{prefix}artifactId"] = coordinate.artifact_id
        values[f"{prefix}version"] = coordinate.version

    unresolved = [name for name in _EXPRESSION.findall(final_name) if name.strip() not in values]
    if unresolved:
        logger.warning("Cannot resolve %s in finalName %r; assuming %s", unresolved, final_name, default)
        return default
    return _EXPRESSION.sub(lambda match: values[match.group(1).strip()], final_name)


class MavenPackager:
    """Package a project by running ``mvn package`` on its descriptor.

    Implements the ``Packager`` protocol. Build output goes to the log file
    only; it is never echoed.
    """

    def __init__(
        self,
        reader: DescriptorReader,
        executable: str = "mvn",
        timeout: float | None = None,
    ) -> None:
        self._reader = reader
        self._executable = executable
        self._timeout = timeout

    def build_command(self, descriptor_file: Path, skip_tests: bool) -> list[str]:
        command = [self._executable, "-B", "-f", str(descriptor_file)]
        if skip_tests:
            command.append("-Dmaven.test.skip=true")
        command.append("package")
        return command

    def package_artifact(
        self,
        descriptor_file: Path,
        version: str,
        skip_tests: bool,
        log_file: Path,
    ) -> PackagedArtifact:
        descriptor = self._reader.read(descriptor_file)
        if descriptor.coordinate.version != version:
            raise BuildError(
                f"{descriptor_file} declares version {descriptor.coordinate.version}, expected {version}; "
                "the descriptor must be stamped before packaging"
            )

        command = self.build_command(descriptor_file, skip_tests)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Running %s", " ".join(command))
        with log_file.open("w", encoding="utf-8") as log:
            try:
                result = subprocess.run(
                    command,
                    cwd=descriptor_file.parent,
                    stdout=log,
                    stderr=subprocess.STDOUT,
                    check=False,
                    timeout=self._timeout,
                )
            except FileNotFoundError as exc:
                raise BuildError(f"Maven executable {self._executable!r} not found", log_file) from exc
            except subprocess.TimeoutExpired as exc:
                raise BuildError(
                    f"Build of {descriptor.coordinate} timed out after {self._timeout}s", log_file
                ) from exc

        if result.returncode != 0:
            raise BuildError(f"Build of {descriptor.coordinate} failed with exit code {result.returncode}", log_file)

        extension = extension_for_packaging(descriptor.packaging)
        coordinate = descriptor.coordinate.with_extension(extension)
        if extension == "pom":
            return PackagedArtifact(coordinate=coordinate, file=descriptor_file)

        base_name = resolve_final_name(descriptor.final_name, coordinate)
        artifact_file = descriptor.directory / _BUILD_DIRECTORY / f"{base_name}.{extension}"
        if not artifact_file.is_file():
            raise BuildError(f"Build of {coordinate} succeeded but {artifact_file} was not produced", log_file)

        logger.info("Packaged %s at %s", coordinate, artifact_file)
        return PackagedArtifact(coordinate=coordinate, file=artifact_file)
