import logging
from pathlib import Path

from plugin_stage.core.ports.filesystem import Filesystem
from plugin_stage.errors import InstallError
from plugin_stage.models import Coordinate

logger = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")


def _check_segment(value: str, field: str) -> str:
    if value in ("", ".", ".."):
        raise ValueError(f"{field} segment {value!r} cannot be used as a directory name")
    if any(sep in value for sep in _SEPARATORS):
        raise ValueError(f"{field} {value!r} must not contain a path separator")
    return value


def repository_path(root: Path, coordinate: Coordinate) -> Path:
    """Return the canonical location of *coordinate* below *root*.

    ``org.example:demo:1.0`` with extension ``jar`` maps to
    ``root/org/example/demo/1.0/demo-1.0.jar``. Raises ``ValueError`` for a
    coordinate whose segments would leave *root*.
    """
    group_dirs = [_check_segment(part, "groupId") for part in coordinate.group_id.split(".")]
    artifact_id = _check_segment(coordinate.artifact_id, "artifactId")
    version = _check_segment(coordinate.version, "version")
    _check_segment(coordinate.extension, "extension")
    return root.joinpath(*group_dirs) / artifact_id / version / coordinate.file_name


def install(root: Path, coordinate: Coordinate, source_file: Path, filesystem: Filesystem) -> Path:
    try:
        installed_path = repository_path(root, coordinate)
    except ValueError as exc:
        raise InstallError(coordinate, source_file, str(exc)) from exc
    if not filesystem.is_readable_file(source_file):
        raise InstallError(coordinate, source_file, "source file is missing or unreadable")

    try:
        filesystem.make_dirs(installed_path.parent)
        filesystem.copy_file(source_file, installed_path)
    except OSError as exc:
        raise InstallError(coordinate, source_file, str(exc)) from exc

    logger.info("Installed %s to %s", coordinate, installed_path)
    return installed_path
