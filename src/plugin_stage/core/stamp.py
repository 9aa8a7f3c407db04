import logging
import re
from pathlib import Path

from plugin_stage.core.ports.descriptor import DescriptorWriter
from plugin_stage.errors import InvalidVersionError
from plugin_stage.models import Descriptor

logger = logging.getLogger(__name__)

_FORBIDDEN_VERSION_CHARS = re.compile(r'[\s/\\:<>|?*"]')


def validate_version(version: str) -> str:
    """Return *version* unchanged if it can serve as a coordinate version segment."""
    if not version:
        raise InvalidVersionError(version, "version must not be empty")
    match = _FORBIDDEN_VERSION_CHARS.search(version)
    if match:
        raise InvalidVersionError(version, f"character {match.group()!r} is not allowed")
    if version.startswith("."):
        raise InvalidVersionError(version, "version must not start with '.'")
    return version


def stamp(
    descriptor: Descriptor,
    test_version: str,
    writer: DescriptorWriter,
    destination: Path | None = None,
) -> Descriptor:
    """Rewrite the descriptor's own version and persist it.

    The returned descriptor points at the file that was written, which exists
    by the time this function returns. Only the plugin's own identity (and
    references to itself) change; other components' versions stay as declared.
    """
    validate_version(test_version)
    target = destination if destination is not None else descriptor.source_path
    logger.info("Stamping %s with test version %s into %s", descriptor.coordinate, test_version, target)
    writer.write_version(descriptor, test_version, target)
    return descriptor.with_version(test_version, source_path=target)
