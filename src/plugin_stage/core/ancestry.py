import logging
from pathlib import Path

from plugin_stage.core.ports.descriptor import DescriptorReader
from plugin_stage.core.ports.filesystem import Filesystem
from plugin_stage.errors import CyclicAncestryError
from plugin_stage.models import AncestryChain, Descriptor, ParentReference

logger = logging.getLogger(__name__)

_DEFAULT_DESCRIPTOR_NAME = "pom.xml"


def _parent_file(current: Descriptor, parent: ParentReference, filesystem: Filesystem) -> Path | None:
    if not parent.relative_path:
        return None
    candidate = current.directory / parent.relative_path
    if filesystem.is_directory(candidate):
        candidate = candidate / _DEFAULT_DESCRIPTOR_NAME
    return candidate


def _matches(reference: ParentReference, candidate: Descriptor) -> bool:
    coordinate = candidate.coordinate
    if (coordinate.group_id, coordinate.artifact_id) != (reference.group_id, reference.artifact_id):
        return False
    return reference.version is None or reference.version == coordinate.version


def resolve_ancestry(start: Descriptor, reader: DescriptorReader, filesystem: Filesystem) -> AncestryChain:
    """Follow relative-path parent links from *start* as far as they resolve locally.

    The walk stops quietly at the first parent that has no relative path, whose
    file is missing or unreadable, or whose file declares a different identity
    than the reference. Parents reachable only through a repository lookup are
    never consulted. A link back to an already visited file raises
    ``CyclicAncestryError``.
    """
    chain = [start]
    visited = [start.source_path.resolve()]
    current = start

    while current.parent is not None:
        reference = current.parent
        parent_file = _parent_file(current, reference, filesystem)
        if parent_file is None:
            logger.debug("%s declares no relative path to its parent", current.coordinate)
            break
        if not filesystem.is_readable_file(parent_file):
            logger.debug("Parent of %s not found at %s; ancestry ends here", current.coordinate, parent_file)
            break

        canonical = parent_file.resolve()
        if canonical in visited:
            raise CyclicAncestryError(canonical, visited)
        visited.append(canonical)

        parent = reader.read(parent_file)
        if not _matches(reference, parent):
            logger.debug(
                "Descriptor at %s is %s, not the declared parent %s:%s; ancestry ends here",
                parent_file,
                parent.coordinate,
                reference.group_id,
                reference.artifact_id,
            )
            break

        chain.append(parent)
        current = parent

    logger.debug("Resolved ancestry of %s: %s", start.coordinate, " -> ".join(str(d.coordinate) for d in chain))
    return AncestryChain(tuple(chain))
