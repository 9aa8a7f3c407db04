"""Read and rewrite Maven POM files with ``xml.etree.ElementTree``."""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from plugin_stage.errors import ParseError
from plugin_stage.models import Coordinate, Descriptor, ParentReference

logger = logging.getLogger(__name__)

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
_XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"

# ElementTree keeps prefixes in a process-wide registry; POMs are written with
# the Maven namespace as the default one.
ET.register_namespace("", POM_NAMESPACE)
ET.register_namespace("xsi", _XSI_NAMESPACE)

# Maven looks for the parent one directory up unless told otherwise.
DEFAULT_PARENT_RELATIVE_PATH = "../pom.xml"
_DEFAULT_PLUGIN_GROUP = "org.apache.maven.plugins"


def _load(path: Path) -> ET.ElementTree:
    parser = ET.XMLParser(target=ET.TreeBuilder(insert_comments=True))
    try:
        tree = ET.parse(path, parser=parser)
    except ET.ParseError as exc:
        raise ParseError(path, f"malformed XML ({exc})") from exc
    except OSError as exc:
        raise ParseError(path, exc.strerror or str(exc)) from exc
    if _local_name(tree.getroot().tag) != "project":
        raise ParseError(path, f"root element is <{_local_name(tree.getroot().tag)}>, expected <project>")
    return tree


def _namespace(tag: str) -> str:
    return tag[: tag.index("}") + 1] if tag.startswith("{") else ""


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element, name: str, ns: str) -> str | None:
    child = element.find(ns + name)
    if child is None or child.text is None:
        return None
    value = child.text.strip()
    return value or None


def _parse_parent(element: ET.Element, ns: str, path: Path) -> ParentReference:
    group_id = _text(element, "groupId", ns)
    artifact_id = _text(element, "artifactId", ns)
    if group_id is None or artifact_id is None:
        raise ParseError(path, "<parent> must declare groupId and artifactId")

    relative = element.find(ns + "relativePath")
    if relative is None:
        relative_path: str | None = DEFAULT_PARENT_RELATIVE_PATH
    else:
        # An empty <relativePath/> disables the local lookup.
        relative_path = (relative.text or "").strip() or None

    return ParentReference(
        group_id=group_id,
        artifact_id=artifact_id,
        version=_text(element, "version", ns),
        relative_path=relative_path,
    )


class PomDescriptorReader:
    """Implements the ``DescriptorReader`` protocol for ``pom.xml`` files."""

    def read(self, path: Path) -> Descriptor:
        root = _load(path).getroot()
        ns = _namespace(root.tag)

        parent_element = root.find(ns + "parent")
        parent = _parse_parent(parent_element, ns, path) if parent_element is not None else None

        artifact_id = _text(root, "artifactId", ns)
        if artifact_id is None:
            raise ParseError(path, "missing <artifactId>")
        group_id = _text(root, "groupId", ns) or (parent.group_id if parent else None)
        if group_id is None:
            raise ParseError(path, "missing <groupId> and no parent to inherit it from")
        version = _text(root, "version", ns) or (parent.version if parent else None)
        if version is None:
            raise ParseError(path, "missing <version> and no parent to inherit it from")

        build = root.find(ns + "build")
        final_name = _text(build, "finalName", ns) if build is not None else None

        descriptor = Descriptor(
            coordinate=Coordinate(group_id=group_id, artifact_id=artifact_id, version=version),
            source_path=path,
            packaging=_text(root, "packaging", ns) or "jar",
            parent=parent,
            final_name=final_name,
        )
        logger.debug("Read %s from %s", descriptor.coordinate, path)
        return descriptor


class PomVersionWriter:
    """Implements the ``DescriptorWriter`` protocol for ``pom.xml`` files.

    Sets the project's own version and the version of every plugin or
    dependency entry that points back at the project itself. The parent
    reference and all other components keep the versions they declare.
    """

    def write_version(self, descriptor: Descriptor, version: str, destination: Path) -> None:
        tree = _load(descriptor.source_path)
        root = tree.getroot()
        ns = _namespace(root.tag)

        self._set_project_version(root, ns, version, descriptor.source_path)
        rewritten = self._set_self_references(root, ns, descriptor.coordinate, version)
        if rewritten:
            logger.debug("Rewrote %d self-reference(s) to %s", rewritten, descriptor.coordinate)

        destination.parent.mkdir(parents=True, exist_ok=True)
        tree.write(destination, encoding="UTF-8", xml_declaration=True)

    @staticmethod
    def _set_project_version(root: ET.Element, ns: str, version: str, path: Path) -> None:
        existing = root.find(ns + "version")
        if existing is not None:
            existing.text = version
            return

        # Inherited from the parent: declare it explicitly after <artifactId>.
        artifact = root.find(ns + "artifactId")
        if artifact is None:
            raise ParseError(path, "missing <artifactId>")
        element = ET.Element(ns + "version")
        element.text = version
        element.tail = artifact.tail
        root.insert(list(root).index(artifact) + 1, element)

    @staticmethod
    def _set_self_references(root: ET.Element, ns: str, coordinate: Coordinate, version: str) -> int:
        count = 0
        for tag in ("plugin", "dependency"):
            for element in root.iter(ns + tag):
                group_id = _text(element, "groupId", ns)
                if group_id is None and tag == "plugin":
                    group_id = _DEFAULT_PLUGIN_GROUP
                if (group_id, _text(element, "artifactId", ns)) != (coordinate.group_id, coordinate.artifact_id):
                    continue
                version_element = element.find(ns + "version")
                if version_element is None:
                    continue
                version_element.text = version
                count += 1
        return count
