"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from plugin_stage.config import StagingSettings
from plugin_stage.fs.local import LocalFilesystem
from plugin_stage.maven.pom import PomDescriptorReader
from tests.helpers import write_pom

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Shared fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def reader() -> PomDescriptorReader:
    return PomDescriptorReader()


@pytest.fixture
def filesystem() -> LocalFilesystem:
    return LocalFilesystem()


@pytest.fixture
def plugin_tree(tmp_path: Path) -> Path:
    """A plugin ``G:A:1.0-SNAPSHOT`` whose parent ``G:P:2.0`` lives at ``../parent/pom.xml``.

    Returns the plugin project directory.
    """
    write_pom(tmp_path / "parent" / "pom.xml", "P", group_id="G", version="2.0", packaging="pom")
    plugin_dir = tmp_path / "plugin"
    write_pom(
        plugin_dir / "pom.xml",
        "A",
        version="1.0-SNAPSHOT",
        packaging="maven-plugin",
        parent=("G", "P", "2.0"),
        relative_path="../parent/pom.xml",
    )
    return plugin_dir


@pytest.fixture
def settings(plugin_tree: Path) -> StagingSettings:
    return StagingSettings(project_dir=plugin_tree)
