from plugin_stage.config import StagingSettings, get_settings
from plugin_stage.core.ancestry import resolve_ancestry
from plugin_stage.core.layout import install, repository_path
from plugin_stage.core.stamp import stamp, validate_version
from plugin_stage.core.staging import PluginStager
from plugin_stage.errors import (
    BuildError,
    CyclicAncestryError,
    InstallError,
    InvalidVersionError,
    ParseError,
    PluginStageError,
    TestStagingError,
)
from plugin_stage.factory import create_maven_stager
from plugin_stage.models import (
    AncestryChain,
    Coordinate,
    Descriptor,
    PackagedArtifact,
    ParentReference,
    StagingRequest,
)

__all__ = [
    "AncestryChain",
    "BuildError",
    "Coordinate",
    "CyclicAncestryError",
    "Descriptor",
    "InstallError",
    "InvalidVersionError",
    "PackagedArtifact",
    "ParentReference",
    "ParseError",
    "PluginStageError",
    "PluginStager",
    "StagingRequest",
    "StagingSettings",
    "TestStagingError",
    "create_maven_stager",
    "get_settings",
    "install",
    "repository_path",
    "resolve_ancestry",
    "stamp",
    "validate_version",
]
