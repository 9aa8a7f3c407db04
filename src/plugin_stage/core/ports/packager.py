from pathlib import Path
from typing import Protocol

from plugin_stage.models import PackagedArtifact


class Packager(Protocol):
    def package_artifact(
        self,
        descriptor_file: Path,
        version: str,
        skip_tests: bool,
        log_file: Path,
    ) -> PackagedArtifact: ...
