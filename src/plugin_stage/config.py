import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_DESCRIPTOR = "pom.xml"
_STAMPED_DESCRIPTOR = "pom-test.xml"
_DEFAULT_BUILD_LOG = "target/test-build-logs/setup.build.log"
_DEFAULT_REPOSITORY = "target/test-local-repository"
_DEFAULT_MAVEN = "mvn"


@dataclass(frozen=True)
class StagingSettings:
    """Default path conventions for a staging run.

    Relative paths are interpreted against ``project_dir``.
    """

    project_dir: Path
    descriptor_name: str = _DEFAULT_DESCRIPTOR
    stamped_descriptor_name: str = _STAMPED_DESCRIPTOR
    build_log: Path = Path(_DEFAULT_BUILD_LOG)
    default_repository: Path = Path(_DEFAULT_REPOSITORY)
    maven_executable: str = _DEFAULT_MAVEN
    build_timeout: float | None = None

    @property
    def descriptor_path(self) -> Path:
        return self.project_dir / self.descriptor_name

    @property
    def stamped_descriptor_path(self) -> Path:
        return self.project_dir / self.stamped_descriptor_name

    @property
    def build_log_path(self) -> Path:
        return self.project_dir / self.build_log

    @property
    def default_repository_root(self) -> Path:
        return self.project_dir / self.default_repository


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"PLUGIN_STAGE_BUILD_TIMEOUT must be a number of seconds, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError(f"PLUGIN_STAGE_BUILD_TIMEOUT must be positive, got {raw!r}")
    return timeout


def get_settings() -> StagingSettings:
    return StagingSettings(
        project_dir=Path(os.getenv("PLUGIN_STAGE_PROJECT_DIR", os.getcwd())),
        descriptor_name=os.getenv("PLUGIN_STAGE_DESCRIPTOR", _DEFAULT_DESCRIPTOR),
        build_log=Path(os.getenv("PLUGIN_STAGE_BUILD_LOG", _DEFAULT_BUILD_LOG)),
        default_repository=Path(os.getenv("PLUGIN_STAGE_REPOSITORY", _DEFAULT_REPOSITORY)),
        maven_executable=os.getenv("PLUGIN_STAGE_MAVEN", _DEFAULT_MAVEN),
        build_timeout=_parse_timeout(os.getenv("PLUGIN_STAGE_BUILD_TIMEOUT")),
    )
