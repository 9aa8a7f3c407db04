"""Unit tests for staging settings."""

from pathlib import Path

import pytest

from plugin_stage.config import StagingSettings, get_settings


def test_defaults_follow_project_conventions(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "PLUGIN_STAGE_PROJECT_DIR",
        "PLUGIN_STAGE_DESCRIPTOR",
        "PLUGIN_STAGE_BUILD_LOG",
        "PLUGIN_STAGE_REPOSITORY",
        "PLUGIN_STAGE_MAVEN",
        "PLUGIN_STAGE_BUILD_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    settings = get_settings()

    project_dir = settings.project_dir
    assert project_dir.resolve() == tmp_path.resolve()
    assert settings.descriptor_path == project_dir / "pom.xml"
    assert settings.stamped_descriptor_path == project_dir / "pom-test.xml"
    assert settings.build_log_path == project_dir / "target" / "test-build-logs" / "setup.build.log"
    assert settings.default_repository_root == project_dir / "target" / "test-local-repository"
    assert settings.maven_executable == "mvn"
    assert settings.build_timeout is None


def test_environment_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLUGIN_STAGE_PROJECT_DIR", str(tmp_path))
    monkeypatch.setenv("PLUGIN_STAGE_DESCRIPTOR", "plugin.xml")
    monkeypatch.setenv("PLUGIN_STAGE_REPOSITORY", "it-repo")
    monkeypatch.setenv("PLUGIN_STAGE_MAVEN", "/opt/maven/bin/mvn")
    monkeypatch.setenv("PLUGIN_STAGE_BUILD_TIMEOUT", "300")

    settings = get_settings()

    assert settings.descriptor_path == tmp_path / "plugin.xml"
    assert settings.default_repository_root == tmp_path / "it-repo"
    assert settings.maven_executable == "/opt/maven/bin/mvn"
    assert settings.build_timeout == 300.0


@pytest.mark.parametrize("raw", ["soon", "0", "-5"])
def test_invalid_timeout_is_rejected(raw: str, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PLUGIN_STAGE_BUILD_TIMEOUT", raw)
    with pytest.raises(ValueError, match="PLUGIN_STAGE_BUILD_TIMEOUT"):
        get_settings()


def test_absolute_repository_is_kept(tmp_path: Path) -> None:
    settings = StagingSettings(project_dir=tmp_path / "project", default_repository=tmp_path / "shared")
    assert settings.default_repository_root == tmp_path / "shared"
