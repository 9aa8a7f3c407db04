import logging
from pathlib import Path

from plugin_stage.config import StagingSettings
from plugin_stage.core.ancestry import resolve_ancestry
from plugin_stage.core.layout import install
from plugin_stage.core.ports.descriptor import DescriptorReader, DescriptorWriter
from plugin_stage.core.ports.filesystem import Filesystem
from plugin_stage.core.ports.packager import Packager
from plugin_stage.core.stamp import stamp
from plugin_stage.errors import PluginStageError, TestStagingError
from plugin_stage.models import StagingRequest

logger = logging.getLogger(__name__)


class PluginStager:
    """Stage a plugin and its descriptor lineage into a test-only repository.

    The plugin descriptor is stamped with a stable test version, packaged, and
    installed together with every ancestor descriptor reachable through
    relative-path parent links. Ancestors that only exist in some other local
    repository are not resolved, so test builds needing them will fail.

    Calls targeting the same repository root must not run concurrently.
    """

    def __init__(
        self,
        reader: DescriptorReader,
        writer: DescriptorWriter,
        packager: Packager,
        filesystem: Filesystem,
        settings: StagingSettings,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._packager = packager
        self._filesystem = filesystem
        self._settings = settings

    def prepare_plugin_for_integration_testing(
        self,
        test_version: str,
        repository_root: Path | None = None,
    ) -> Path:
        """Stage the plugin, running its unit tests while packaging."""
        return self.prepare_for_testing(StagingRequest(test_version, False, repository_root))

    def prepare_plugin_for_unit_testing_with_maven_builds(
        self,
        test_version: str,
        repository_root: Path | None = None,
    ) -> Path:
        """Stage the plugin without running its unit tests.

        Meant to be called from the plugin's own unit tests, where running them
        again during packaging would recurse.
        """
        return self.prepare_for_testing(StagingRequest(test_version, True, repository_root))

    def prepare_for_testing(self, request: StagingRequest) -> Path:
        build_log = self._settings.build_log_path
        try:
            return self._stage(request)
        except (PluginStageError, OSError) as exc:
            logger.error("Staging test version %s failed: %s", request.test_version, exc)
            raise TestStagingError(
                f"Failed to stage plugin with test version {request.test_version!r}: {exc}",
                build_log=build_log,
            ) from exc

    def _stage(self, request: StagingRequest) -> Path:
        settings = self._settings
        descriptor_path = settings.descriptor_path
        stamped_path = settings.stamped_descriptor_path
        in_place = stamped_path.resolve() == descriptor_path.resolve()

        descriptor = self._reader.read(descriptor_path)
        try:
            stamped = stamp(descriptor, request.test_version, self._writer, destination=stamped_path)
            self._filesystem.make_dirs(settings.build_log_path.parent)
            logger.info(
                "Packaging %s (skip unit tests: %s), build log at %s",
                stamped.coordinate,
                request.skip_unit_tests,
                settings.build_log_path,
            )
            artifact = self._packager.package_artifact(
                stamped.source_path,
                request.test_version,
                request.skip_unit_tests,
                settings.build_log_path,
            )

            # Parent links are read from the original descriptor; stamping does not touch them.
            chain = resolve_ancestry(descriptor, self._reader, self._filesystem)

            root = request.repository_root or settings.default_repository_root
            self._filesystem.make_dirs(root)

            install(root, artifact.coordinate, artifact.file, self._filesystem)
            install(root, stamped.coordinate, stamped.source_path, self._filesystem)
            for ancestor in chain.ancestors:
                install(root, ancestor.coordinate, ancestor.source_path, self._filesystem)
        finally:
            if not in_place:
                self._discard(stamped_path)

        logger.info(
            "Staged %s with %d ancestor descriptor(s) into %s",
            stamped.coordinate,
            len(chain.ancestors),
            root,
        )
        return root

    def _discard(self, stamped_path: Path) -> None:
        try:
            self._filesystem.remove(stamped_path)
        except OSError:
            logger.warning("Could not remove stamped descriptor %s", stamped_path, exc_info=True)
