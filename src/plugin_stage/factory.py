from plugin_stage.config import StagingSettings, get_settings
from plugin_stage.core.staging import PluginStager
from plugin_stage.fs.local import LocalFilesystem
from plugin_stage.maven.packager import MavenPackager
from plugin_stage.maven.pom import PomDescriptorReader, PomVersionWriter


def create_maven_stager(settings: StagingSettings | None = None) -> PluginStager:
    """Wire a ``PluginStager`` for a Maven project on the local disk."""
    settings = settings or get_settings()
    reader = PomDescriptorReader()
    return PluginStager(
        reader=reader,
        writer=PomVersionWriter(),
        packager=MavenPackager(reader, executable=settings.maven_executable, timeout=settings.build_timeout),
        filesystem=LocalFilesystem(),
        settings=settings,
    )
