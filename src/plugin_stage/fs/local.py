import os
import shutil
from pathlib import Path


class LocalFilesystem:
    """Direct access to the local disk.

    Implements the ``Filesystem`` protocol.
    """

    def is_readable_file(self, path: Path) -> bool:
        return path.is_file() and os.access(path, os.R_OK)

    def is_directory(self, path: Path) -> bool:
        return path.is_dir()

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, source: Path, destination: Path) -> None:
        shutil.copyfile(source, destination)

    def remove(self, path: Path) -> None:
        path.unlink(missing_ok=True)
