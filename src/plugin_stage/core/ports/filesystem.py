from pathlib import Path
from typing import Protocol


class Filesystem(Protocol):
    def is_readable_file(self, path: Path) -> bool: ...

    def is_directory(self, path: Path) -> bool: ...

    def make_dirs(self, path: Path) -> None: ...

    def copy_file(self, source: Path, destination: Path) -> None: ...

    def remove(self, path: Path) -> None: ...
