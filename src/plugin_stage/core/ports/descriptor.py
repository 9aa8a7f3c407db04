from pathlib import Path
from typing import Protocol

from plugin_stage.models import Descriptor


class DescriptorReader(Protocol):
    def read(self, path: Path) -> Descriptor: ...


class DescriptorWriter(Protocol):
    def write_version(self, descriptor: Descriptor, version: str, destination: Path) -> None: ...
