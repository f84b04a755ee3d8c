from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterator, Optional

from msgmonster.errors import DefinitionSourceError
from msgmonster.sources.base import DefinitionSource, Dialect

MSG_SUFFIX = ".msg"


class FolderDefinitionSource(DefinitionSource):
    """Reads .msg files from a folder laid out like a ROS workspace.

    ROS1: <root>/<pkg>/<Name>.msg, identifier 'pkg/Name'
    ROS2: <root>/<pkg>/msg/<Name>.msg, identifier 'pkg/msg/Name'
    """

    def __init__(self, root, dialect: Dialect = Dialect.ROS1):
        self.root = Path(root)
        self.dialect = dialect

    def _package_dir(self, package: str) -> Path:
        package_dir = self.root / package
        if self.dialect is Dialect.ROS2:
            package_dir = package_dir / "msg"
        return package_dir

    def _msg_file(self, identifier: str) -> Path:
        return self.root / f"{identifier}{MSG_SUFFIX}"

    def is_package(self, value: str) -> bool:
        return self._package_dir(value.strip("/")).is_dir()

    def list_definitions(self, package: str) -> Iterator[str]:
        package = package.strip("/")
        package_dir = self._package_dir(package)
        if not package_dir.is_dir():
            raise DefinitionSourceError(f"Package folder {package_dir} does not exist")
        for msg_file in sorted(package_dir.glob(f"*{MSG_SUFFIX}")):
            yield str(msg_file.relative_to(self.root).with_suffix("").as_posix())

    def read_lines(self, identifier: str) -> Iterator[str]:
        msg_file = self._msg_file(identifier)
        try:
            text = msg_file.read_text(encoding="utf-8")
        except OSError as e:
            raise DefinitionSourceError(f"Cannot read {msg_file}: {e}") from e
        yield from text.splitlines()

    def checksum(self, identifier: str) -> Optional[str]:
        if not self.dialect.has_checksum:
            return None
        msg_file = self._msg_file(identifier)
        try:
            return hashlib.md5(msg_file.read_bytes()).hexdigest()
        except OSError as e:
            raise DefinitionSourceError(f"Cannot read {msg_file}: {e}") from e
