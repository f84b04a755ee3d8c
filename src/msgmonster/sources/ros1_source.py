from __future__ import annotations

from typing import Iterator, Optional

from msgmonster.sources.base import DefinitionSource, Dialect, run_command


class Ros1DefinitionSource(DefinitionSource):
    """Reads definitions through the rosmsg and rospack tools."""

    dialect = Dialect.ROS1

    def is_package(self, value: str) -> bool:
        return value in run_command(["rospack", "list-names"])

    def list_definitions(self, package: str) -> Iterator[str]:
        for line in run_command(["rosmsg", "package", package]):
            if line.strip():
                yield line.strip()

    def read_lines(self, identifier: str) -> Iterator[str]:
        # --raw keeps the comments which document the message
        yield from run_command(["rosmsg", "show", "--raw", identifier])

    def checksum(self, identifier: str) -> Optional[str]:
        lines = [line.strip() for line in run_command(["rosmsg", "md5", identifier])]
        return next((line for line in lines if line), None)
