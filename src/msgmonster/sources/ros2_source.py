from __future__ import annotations

from typing import Iterator

from msgmonster.sources.base import DefinitionSource, Dialect, run_command


class Ros2DefinitionSource(DefinitionSource):
    """Reads definitions through 'ros2 interface'."""

    dialect = Dialect.ROS2

    def is_package(self, value: str) -> bool:
        return value in run_command(["ros2", "interface", "packages"])

    def list_definitions(self, package: str) -> Iterator[str]:
        if not self.is_package(package):
            yield package
            return
        prefix = f"{package}/msg"
        for line in run_command(["ros2", "interface", "package", package]):
            line = line.strip()
            if line.startswith(prefix):
                yield line

    def read_lines(self, identifier: str) -> Iterator[str]:
        for line in run_command(["ros2", "interface", "show", identifier]):
            # tab indented lines are expanded definitions of nested types
            if not line.startswith("\t"):
                yield line
