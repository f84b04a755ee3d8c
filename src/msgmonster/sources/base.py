from __future__ import annotations

import subprocess
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterator, List, Optional

from msgmonster.errors import DefinitionSourceError
from msgmonster.logging_config import get_logger

logger = get_logger(__name__)


class Dialect(Enum):
    ROS1 = "ros1"
    ROS2 = "ros2"

    @property
    def has_checksum(self) -> bool:
        """Only ROS1 messages carry an md5sum."""
        return self is Dialect.ROS1


class DefinitionSource(ABC):
    """Supplies message definitions to the class generator.

    Identifiers are 'pkg/Name' for ROS1 and 'pkg/msg/Name' for ROS2.
    """

    dialect: Dialect

    @abstractmethod
    def list_definitions(self, package: str) -> Iterator[str]:
        """Yield the identifiers of all messages of a package."""

    @abstractmethod
    def read_lines(self, identifier: str) -> Iterator[str]:
        """Yield the raw text lines of one message definition."""

    def checksum(self, identifier: str) -> Optional[str]:
        return None

    @abstractmethod
    def is_package(self, value: str) -> bool:
        """True when value names a package rather than a single message."""

    def message_name(self, identifier: str) -> str:
        """Identity path of a message: ROS2 'pkg/msg/Name' becomes 'pkg/Name'."""
        parts = identifier.strip("/").split("/")
        if len(parts) < 2:
            return identifier
        return f"{parts[0]}/{parts[-1]}"


def run_command(args: List[str]) -> List[str]:
    """Run a ROS command line tool and return its stdout lines."""
    logger.debug("Running %s", " ".join(args))
    try:
        result = subprocess.run(args, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise DefinitionSourceError(
            f"'{args[0]}' not found. Make sure the ROS environment is sourced."
        ) from e
    except subprocess.CalledProcessError as e:
        raise DefinitionSourceError(
            f"'{' '.join(args)}' failed: {(e.stderr or '').strip()}"
        ) from e
    return result.stdout.splitlines()
