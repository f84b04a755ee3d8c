from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from msgmonster.sources.base import Dialect
from msgmonster.type_classifier import DEFAULT_RUNTIME_PACKAGE


@dataclass
class GeneratorConfig:
    """Settings shared by every class generated in one run."""

    java_package: str
    output_dir: Path
    dialect: Dialect = Dialect.ROS1
    runtime_package: str = DEFAULT_RUNTIME_PACKAGE
    keep_going: bool = False
    # None means the templates shipped with the package
    template_dir: Optional[Path] = None

    def __post_init__(self):
        self.output_dir = Path(self.output_dir)
        if isinstance(self.dialect, str):
            self.dialect = Dialect(self.dialect)
