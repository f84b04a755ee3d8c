from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from msgmonster.config import GeneratorConfig
from msgmonster.errors import MsgmonsterError
from msgmonster.generator.java_class_generator import GenerationReport, JavaClassGenerator
from msgmonster.logging_config import configure_logging
from msgmonster.sources.base import DefinitionSource, Dialect
from msgmonster.sources.folder_source import FolderDefinitionSource
from msgmonster.sources.ros1_source import Ros1DefinitionSource
from msgmonster.sources.ros2_source import Ros2DefinitionSource
from msgmonster.type_classifier import DEFAULT_RUNTIME_PACKAGE


def create_source(dialect: Dialect, msg_folder: Optional[str] = None) -> DefinitionSource:
    """Pick the definition source: a folder of .msg files or the ROS tools."""
    if msg_folder:
        return FolderDefinitionSource(msg_folder, dialect)
    if dialect is Dialect.ROS1:
        return Ros1DefinitionSource()
    return Ros2DefinitionSource()


def run(config: GeneratorConfig, input_value: str,
        source: Optional[DefinitionSource] = None) -> GenerationReport:
    """Main pipeline: list definitions, parse them, generate Java classes."""
    source = source or create_source(config.dialect)
    config.output_dir.mkdir(parents=True, exist_ok=True)
    print(f"Output folder {config.output_dir}")

    generator = JavaClassGenerator(config, source)
    report = generator.generate_all(input_value)

    for path in report.generated:
        print(f"  Generated: {path}")
    for identifier in report.skipped:
        print(f"  Skipped (already exists): {identifier}")
    for identifier, error in report.failed:
        print(f"  FAILED: {identifier}: {error}", file=sys.stderr)
    print(
        f"Done! {len(report.generated)} generated, {len(report.skipped)} skipped, "
        f"{len(report.failed)} failed"
    )
    return report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msgmonster",
        description="Generate Java classes from ROS message definitions",
    )
    parser.add_argument(
        "ros_version",
        choices=[d.value for d in Dialect],
        help="ROS version the definitions belong to",
    )
    parser.add_argument(
        "java_package",
        help="Java package name for generated code",
    )
    parser.add_argument(
        "input",
        help="ROS package name (e.g. geometry_msgs) or a single message (e.g. geometry_msgs/Point)",
    )
    parser.add_argument(
        "output_dir",
        help="Folder where generated .java files are written",
    )
    parser.add_argument(
        "--msg-folder",
        help="Read .msg files from this folder instead of the installed ROS tools",
    )
    parser.add_argument(
        "--runtime-package",
        default=DEFAULT_RUNTIME_PACKAGE,
        help="Java package of the message runtime (default: %(default)s)",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Continue with other messages when one of them fails",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    dialect = Dialect(args.ros_version)
    config = GeneratorConfig(
        java_package=args.java_package,
        output_dir=Path(args.output_dir),
        dialect=dialect,
        runtime_package=args.runtime_package,
        keep_going=args.keep_going,
    )
    try:
        report = run(config, args.input, create_source(dialect, args.msg_folder))
    except (MsgmonsterError, OSError) as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(1)
    if report.failed:
        sys.exit(1)


if __name__ == "__main__":
    main()
