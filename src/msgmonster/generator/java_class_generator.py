from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from msgmonster.config import GeneratorConfig
from msgmonster.errors import GenerationError, MsgmonsterError
from msgmonster.generator.code_writer import CodeWriter
from msgmonster.logging_config import get_logger
from msgmonster.models import Declaration, MessageDefinition, PlainField
from msgmonster.naming import format_class_name, format_method_name
from msgmonster.parser.definition_parser import parse_definition
from msgmonster.sources.base import DefinitionSource
from msgmonster.substitution import Substitutions, Substitutor
from msgmonster.template_set import TemplateSet

logger = get_logger(__name__)

ENUM_TYPE_NAME = "UnknownType"
ARRAYS_IMPORT = "java.util.Arrays"
OBJECTS_IMPORT = "java.util.Objects"
XJSON_IMPORT = "id.xfunction.XJson"


class GenerationStage(Enum):
    START = 0
    HEADER_EMITTED = 1
    PACKAGE_EMITTED = 2
    IMPORTS_EMITTED = 3
    DOC_EMITTED = 4
    METADATA_EMITTED = 5
    BODY_OPEN = 6
    FIELDS_EMITTED = 7
    ACCESSORS_EMITTED = 8
    IDENTITY_METHODS_EMITTED = 9
    BODY_CLOSED = 10
    GLOBAL_SUBSTITUTED = 11
    WRITTEN = 12
    SKIPPED = 13


class _ClassBuild:
    """State of one class being generated. Stages only move forward."""

    def __init__(self, class_name: str):
        self.class_name = class_name
        self.stage = GenerationStage.START
        self.writer = CodeWriter()
        self.substitutions = Substitutions()

    def advance(self, stage: GenerationStage):
        if self.stage in (GenerationStage.WRITTEN, GenerationStage.SKIPPED):
            raise GenerationError(f"{self.class_name} is already {self.stage.name}")
        if stage is not GenerationStage.SKIPPED and stage.value <= self.stage.value:
            raise GenerationError(
                f"Cannot move {self.class_name} from {self.stage.name} to {stage.name}"
            )
        self.stage = stage


@dataclass
class GenerationReport:
    generated: List[Path] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)


def _javadoc_lines(text: str) -> List[str]:
    return [line.replace("*/", "*&#47;") for line in text.split("\n")]


def _quote(text: str) -> str:
    return f'"{text}"'


def _hash_code_expression(f: PlainField) -> str:
    if f.is_array:
        return f"Arrays.hashCode({f.name})"
    return f.name


def _equals_expression(f: PlainField) -> str:
    if f.is_array:
        return f"Arrays.equals({f.name}, other.{f.name})"
    if f.is_primitive:
        return f"{f.name} == other.{f.name}"
    return f"Objects.equals({f.name}, other.{f.name})"


def _to_string_expression(f: PlainField) -> str:
    # XJson renders arrays itself
    return f"{_quote(f.name)}, {f.name}"


class JavaClassGenerator:
    """Generates one Java class per ROS message definition.

    Sections are rendered from template fragments with their local values
    substituted right away. Values which belong to the whole definition
    (className, msgName, md5sum) are substituted over the complete class text
    at the end.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        source: DefinitionSource,
        templates: Optional[TemplateSet] = None,
    ):
        self.config = config
        self.source = source
        self.templates = templates or TemplateSet(config.template_dir)
        self.substitutor = Substitutor()

    def output_path(self, identifier: str) -> Path:
        return self.config.output_dir / f"{format_class_name(identifier)}.java"

    def generate(self, identifier: str) -> Optional[Path]:
        """Generate the class for one definition.

        Returns the written file, or None when the file already exists.
        """
        logger.info("Processing %s", identifier)
        build = _ClassBuild(format_class_name(identifier))
        out_file = self.output_path(identifier)
        if out_file.exists():
            logger.info("%s already exists, skipping", out_file)
            build.advance(GenerationStage.SKIPPED)
            return None
        definition = parse_definition(
            self.source.read_lines(identifier),
            self.source.message_name(identifier),
            self.config.runtime_package,
        )
        checksum = self.source.checksum(identifier)
        text = self._render(build, definition, checksum)
        # "x" never replaces a file created in the meantime
        try:
            with open(out_file, "x", encoding="utf-8") as f:
                f.write(text)
        except FileExistsError:
            raise
        except Exception:
            # drop the partial file
            out_file.unlink(missing_ok=True)
            raise
        build.advance(GenerationStage.WRITTEN)
        logger.info("Generated %s", out_file)
        return out_file

    def generate_all(self, value: str) -> GenerationReport:
        """Generate classes for a package, or for a single definition."""
        report = GenerationReport()
        identifiers: Iterable[str]
        if self.source.is_package(value):
            identifiers = self.source.list_definitions(value)
        else:
            identifiers = [value]
        for identifier in identifiers:
            try:
                out_file = self.generate(identifier)
            except (MsgmonsterError, OSError) as e:
                if not self.config.keep_going:
                    raise
                logger.error("Failed to generate %s: %s", identifier, e)
                report.failed.append((identifier, str(e)))
                continue
            if out_file is None:
                report.skipped.append(identifier)
            else:
                report.generated.append(out_file)
        return report

    def render(self, definition: MessageDefinition, checksum: Optional[str] = None) -> str:
        """Return the Java source for a parsed definition without writing it."""
        return self._render(_ClassBuild(format_class_name(definition.name)), definition, checksum)

    def _render(self, build: _ClassBuild, definition: MessageDefinition,
                checksum: Optional[str]) -> str:
        build.substitutions.put("msgName", definition.name)
        if checksum:
            build.substitutions.put("md5sum", checksum)

        self._generate_header(build)
        self._generate_package(build)
        self._generate_imports(build, definition)
        self._generate_class_javadoc(build, definition)
        self._generate_message_metadata(build, definition, checksum)
        build.substitutions.put("className", build.class_name)
        self._open_body(build)
        self._generate_class_fields(build, definition)
        self._generate_with_methods(build, definition)
        self._generate_identity_methods(build, definition)
        build.writer.close_block()
        build.advance(GenerationStage.BODY_CLOSED)

        text = self.substitutor.substitute(build.writer.text(), build.substitutions.as_dict())
        build.advance(GenerationStage.GLOBAL_SUBSTITUTED)
        return text

    def _generate_header(self, build: _ClassBuild):
        build.writer.write_block(self.templates.render("header"))
        build.advance(GenerationStage.HEADER_EMITTED)

    def _generate_package(self, build: _ClassBuild):
        build.writer.writeln(f"package {self.config.java_package};")
        build.writer.writeln()
        build.advance(GenerationStage.PACKAGE_EMITTED)

    def _collect_imports(self, definition: MessageDefinition) -> List[str]:
        runtime = self.config.runtime_package
        imports = {f"{runtime}.Message", f"{runtime}.MessageMetadata"}
        for f in definition.fields:
            if f.is_array:
                imports.add(ARRAYS_IMPORT)
            if f.java_full_type:
                imports.add(f.java_full_type)
            else:
                logger.debug("No import for field %s of type %s", f.name, f.type_token)
        if definition.fields:
            imports.update({OBJECTS_IMPORT, XJSON_IMPORT})
        return sorted(imports)

    def _generate_imports(self, build: _ClassBuild, definition: MessageDefinition):
        imports = self._collect_imports(definition)
        build.writer.write_block(self.templates.render("imports", imports=imports))
        build.writer.writeln()
        build.advance(GenerationStage.IMPORTS_EMITTED)

    def _write_javadoc(self, writer: CodeWriter, text: str):
        writer.write_block(self.templates.render("javadoc", lines=_javadoc_lines(text)))

    def _generate_class_javadoc(self, build: _ClassBuild, definition: MessageDefinition):
        comment = f"Definition for {definition.name}"
        if definition.comment.strip():
            comment += f"\n\n<p>{definition.comment}"
        self._write_javadoc(build.writer, comment)
        build.advance(GenerationStage.DOC_EMITTED)

    def _generate_message_metadata(self, build: _ClassBuild, definition: MessageDefinition,
                                   checksum: Optional[str]):
        items = ["name = ${className}.NAME"]
        if len(definition.fields) > 1:
            names = ", ".join(_quote(f.name) for f in definition.fields)
            items.append(f"fields = {{ {names} }}")
        if self.source.dialect.has_checksum and checksum:
            items.append('md5sum = "${md5sum}"')
        metadata = self.substitutor.expand_lines(
            self.templates.render("class_message_metadata"), items, ","
        )
        build.writer.write_block(metadata)
        build.advance(GenerationStage.METADATA_EMITTED)

    def _open_body(self, build: _ClassBuild):
        build.writer.open_block("public class ${className} implements Message, Cloneable {")
        build.writer.writeln()
        build.writer.write_block(self.templates.render("class_fields_header"))
        build.advance(GenerationStage.BODY_OPEN)

    def _write_declaration(self, build: _ClassBuild, template: str, declaration: Declaration):
        local = build.substitutions.derive(
            fieldType=declaration.java_type,
            fieldName=declaration.name,
            arraySize=str(declaration.array_size),
        )
        if declaration.comment:
            self._write_javadoc(build.writer, declaration.comment)
        body = self.substitutor.substitute(self.templates.render(template), local)
        build.writer.write_block(body)

    def _generate_enums(self, build: _ClassBuild, definition: MessageDefinition):
        for index, enum_def in enumerate(definition.enums, start=1):
            name = ENUM_TYPE_NAME if index == 1 else f"{ENUM_TYPE_NAME}{index}"
            build.writer.writeln()
            build.writer.open_block(f"public enum {name} {{")
            for member in enum_def.members:
                self._write_declaration(build, "enum_field", member)
            build.writer.close_block()

    def _generate_class_fields(self, build: _ClassBuild, definition: MessageDefinition):
        self._generate_enums(build, definition)
        if definition.fields:
            build.writer.writeln()
        for f in definition.fields:
            if f.is_array:
                template = "class_field_fixed_size_array" if f.array_size > 0 else "class_field_array"
            elif f.is_primitive:
                template = "class_field_primitive"
            else:
                template = "class_field"
            self._write_declaration(build, template, f)
        build.advance(GenerationStage.FIELDS_EMITTED)

    def _generate_with_methods(self, build: _ClassBuild, definition: MessageDefinition):
        for f in definition.fields:
            template = "with_method"
            field_type = f.java_type
            if f.is_array:
                field_type += "..."
                if f.array_size > 0:
                    template = "with_method_for_fixed_size_array"
            local = build.substitutions.derive(
                fieldType=field_type,
                fieldName=f.name,
                arraySize=str(f.array_size),
                methodName=format_method_name("with", f.name),
            )
            build.writer.writeln()
            build.writer.write_block(
                self.substitutor.substitute(self.templates.render(template), local)
            )
        build.advance(GenerationStage.ACCESSORS_EMITTED)

    def _generate_identity_methods(self, build: _ClassBuild, definition: MessageDefinition):
        fields = definition.fields
        sections = [
            ("hash_code", [_hash_code_expression(f) for f in fields], ","),
            ("equals", [_equals_expression(f) for f in fields], " &&"),
            ("to_string", [_to_string_expression(f) for f in fields], ","),
        ]
        for template, items, separator in sections:
            body = self.substitutor.expand_lines(self.templates.render(template), items, separator)
            if body is None:
                continue
            build.writer.writeln()
            build.writer.write_block(body)
        build.advance(GenerationStage.IDENTITY_METHODS_EMITTED)
