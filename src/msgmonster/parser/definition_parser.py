"""Build a MessageDefinition out of the raw lines of a .msg definition.

Parsing happens in two passes. The first one classifies every line as blank,
comment or field (see line_parser). The second one decides which comment
lines document the message itself and which document the field below them,
and groups integer constants 0, 1, 2, ... into enums.

Which comment lines belong to the message is a heuristic:

- a comment block on the top of the file, separated from the rest by a blank
  line, documents the message
- if there are several fields and no comment lines between them, everything
  above the first field documents the message even without the blank line
- otherwise comments above a field document that field
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from msgmonster.logging_config import get_logger
from msgmonster.models import EnumDefinition, EnumMember, MessageDefinition, ParsedLine, PlainField
from msgmonster.parser.line_parser import (
    FieldLine,
    LineKind,
    classify_line,
    clean_comment,
    normalize_lines,
    parse_field_line,
)
from msgmonster.type_classifier import DEFAULT_RUNTIME_PACKAGE, classify

logger = get_logger(__name__)


def _join_comment(lines: List[str]) -> str:
    return "\n".join(clean_comment(line) for line in lines).strip()


def _find_body_start(lines: List[str], kinds: List[LineKind], field_line_nums: List[int]):
    """Return (index where field scanning starts, message comment lines)."""
    first_field = field_line_nums[0]
    pos = kinds.index(LineKind.BLANK) if LineKind.BLANK in kinds else 0
    comment_lines: List[str] = []
    if pos < first_field:
        comment_lines = lines[:pos]
    else:
        pos = 0
    if len(field_line_nums) > 1:
        non_blank = [k for k in kinds[first_field:] if k is not LineKind.BLANK]
        if len(non_blank) == len(field_line_nums):
            comment_lines = lines[:first_field]
            pos = first_field
    return pos, comment_lines


class _EnumGrouper:
    """Collects contiguous 0, 1, 2, ... integer constants into enums."""

    def __init__(self, definition: MessageDefinition):
        self._definition = definition
        self._current: Optional[EnumDefinition] = None

    def accept(self, field_line: FieldLine) -> bool:
        """Return True when the line was taken as an enum member."""
        value = field_line.int_value()
        if value is None:
            return False
        if value == 0:
            self.close()
            self._current = EnumDefinition()
        if self._current is None or value != len(self._current.members):
            return False
        return True

    def add(self, member: EnumMember):
        self._current.members.append(member)

    def close(self):
        if self._current is not None and self._current.members:
            self._definition.enums.append(self._current)
        self._current = None


def _to_declaration(field_line: FieldLine, comment: str, is_enum_member: bool,
                    runtime_package: str) -> ParsedLine:
    cls = EnumMember if is_enum_member else PlainField
    return cls(
        name=field_line.name,
        type_token=field_line.type_token,
        type_info=classify(field_line.type_token, runtime_package),
        value=field_line.value,
        comment=comment,
    )


def parse_definition(
    raw_lines: Iterable[str],
    name: str,
    runtime_package: str = DEFAULT_RUNTIME_PACKAGE,
) -> MessageDefinition:
    """Parse the lines of one message definition.

    Raises DefinitionParseError when a field line has no name.
    """
    lines = normalize_lines(raw_lines)
    kinds = [classify_line(line) for line in lines]
    field_line_nums = [i for i, kind in enumerate(kinds) if kind is LineKind.FIELD]
    if not field_line_nums:
        logger.debug("Definition %s has no fields", name)
        return MessageDefinition(name=name)

    pos, message_comment = _find_body_start(lines, kinds, field_line_nums)
    definition = MessageDefinition(name=name, comment=_join_comment(message_comment))
    grouper = _EnumGrouper(definition)
    comment_buf: List[str] = []

    for i in range(pos, len(lines)):
        kind = kinds[i]
        if kind is LineKind.BLANK:
            continue
        if kind is LineKind.COMMENT:
            # comments after the last field are collected but never attached
            comment_buf.append(clean_comment(lines[i]))
            continue
        field_line = parse_field_line(lines[i])
        if field_line.inline_comment:
            comment_buf.append(field_line.inline_comment)
        comment = "\n".join(comment_buf).strip()
        comment_buf = []
        is_enum_member = grouper.accept(field_line)
        declaration = _to_declaration(field_line, comment, is_enum_member, runtime_package)
        if is_enum_member:
            grouper.add(declaration)
        else:
            definition.fields.append(declaration)
    grouper.close()

    if comment_buf:
        logger.debug("Dropping %d trailing comment line(s) in %s", len(comment_buf), name)
    logger.debug(
        "Parsed %s: %d field(s), %d enum(s)", name, len(definition.fields), len(definition.enums)
    )
    return definition
