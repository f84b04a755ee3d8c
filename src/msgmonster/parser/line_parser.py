"""Line level parsing of ROS message definitions.

This is the first parsing pass: every line is classified on its own,
without looking at its neighbours.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from msgmonster.errors import DefinitionParseError

_TOKEN_SEPARATORS = re.compile(r"[\s=]+")
_LEADING_HASH = re.compile(r"^#\s*")
_INTEGER = re.compile(r"^\+?\d+$")


class LineKind(Enum):
    BLANK = "blank"
    COMMENT = "comment"
    FIELD = "field"


@dataclass
class FieldLine:
    """Tokens of a single field or constant declaration."""

    type_token: str
    name: str
    value: str = ""
    inline_comment: str = ""

    def int_value(self) -> Optional[int]:
        """Return the value as a non-negative integer, or None."""
        if _INTEGER.match(self.value):
            return int(self.value)
        return None


def normalize_lines(lines: Iterable[str]) -> List[str]:
    """Trim every line and drop the leading blank ones."""
    result = [line.strip() for line in lines]
    while result and not result[0]:
        result.pop(0)
    return result


def classify_line(line: str) -> LineKind:
    stripped = line.strip()
    if not stripped:
        return LineKind.BLANK
    if stripped.startswith("#"):
        return LineKind.COMMENT
    return LineKind.FIELD


def clean_comment(text: str) -> str:
    """Strip a leading '#' and surrounding whitespace from comment text."""
    return _LEADING_HASH.sub("", text.strip()).strip()


def parse_field_line(line: str) -> FieldLine:
    """Split a declaration like 'int8 FOO=1  # comment' into its tokens."""
    body, hash_sign, comment = line.partition("#")
    # ROS2 type tokens may carry "<=" bounds
    head = body.split(None, 1)
    tokens = head[:1]
    if len(head) > 1:
        tokens += [t for t in _TOKEN_SEPARATORS.split(head[1].strip()) if t]
    if len(tokens) < 2:
        raise DefinitionParseError(f"Cannot parse field declaration '{line.strip()}'")
    return FieldLine(
        type_token=tokens[0],
        name=tokens[1],
        value=tokens[2] if len(tokens) > 2 else "",
        inline_comment=clean_comment(comment) if hash_sign else "",
    )
