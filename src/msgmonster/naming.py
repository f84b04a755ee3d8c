from __future__ import annotations

import re
from pathlib import PurePosixPath

CLASS_NAME_SUFFIX = "Message"

_WORD_SEPARATORS = re.compile(r"[_\-\s]+")


def to_camel_case(text: str) -> str:
    """Convert snake_case or kebab-case text to CamelCase.

    Only the first letter of every part is changed, so already camel cased
    parts keep their inner capitals: frame_ID -> FrameID.
    """
    parts = _WORD_SEPARATORS.split(text)
    return "".join(p[:1].upper() + p[1:] for p in parts if p)


def message_basename(path: str) -> str:
    """Return the terminal segment of a definition path without .msg extension."""
    name = PurePosixPath(path.replace("\\", "/")).name
    if name.endswith(".msg"):
        name = name[: -len(".msg")]
    return name


def format_class_name(path: str) -> str:
    """Derive the Java class name for a definition path.

    geometry_msgs/Point -> PointMessage
    test_msgs/msg/my_type.msg -> MyTypeMessage
    """
    return to_camel_case(message_basename(path)) + CLASS_NAME_SUFFIX


def format_method_name(verb: str, field_name: str) -> str:
    """Build an accessor name, e.g. ("with", "linear_x") -> "withLinearX"."""
    return verb + to_camel_case(field_name)
