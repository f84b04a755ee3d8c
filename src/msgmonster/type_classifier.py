from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Dict, Optional

from msgmonster.errors import DefinitionParseError
from msgmonster.naming import format_class_name

DEFAULT_RUNTIME_PACKAGE = "id.jrosmessages"

# ROS primitive type -> Java primitive type
PRIMITIVE_TYPE_MAP: Dict[str, str] = {
    "bool": "boolean",
    "byte": "byte",
    "char": "byte",
    "int8": "byte",
    "uint8": "byte",
    "int16": "short",
    "uint16": "short",
    "int32": "int",
    "uint32": "int",
    "int64": "long",
    "uint64": "long",
    "float32": "float",
    "float64": "double",
}

# ROS basic type -> import path relative to the runtime package
BASIC_TYPE_MAP: Dict[str, str] = {
    "string": "std_msgs.StringMessage",
    "wstring": "std_msgs.StringMessage",
    "time": "primitives.Time",
    "duration": "primitives.Duration",
}

# Standard messages which may be referenced without a package prefix
STD_MSG_TYPE_MAP: Dict[str, str] = {
    "Header": "std_msgs.HeaderMessage",
}

_ARRAY_RE = re.compile(r"^(?P<element>[^\[\]]+)\[(?P<bound>[^\]]*)\]$")
_STRING_BOUND_RE = re.compile(r"<=\s*\d+$")


class TypeKind(Enum):
    PRIMITIVE = "primitive"
    BASIC = "basic"
    STD_MSG = "std_msg"
    FOREIGN = "foreign"
    OTHER = "other"


@dataclass(frozen=True)
class TypeInfo:
    """Resolved Java type of a ROS type token.

    For arrays java_type is the element type and array_size is 0 for
    dynamic (unbounded or ROS2 bounded) arrays.
    """

    kind: TypeKind
    java_type: str
    import_path: Optional[str] = None
    is_array: bool = False
    array_size: int = 0


def _split_array(type_token: str):
    if "[" not in type_token:
        return type_token, False, 0
    match = _ARRAY_RE.match(type_token)
    if match is None:
        raise DefinitionParseError(f"Malformed array type '{type_token}'")
    bound = match.group("bound").strip()
    if not bound or bound.startswith("<="):
        return match.group("element"), True, 0
    if not bound.isdigit():
        raise DefinitionParseError(f"Malformed array size in type '{type_token}'")
    return match.group("element"), True, int(bound)


def _classify_element(element: str, runtime_package: str):
    # ROS2 bounded strings: string<=N, wstring<=N
    element = _STRING_BOUND_RE.sub("", element)
    if element in PRIMITIVE_TYPE_MAP:
        return TypeKind.PRIMITIVE, PRIMITIVE_TYPE_MAP[element], None
    if element in BASIC_TYPE_MAP:
        import_path = f"{runtime_package}.{BASIC_TYPE_MAP[element]}"
        return TypeKind.BASIC, import_path.rsplit(".", 1)[1], import_path
    if "/" in element:
        # ROS2 spells foreign types as pkg/msg/Type
        parts = element.split("/")
        class_name = format_class_name(parts[-1])
        return TypeKind.FOREIGN, class_name, f"{runtime_package}.{parts[0]}.{class_name}"
    if element in STD_MSG_TYPE_MAP:
        import_path = f"{runtime_package}.{STD_MSG_TYPE_MAP[element]}"
        return TypeKind.STD_MSG, import_path.rsplit(".", 1)[1], import_path
    # same package message or unknown token: rendered without an import
    return TypeKind.OTHER, format_class_name(element), None


@lru_cache(maxsize=None)
def classify(type_token: str, runtime_package: str = DEFAULT_RUNTIME_PACKAGE) -> TypeInfo:
    """Classify a ROS type token into its Java representation."""
    element, is_array, array_size = _split_array(type_token.strip())
    kind, java_type, import_path = _classify_element(element, runtime_package)
    return TypeInfo(
        kind=kind,
        java_type=java_type,
        import_path=import_path,
        is_array=is_array,
        array_size=array_size,
    )
