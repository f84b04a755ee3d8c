from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from msgmonster.type_classifier import TypeInfo, TypeKind


@dataclass
class Declaration:
    """Shape shared by plain fields and enum members."""

    name: str
    type_token: str
    type_info: TypeInfo
    value: str = ""
    comment: str = ""

    @property
    def is_array(self) -> bool:
        return self.type_info.is_array

    @property
    def array_size(self) -> int:
        return self.type_info.array_size

    @property
    def is_primitive(self) -> bool:
        return self.type_info.kind is TypeKind.PRIMITIVE

    @property
    def is_basic(self) -> bool:
        return self.type_info.kind is TypeKind.BASIC

    @property
    def is_foreign(self) -> bool:
        return self.type_info.kind is TypeKind.FOREIGN

    @property
    def is_std_msg(self) -> bool:
        return self.type_info.kind is TypeKind.STD_MSG

    @property
    def is_other_message_type(self) -> bool:
        return self.type_info.kind is TypeKind.OTHER

    @property
    def java_type(self) -> str:
        return self.type_info.java_type

    @property
    def java_full_type(self) -> Optional[str]:
        return self.type_info.import_path


@dataclass
class PlainField(Declaration):
    """A data field, or a constant which is not part of an enum group."""


@dataclass
class EnumMember(Declaration):
    """An integer constant belonging to a contiguous 0,1,2,... group."""

    @property
    def ordinal(self) -> int:
        return int(self.value)


ParsedLine = Union[PlainField, EnumMember]


@dataclass
class EnumDefinition:
    members: List[EnumMember] = field(default_factory=list)


@dataclass
class MessageDefinition:
    name: str
    comment: str = ""
    fields: List[PlainField] = field(default_factory=list)
    enums: List[EnumDefinition] = field(default_factory=list)
