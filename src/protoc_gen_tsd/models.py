from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional


class FieldKind(Enum):
    """Closed set of field type shapes the type mapper understands."""

    NUMERIC = auto()
    BOOLEAN = auto()
    STRING = auto()
    ENUM_REF = auto()
    MESSAGE_REF = auto()
    UNRECOGNIZED = auto()


@dataclass
class Field:
    name: str
    json_name: str
    kind: FieldKind
    type_name: Optional[str] = None
    is_repeated: bool = False
    oneof_index: Optional[int] = None


@dataclass
class OneofDecl:
    name: str
    index: int


@dataclass
class NestedType:
    """A message declared inside another message.

    Only synthetic map entries (key field first, value field second) are
    supported by the generator.
    """

    name: str
    is_map_entry: bool = False
    fields: List[Field] = field(default_factory=list)


@dataclass
class Message:
    name: str
    full_name: str
    fields: List[Field] = field(default_factory=list)
    oneofs: List[OneofDecl] = field(default_factory=list)
    nested_types: List[NestedType] = field(default_factory=list)


@dataclass
class ProtoEnum:
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class ProtoFile:
    name: str
    package: str = ""
    messages: List[Message] = field(default_factory=list)
    enums: List[ProtoEnum] = field(default_factory=list)


@dataclass(frozen=True)
class GeneratedArtifact:
    name: str
    content: str
