"""Transform protobuf descriptors into the generator's ProtoFile models."""

from __future__ import annotations

from typing import Dict, Iterable, List

from google.protobuf import descriptor_pb2 as d2

from protoc_gen_tsd.models import (
    Field,
    FieldKind,
    Message,
    NestedType,
    OneofDecl,
    ProtoEnum,
    ProtoFile,
)

FDP = d2.FieldDescriptorProto

# Descriptor field type -> FieldKind. TYPE_GROUP is intentionally absent.
FIELD_KIND_MAP: Dict[int, FieldKind] = {
    FDP.TYPE_DOUBLE: FieldKind.NUMERIC,
    FDP.TYPE_FLOAT: FieldKind.NUMERIC,
    FDP.TYPE_INT64: FieldKind.NUMERIC,
    FDP.TYPE_UINT64: FieldKind.NUMERIC,
    FDP.TYPE_INT32: FieldKind.NUMERIC,
    FDP.TYPE_FIXED64: FieldKind.NUMERIC,
    FDP.TYPE_FIXED32: FieldKind.NUMERIC,
    FDP.TYPE_UINT32: FieldKind.NUMERIC,
    FDP.TYPE_SFIXED32: FieldKind.NUMERIC,
    FDP.TYPE_SFIXED64: FieldKind.NUMERIC,
    FDP.TYPE_SINT32: FieldKind.NUMERIC,
    FDP.TYPE_SINT64: FieldKind.NUMERIC,
    FDP.TYPE_BOOL: FieldKind.BOOLEAN,
    FDP.TYPE_STRING: FieldKind.STRING,
    FDP.TYPE_BYTES: FieldKind.STRING,
    FDP.TYPE_ENUM: FieldKind.ENUM_REF,
    FDP.TYPE_MESSAGE: FieldKind.MESSAGE_REF,
}


def to_json_name(name: str) -> str:
    """Derive the JSON name protoc would assign: foo_bar_baz -> fooBarBaz."""
    result = []
    capitalize_next = False
    for ch in name:
        if ch == "_":
            capitalize_next = True
        elif capitalize_next:
            result.append(ch.upper())
            capitalize_next = False
        else:
            result.append(ch)
    return "".join(result)


def transform_field(fd: d2.FieldDescriptorProto) -> Field:
    return Field(
        name=fd.name,
        json_name=fd.json_name if fd.HasField("json_name") else to_json_name(fd.name),
        kind=FIELD_KIND_MAP.get(fd.type, FieldKind.UNRECOGNIZED),
        type_name=fd.type_name or None,
        is_repeated=fd.label == FDP.LABEL_REPEATED,
        oneof_index=fd.oneof_index if fd.HasField("oneof_index") else None,
    )


def _transform_nested(desc: d2.DescriptorProto) -> NestedType:
    return NestedType(
        name=desc.name,
        is_map_entry=desc.options.map_entry,
        fields=[transform_field(f) for f in desc.field],
    )


def transform_message(desc: d2.DescriptorProto, package: str) -> Message:
    full_name = f".{package}.{desc.name}" if package else f".{desc.name}"
    return Message(
        name=desc.name,
        full_name=full_name,
        fields=[transform_field(f) for f in desc.field],
        oneofs=[OneofDecl(name=o.name, index=i) for i, o in enumerate(desc.oneof_decl)],
        nested_types=[_transform_nested(n) for n in desc.nested_type],
    )


def transform_enum(desc: d2.EnumDescriptorProto) -> ProtoEnum:
    return ProtoEnum(name=desc.name, values=[v.name for v in desc.value])


def transform_file(fdp: d2.FileDescriptorProto) -> ProtoFile:
    """Transform a FileDescriptorProto, keeping declaration order throughout."""
    return ProtoFile(
        name=fdp.name,
        package=fdp.package,
        messages=[transform_message(m, fdp.package) for m in fdp.message_type],
        enums=[transform_enum(e) for e in fdp.enum_type],
    )


def load_files(file_descriptors: Iterable[d2.FileDescriptorProto]) -> List[ProtoFile]:
    return [transform_file(fdp) for fdp in file_descriptors]
