"""Map a single proto field to a TypeScript type expression."""

from __future__ import annotations

from typing import Dict, Optional

from protoc_gen_tsd.models import Field, FieldKind

# Field kind -> TypeScript type
SCALAR_TYPE_MAP: Dict[FieldKind, str] = {
    FieldKind.NUMERIC: "number",
    FieldKind.BOOLEAN: "boolean",
    FieldKind.STRING: "string",
}

UNKNOWN_TYPE = "unknown"

# Well-known wrapper message -> nullable primitive. Wrapper messages never
# get a declaration of their own.
WRAPPER_TYPES: Dict[str, str] = {
    ".google.protobuf.DoubleValue": "number | null",
    ".google.protobuf.FloatValue": "number | null",
    ".google.protobuf.Int64Value": "number | null",
    ".google.protobuf.UInt64Value": "number | null",
    ".google.protobuf.Int32Value": "number | null",
    ".google.protobuf.UInt32Value": "number | null",
    ".google.protobuf.BoolValue": "boolean | null",
    ".google.protobuf.StringValue": "string | null",
    ".google.protobuf.BytesValue": "string | null",
}


def is_wrapper_type(full_name: str) -> bool:
    """Check whether a fully qualified message name is a scalar wrapper."""
    return full_name in WRAPPER_TYPES


def short_type_name(type_name: Optional[str]) -> str:
    """Return the last segment of a (possibly qualified) type name."""
    if not type_name:
        return UNKNOWN_TYPE
    return type_name.split(".")[-1]


def _base_type(field: Field) -> str:
    if field.kind in SCALAR_TYPE_MAP:
        return SCALAR_TYPE_MAP[field.kind]
    if field.kind in (FieldKind.ENUM_REF, FieldKind.MESSAGE_REF):
        if field.type_name in WRAPPER_TYPES:
            return WRAPPER_TYPES[field.type_name]
        return short_type_name(field.type_name)
    return UNKNOWN_TYPE


def map_field_type(field: Field, aliases: Dict[str, str]) -> str:
    """Resolve the TypeScript type of a field.

    A reference to a registered map entry becomes a read-only mapping and
    wins over the repeated label; other repeated fields become
    ``ReadonlyArray<T>``.
    """
    ts_type = _base_type(field)
    if ts_type in aliases:
        return f"Readonly<{aliases[ts_type]}>"
    if field.is_repeated:
        return f"ReadonlyArray<{ts_type}>"
    return ts_type
