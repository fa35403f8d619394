from __future__ import annotations

from typing import Dict

from protoc_gen_tsd.errors import InvalidDescriptorError, UnsupportedNestedTypeError
from protoc_gen_tsd.models import Message
from protoc_gen_tsd.type_mapper import map_field_type


def build_map_aliases(message: Message) -> Dict[str, str]:
    """Register every map entry nested in ``message`` as a keyed-record alias.

    Entries are resolved in declaration order against the aliases registered
    so far, so an entry whose value names a later entry sees only its bare
    name. Any nested type that is not a map entry raises
    UnsupportedNestedTypeError.
    """
    aliases: Dict[str, str] = {}
    for nested in message.nested_types:
        if not nested.is_map_entry:
            raise UnsupportedNestedTypeError(message.name, nested.name)
        if len(nested.fields) != 2:
            raise InvalidDescriptorError(
                f"Map entry '{nested.name}' in message '{message.name}' "
                f"has {len(nested.fields)} field(s), expected key and value"
            )
        key_type = map_field_type(nested.fields[0], aliases)
        value_type = map_field_type(nested.fields[1], aliases)
        aliases[nested.name] = f"{{ [key: {key_type}]: {value_type}; }}"
    return aliases
