from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Tuple

from protoc_gen_tsd.errors import InvalidDescriptorError
from protoc_gen_tsd.generator.templates import get_template_env
from protoc_gen_tsd.models import Message
from protoc_gen_tsd.type_mapper import map_field_type


@dataclass
class RenderedField:
    key: str
    ts_type: str


def partition_fields(
    message: Message,
    aliases: Dict[str, str],
) -> Tuple[List[RenderedField], List[List[RenderedField]]]:
    """Split a message's fields into plain fields and per-oneof groups.

    Declaration order is kept inside every group and groups follow oneof
    index order. Oneofs that no field belongs to are dropped.
    """
    plain: List[RenderedField] = []
    groups: List[List[RenderedField]] = [[] for _ in message.oneofs]

    for f in message.fields:
        rendered = RenderedField(key=f.json_name, ts_type=map_field_type(f, aliases))
        if f.oneof_index is None:
            plain.append(rendered)
            continue
        if not 0 <= f.oneof_index < len(groups):
            raise InvalidDescriptorError(
                f"Field '{f.name}' in message '{message.name}' references "
                f"oneof index {f.oneof_index}, but the message declares "
                f"{len(groups)} oneof(s)"
            )
        groups[f.oneof_index].append(rendered)

    return plain, [g for g in groups if g]


def generate_message(message: Message, aliases: Dict[str, str]) -> str:
    """Generate the TypeScript declaration for one message."""
    fields, oneof_groups = partition_fields(message, aliases)
    template = get_template_env().get_template("message.d.ts.j2")
    return template.render(
        name=message.name,
        fields=fields,
        oneof_groups=oneof_groups,
    )
