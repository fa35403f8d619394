from __future__ import annotations

from protoc_gen_tsd.generator.templates import get_template_env
from protoc_gen_tsd.models import ProtoEnum


def generate_enum(enum: ProtoEnum) -> str:
    """Generate a string-literal union of the enum's value names.

    Values keep declaration order; aliased values with the same name are
    emitted once per declaration.
    """
    template = get_template_env().get_template("enum.d.ts.j2")
    return template.render(name=enum.name, values=enum.values)
