from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List

from protoc_gen_tsd.errors import RequestError
from protoc_gen_tsd.generator.enum_generator import generate_enum
from protoc_gen_tsd.generator.message_generator import generate_message
from protoc_gen_tsd.map_entry import build_map_aliases
from protoc_gen_tsd.models import GeneratedArtifact, ProtoFile
from protoc_gen_tsd.type_mapper import is_wrapper_type

DECLARATION_SUFFIX = ".d.ts"


def artifact_name(type_name: str) -> str:
    return f"{type_name}{DECLARATION_SUFFIX}"


def generate_file_artifacts(proto_file: ProtoFile) -> List[GeneratedArtifact]:
    """Generate declarations for one file: messages first, then enums."""
    artifacts: List[GeneratedArtifact] = []

    for message in proto_file.messages:
        if is_wrapper_type(message.full_name):
            continue
        aliases = build_map_aliases(message)
        artifacts.append(
            GeneratedArtifact(
                name=artifact_name(message.name),
                content=generate_message(message, aliases),
            )
        )

    for enum in proto_file.enums:
        artifacts.append(
            GeneratedArtifact(name=artifact_name(enum.name), content=generate_enum(enum))
        )

    return artifacts


def generate_artifacts(proto_files: Iterable[ProtoFile]) -> List[GeneratedArtifact]:
    """Run one generation pass over all files, in order.

    Any GenerationError propagates, so a failing pass yields no artifacts.
    """
    artifacts: List[GeneratedArtifact] = []
    for proto_file in proto_files:
        artifacts.extend(generate_file_artifacts(proto_file))
    return artifacts


def write_artifacts(artifacts: List[GeneratedArtifact], output_dir: str) -> List[str]:
    """Write artifacts into output_dir.

    Returns list of written file paths. Raises RequestError if the
    directory or a file cannot be written.
    """
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise RequestError(f"Cannot create output directory '{output_dir}': {e}") from e

    written: List[str] = []
    for artifact in artifacts:
        file_path = os.path.join(output_dir, artifact.name)
        try:
            Path(file_path).write_text(artifact.content, encoding="utf-8")
        except OSError as e:
            raise RequestError(f"Cannot write '{file_path}': {e}") from e
        written.append(file_path)

    return written
