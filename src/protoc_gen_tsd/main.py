from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, Dict, List

from google.protobuf.compiler import plugin_pb2
from google.protobuf.message import DecodeError, EncodeError

from protoc_gen_tsd.errors import GenerationError, RequestError
from protoc_gen_tsd.generator.artifacts import generate_artifacts, write_artifacts
from protoc_gen_tsd.models import GeneratedArtifact
from protoc_gen_tsd.parser.descriptor_loader import load_files
from protoc_gen_tsd.parser.protoc_runner import compile_descriptor_set, read_descriptor_set

EXIT_GENERATION_ERROR = 1
EXIT_REQUEST_ERROR = 2


def parse_parameter(parameter: str) -> Dict[str, str]:
    """Parse the protoc parameter string: "key=value,flag" -> {key: value, flag: ""}."""
    values: Dict[str, str] = {}
    for chunk in parameter.split(","):
        key, _, value = chunk.partition("=")
        key = key.strip()
        if key:
            values[key] = value.strip()
    return values


def read_request(stream: BinaryIO) -> plugin_pb2.CodeGeneratorRequest:
    request = plugin_pb2.CodeGeneratorRequest()
    try:
        request.ParseFromString(stream.read())
    except DecodeError as e:
        raise RequestError(f"Malformed CodeGeneratorRequest: {e}") from e
    return request


def build_response(artifacts: List[GeneratedArtifact]) -> plugin_pb2.CodeGeneratorResponse:
    response = plugin_pb2.CodeGeneratorResponse()
    for artifact in artifacts:
        response_file = response.file.add()
        response_file.name = artifact.name
        response_file.content = artifact.content
    return response


def process_request(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """Convert every file of the request, in request order."""
    options = parse_parameter(request.parameter)
    artifacts = generate_artifacts(load_files(request.proto_file))
    if "verbose" in options:
        for artifact in artifacts:
            print(f"  Generated {artifact.name}", file=sys.stderr)
    return build_response(artifacts)


def run_plugin(stdin: BinaryIO, stdout: BinaryIO) -> None:
    """protoc plugin protocol: request on stdin, response on stdout.

    Nothing is written to stdout unless the whole request succeeds.
    """
    request = read_request(stdin)
    response = process_request(request)
    try:
        payload = response.SerializeToString()
    except EncodeError as e:
        raise RequestError(f"Cannot serialize CodeGeneratorResponse: {e}") from e
    stdout.write(payload)
    stdout.flush()


def run(descriptor_set: str, proto: List[str], include_dirs: List[str], out_dir: str) -> List[str]:
    """Offline pipeline: load descriptors, generate, write into out_dir."""
    if descriptor_set:
        fds = read_descriptor_set(descriptor_set)
    else:
        fds = compile_descriptor_set(proto, include_dirs)

    artifacts = generate_artifacts(load_files(fds.file))
    written = write_artifacts(artifacts, out_dir)
    for path in written:
        print(f"Generated: {path}")
    return written


def main():
    parser = argparse.ArgumentParser(
        description="Generate TypeScript type declarations (.d.ts) from protobuf descriptors. "
        "Without arguments, runs as a protoc plugin on stdin/stdout.",
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--descriptor-set",
        help="Serialized FileDescriptorSet to convert (protoc --descriptor_set_out)",
    )
    source.add_argument(
        "--proto",
        nargs="+",
        help=".proto file(s) to compile with protoc and convert",
    )
    parser.add_argument(
        "-I", "--include",
        dest="include_dirs",
        action="append",
        default=[],
        help="Extra protoc include directory (repeatable, used with --proto)",
    )
    parser.add_argument(
        "--out",
        help="Output directory for generated .d.ts files",
    )
    args = parser.parse_args()

    offline = bool(args.descriptor_set or args.proto)
    if offline and not args.out:
        parser.error("--out is required with --descriptor-set or --proto")
    if args.out and not offline:
        parser.error("--out requires --descriptor-set or --proto")

    try:
        if offline:
            run(args.descriptor_set, args.proto, args.include_dirs, args.out)
        else:
            run_plugin(sys.stdin.buffer, sys.stdout.buffer)
    except GenerationError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(EXIT_GENERATION_ERROR)
    except RequestError as e:
        print(f"FATAL: {e}", file=sys.stderr)
        sys.exit(EXIT_REQUEST_ERROR)


if __name__ == "__main__":
    main()
