"""Compile .proto sources into a FileDescriptorSet with the protoc binary."""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import List, Optional

from google.protobuf import descriptor_pb2 as d2
from google.protobuf.message import DecodeError

from protoc_gen_tsd.errors import RequestError


def read_descriptor_set(path: str) -> d2.FileDescriptorSet:
    """Read a serialized FileDescriptorSet from disk."""
    fds = d2.FileDescriptorSet()
    try:
        with open(path, "rb") as f:
            fds.ParseFromString(f.read())
    except OSError as e:
        raise RequestError(f"Cannot read descriptor set '{path}': {e}") from e
    except DecodeError as e:
        raise RequestError(f"Malformed descriptor set '{path}': {e}") from e
    return fds


def compile_descriptor_set(
    proto_paths: List[str],
    include_dirs: Optional[List[str]] = None,
) -> d2.FileDescriptorSet:
    """Run protoc over proto_paths and return the resulting descriptor set.

    The directory of each proto file is added to the include path after any
    explicit include_dirs.
    """
    # protoc matches files against include paths by prefix, so both must be absolute
    proto_paths = [os.path.abspath(p) for p in proto_paths]
    includes: List[str] = [os.path.abspath(d) for d in include_dirs or []]
    for proto_path in proto_paths:
        includes.append(os.path.dirname(proto_path))

    # de-dup while preserving order
    seen = set()
    inc_args: List[str] = []
    for inc in includes:
        if inc and inc not in seen:
            seen.add(inc)
            inc_args.extend(["-I", inc])

    with tempfile.TemporaryDirectory() as td:
        desc_path = os.path.join(td, "descriptor_set.pb")
        cmd = ["protoc", "--include_imports", f"--descriptor_set_out={desc_path}"] + inc_args + proto_paths
        try:
            subprocess.run(cmd, check=True, capture_output=True)
        except FileNotFoundError as e:
            raise RequestError("'protoc' not found. Please install Protocol Buffers compiler and ensure it is in PATH.") from e
        except subprocess.CalledProcessError as e:
            raise RequestError(f"protoc failed: {e.stderr.decode('utf-8', errors='ignore')}") from e

        return read_descriptor_set(desc_path)
