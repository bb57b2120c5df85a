# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Response decoding: write an engine response back onto the request environment."""

from __future__ import annotations

from typing import Any

from flyhttpc.client.ports.outbound import EngineResponse
from flyhttpc.env import Env


def decode_response(env: Env, response: EngineResponse) -> Env:
    """Populate ``status``, ``headers`` and ``body`` of *env* from *response*."""
    env.status = response.status_line.status
    env.headers = format_headers(response.headers)
    env.body = format_body(response.body)
    return env


def format_headers(headers: list[tuple[Any, Any]]) -> list[tuple[str, str]]:
    """Stringify every pair and lower-case the key; duplicates are kept."""
    return [(_to_str(key).lower(), _to_str(value)) for key, value in headers]


def format_body(data: Any) -> bytes:
    """Collapse a list of chunks into one ``bytes``; pass ``bytes`` through."""
    if isinstance(data, bytes):
        return data
    if isinstance(data, (list, tuple)):
        return b"".join(_chunk_to_bytes(chunk) for chunk in data)
    raise TypeError(f"Engine returned an unsupported body type: {type(data).__name__}")


def _chunk_to_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    if isinstance(chunk, int):
        return bytes([chunk])
    if isinstance(chunk, (list, tuple)):
        return format_body(chunk)
    return bytes(chunk)


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)
