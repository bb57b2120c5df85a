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
"""Request encoding: pick the engine request form for the body's runtime shape."""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import Any

from flyhttpc.client.ports.outbound import BodylessRequest, BodyRequest, ChunkedBody, EngineRequest
from flyhttpc.client.shared import next_chunk, stream_to_fun
from flyhttpc.env import Env, Method, build_url
from flyhttpc.multipart import Multipart

logger = logging.getLogger(__name__)

# These methods are sent without a content type and body.
BODYLESS_METHODS = frozenset({Method.GET, Method.OPTIONS, Method.HEAD, Method.TRACE})

DEFAULT_MULTIPART_CONTENT_TYPE = "text/plain"

_BINARY = (bytes, bytearray, memoryview, str)


def encode_request(env: Env, bodyless_methods: Collection[Method] = BODYLESS_METHODS) -> EngineRequest:
    """Build the engine request form for *env*."""
    url = build_url(env.url, env.query)
    headers = normalize_headers(env.headers)
    content_type = _content_type(headers)
    return _encode(env.method, url, headers, content_type, env.body, frozenset(bodyless_methods))


def normalize_headers(headers: Iterable[tuple[Any, Any]]) -> list[tuple[str, str]]:
    """Coerce header pairs to ``(str, str)``, keeping caller casing and order."""
    return [(_to_str(key), _to_str(value)) for key, value in headers]


def _encode(
    method: Method,
    url: str,
    headers: list[tuple[str, str]],
    content_type: str,
    body: Any,
    bodyless: frozenset[Method],
) -> EngineRequest:
    # Some servers reject a DELETE without a body.
    if method is Method.DELETE and body is None:
        return _encode(method, url, headers, content_type, b"", bodyless)

    if body is None:
        return BodylessRequest(url, headers)

    if method in bodyless:
        logger.debug("Dropping request body for %s %s", method.value, url)
        return BodylessRequest(url, headers)

    if isinstance(body, Multipart):
        headers, content_type, producer = _encode_multipart(headers, body)
        return _encode(method, url, headers, content_type, producer, bodyless)

    if _is_stream(body):
        return _encode(method, url, headers, content_type, stream_to_fun(body), bodyless)

    if callable(body):
        return BodyRequest(url, headers, content_type, ChunkedBody(next_chunk, body))

    return BodyRequest(url, headers, content_type, _to_binary(body))


def _encode_multipart(
    headers: list[tuple[str, str]], multipart: Multipart
) -> tuple[list[tuple[str, str]], str, Any]:
    merged = normalize_headers([*headers, *multipart.headers()])
    content_type = DEFAULT_MULTIPART_CONTENT_TYPE
    for index, (key, value) in enumerate(merged):
        if key.lower() == "content-type":
            content_type = value
            del merged[index]
            break
    return merged, content_type, stream_to_fun(multipart.body())


def _content_type(headers: list[tuple[str, str]]) -> str:
    for key, value in headers:
        if key.lower() == "content-type":
            return value
    return ""


def _is_stream(body: Any) -> bool:
    return isinstance(body, Iterable) and not isinstance(body, (*_BINARY, dict))


def _to_binary(body: Any) -> bytes:
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)
    raise TypeError(f"Unsupported request body type: {type(body).__name__}")


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)
