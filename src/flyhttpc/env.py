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
"""Request environment shared by the adapter's caller and the adapter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import urlencode


class Method(str, Enum):
    """HTTP request methods understood by the adapter."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    CONNECT = "CONNECT"


@dataclass
class Env:
    """A single request/response exchange.

    The caller fills in the request side; :meth:`HttpcAdapter.call` reads it
    and overwrites ``status``, ``headers`` and ``body`` with the response.

    ``body`` may be ``None``, raw binary (``bytes``/``bytearray``/``str``),
    a :class:`~flyhttpc.multipart.Multipart`, an iterable of chunks, or a
    producer callable (see :mod:`flyhttpc.client.shared`).

    ``opts["adapter"]`` holds adapter options supplied with the request
    itself; they sit between the adapter defaults and the caller's options.
    """

    method: Method = Method.GET
    url: str = ""
    query: list[tuple[str, Any]] = field(default_factory=list)
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: Any = None
    status: int | None = None
    opts: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.method, Method):
            self.method = Method(str(self.method).upper())


def get_header(env: Env, name: str) -> str | None:
    """Return the first value of header *name* (case-insensitive), or None."""
    wanted = name.lower()
    for key, value in env.headers:
        if _to_str(key).lower() == wanted:
            return _to_str(value)
    return None


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return str(value)


def build_url(url: str, query: list[tuple[str, Any]]) -> str:
    """Append *query* pairs, in order, to *url*."""
    if not query:
        return url
    separator = "&" if "?" in url else "?"
    return url + separator + urlencode([(str(k), v) for k, v in query])
