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
"""Outbound port: the HTTP engine the adapter drives."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Union, runtime_checkable

from flyhttpc.client.shared import Producer


@dataclass(frozen=True)
class ChunkedBody:
    """Marker for a streamed body: pull ``next_chunk(producer)`` until EOF."""

    next_chunk: Any
    producer: Producer


@dataclass(frozen=True)
class BodylessRequest:
    """Target and headers only; the engine sends no body and no content type."""

    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class BodyRequest:
    """Target, headers, content type and body (bytes or :class:`ChunkedBody`)."""

    url: str
    headers: list[tuple[str, str]]
    content_type: str
    body: bytes | ChunkedBody


EngineRequest = Union[BodylessRequest, BodyRequest]


@dataclass(frozen=True)
class StatusLine:
    version: str
    status: int
    reason: str


@dataclass(frozen=True)
class EngineResponse:
    """Raw engine output.

    ``headers`` pairs may be ``bytes`` or ``str``; ``body`` is either a list
    of chunks or a single ``bytes`` blob, depending on the engine.
    """

    status_line: StatusLine
    headers: list[tuple[Any, Any]]
    body: list[bytes] | bytes


@runtime_checkable
class HttpEnginePort(Protocol):
    """Abstract HTTP engine.

    Implementations raise :class:`~flyhttpc.kernel.exceptions.EngineConnectException`
    when no connection could be established; any other failure is raised in
    the engine's own error types.
    """

    def request(
        self,
        method: str,
        request: EngineRequest,
        http_options: dict[str, Any],
        adapter_options: dict[str, Any],
        profile: str,
    ) -> EngineResponse: ...

    def close(self) -> None: ...
