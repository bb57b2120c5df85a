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
"""Multipart descriptor: an ordered set of parts rendered lazily as multipart/form-data."""

from __future__ import annotations

import mimetypes
import secrets
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path

from flyhttpc.kernel.exceptions import MultipartException

_CRLF = b"\r\n"
_FILE_CHUNK_SIZE = 64 * 1024

PartContent = bytes | str | Iterable[bytes] | Path


def generate_boundary() -> str:
    """Random boundary: 16 random bytes, hex encoded."""
    return secrets.token_hex(16)


@dataclass
class Part:
    """One part of a multipart body."""

    name: str
    content: PartContent
    filename: str | None = None
    headers: list[tuple[str, str]] = field(default_factory=list)

    def disposition(self) -> str:
        value = f'form-data; name="{_quote(self.name)}"'
        if self.filename is not None:
            value += f'; filename="{_quote(self.filename)}"'
        return value

    def render_headers(self) -> bytes:
        lines = [f"content-disposition: {self.disposition()}"]
        lines.extend(f"{k}: {v}" for k, v in self.headers)
        return "".join(f"{line}\r\n" for line in lines).encode("utf-8")

    def iter_content(self) -> Iterator[bytes]:
        content = self.content
        if isinstance(content, str):
            yield content.encode("utf-8")
        elif isinstance(content, (bytes, bytearray, memoryview)):
            yield bytes(content)
        elif isinstance(content, Path):
            try:
                with content.open("rb") as f:
                    while chunk := f.read(_FILE_CHUNK_SIZE):
                        yield chunk
            except OSError as exc:
                raise MultipartException(
                    f"Cannot read multipart file '{content}'",
                    code="multipart_file",
                    context={"part": self.name, "path": str(content)},
                ) from exc
        else:
            for chunk in content:
                yield chunk.encode("utf-8") if isinstance(chunk, str) else bytes(chunk)


class Multipart:
    """Builder for multipart/form-data bodies.

    Usage::

        mp = (Multipart()
            .add_field("title", "report")
            .add_file(Path("report.csv"), name="upload"))

        env = Env(method=Method.POST, url="https://example.com/upload", body=mp)

    Nothing is read or rendered until :meth:`body` is iterated.
    """

    def __init__(self, boundary: str | None = None) -> None:
        self.boundary = boundary or generate_boundary()
        self.parts: list[Part] = []
        self.content_type_params: list[str] = []

    def add_content_type_param(self, param: str) -> Multipart:
        """Append a parameter (e.g. ``charset=utf-8``) to the content-type header."""
        self.content_type_params.append(param)
        return self

    def add_field(self, name: str, value: str | bytes, headers: list[tuple[str, str]] | None = None) -> Multipart:
        """Add a plain form field."""
        if not isinstance(value, (str, bytes)):
            raise MultipartException(
                f"Multipart field '{name}' must be str or bytes, got {type(value).__name__}",
                code="multipart_field",
                context={"part": name},
            )
        self.parts.append(Part(name=name, content=value, headers=list(headers or [])))
        return self

    def add_file(
        self,
        path: str | Path,
        name: str = "file",
        filename: str | None = None,
        headers: list[tuple[str, str]] | None = None,
        detect_content_type: bool = False,
    ) -> Multipart:
        """Add a file part streamed from *path* when the body is consumed."""
        path = Path(path)
        filename = filename if filename is not None else path.name
        part_headers = list(headers or [])
        if detect_content_type:
            part_headers.append(("content-type", _guess_type(filename)))
        self.parts.append(Part(name=name, content=path, filename=filename, headers=part_headers))
        return self

    def add_file_content(
        self,
        data: bytes | str | Iterable[bytes],
        filename: str,
        name: str = "file",
        headers: list[tuple[str, str]] | None = None,
        detect_content_type: bool = False,
    ) -> Multipart:
        """Add a file part from in-memory data or an iterable of chunks."""
        part_headers = list(headers or [])
        if detect_content_type:
            part_headers.append(("content-type", _guess_type(filename)))
        self.parts.append(Part(name=name, content=data, filename=filename, headers=part_headers))
        return self

    def headers(self) -> list[tuple[str, str]]:
        """Headers the request needs to carry this body."""
        params = "; ".join([f"boundary={self.boundary}", *self.content_type_params])
        return [("content-type", f"multipart/form-data; {params}")]

    def body(self) -> Iterator[bytes]:
        """Lazily render the encoded body."""
        delimiter = b"--" + self.boundary.encode("ascii")
        for part in self.parts:
            yield delimiter + _CRLF
            yield part.render_headers() + _CRLF
            yield from part.iter_content()
            yield _CRLF
        yield delimiter + b"--" + _CRLF


def _guess_type(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')
