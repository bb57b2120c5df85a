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
"""Tests for the multipart descriptor."""

from pathlib import Path

import pytest

from flyhttpc.kernel.exceptions import MultipartException
from flyhttpc.multipart import Multipart


def render(mp: Multipart) -> bytes:
    return b"".join(mp.body())


class TestHeaders:
    def test_boundary_in_content_type(self):
        assert Multipart(boundary="abc").headers() == [("content-type", "multipart/form-data; boundary=abc")]

    def test_content_type_params(self):
        mp = Multipart(boundary="abc").add_content_type_param("charset=utf-8")
        assert mp.headers() == [("content-type", "multipart/form-data; boundary=abc; charset=utf-8")]

    def test_random_boundary(self):
        assert Multipart().boundary != Multipart().boundary
        assert len(Multipart().boundary) == 32


class TestBody:
    def test_fields(self):
        mp = Multipart(boundary="B").add_field("a", "1").add_field("b", b"2", headers=[("x-extra", "y")])
        assert render(mp) == (
            b"--B\r\n"
            b'content-disposition: form-data; name="a"\r\n'
            b"\r\n"
            b"1\r\n"
            b"--B\r\n"
            b'content-disposition: form-data; name="b"\r\n'
            b"x-extra: y\r\n"
            b"\r\n"
            b"2\r\n"
            b"--B--\r\n"
        )

    def test_empty(self):
        assert render(Multipart(boundary="B")) == b"--B--\r\n"

    def test_file_content_with_detected_type(self):
        mp = Multipart(boundary="B").add_file_content(b"{}", "data.json", name="doc", detect_content_type=True)
        body = render(mp)
        assert b'content-disposition: form-data; name="doc"; filename="data.json"\r\n' in body
        assert b"content-type: application/json\r\n" in body

    def test_file_content_from_chunks(self):
        mp = Multipart(boundary="B").add_file_content(iter([b"ab", b"cd"]), "x.bin")
        assert b"\r\n\r\nabcd\r\n--B--" in render(mp)

    def test_file_from_disk(self, tmp_path: Path):
        path = tmp_path / "report.txt"
        path.write_bytes(b"line1\nline2\n")
        body = render(Multipart(boundary="B").add_file(path, detect_content_type=True))
        assert b'name="file"; filename="report.txt"' in body
        assert b"content-type: text/plain\r\n" in body
        assert b"line1\nline2\n" in body

    def test_quotes_are_escaped(self):
        body = render(Multipart(boundary="B").add_field('we"ird', "v"))
        assert b'name="we\\"ird"' in body

    def test_body_is_lazy(self, tmp_path: Path):
        missing = tmp_path / "absent.bin"
        mp = Multipart(boundary="B").add_file(missing)
        body = mp.body()
        assert next(body) == b"--B\r\n"


class TestErrors:
    def test_missing_file_raises_on_consumption(self, tmp_path: Path):
        mp = Multipart(boundary="B").add_file(tmp_path / "absent.bin")
        with pytest.raises(MultipartException) as info:
            render(mp)
        assert info.value.context["path"].endswith("absent.bin")

    def test_field_value_must_be_binary(self):
        with pytest.raises(MultipartException):
            Multipart().add_field("n", 3)
