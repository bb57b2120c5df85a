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
"""Tests for the StubEngine test double."""

import pytest

from flyhttpc.client.ports.outbound import BodylessRequest, BodyRequest, ChunkedBody
from flyhttpc.client.shared import next_chunk, stream_to_fun
from flyhttpc.testing import StubEngine


class TestStubEngine:
    def test_default_response(self):
        engine = StubEngine()
        response = engine.request("GET", BodylessRequest("http://x"), {}, {}, "default")
        assert response.status_line.status == 200
        assert response.body == b""

    def test_replays_in_order(self):
        engine = StubEngine().respond(201).respond(202)
        statuses = [engine.request("GET", BodylessRequest("http://x"), {}, {}, "p").status_line.status for _ in range(3)]
        assert statuses == [201, 202, 200]

    def test_records_drained_stream(self):
        engine = StubEngine().echo()
        body = ChunkedBody(next_chunk, stream_to_fun([b"a", b"b"]))
        response = engine.request("POST", BodyRequest("http://x", [], "", body), {"timeout": 1}, {}, "p")
        assert engine.last_call.sent_body == b"ab"
        assert engine.last_call.http_options == {"timeout": 1}
        assert response.body == [b"ab"]

    def test_raises_queued_error(self):
        engine = StubEngine().fail(RuntimeError("boom"))
        with pytest.raises(RuntimeError):
            engine.request("GET", BodylessRequest("http://x"), {}, {}, "p")
        assert len(engine.calls) == 1
