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
"""flyhttpc Client — request-environment adapter over a pluggable HTTP engine."""

from flyhttpc.client.decoder import decode_response
from flyhttpc.client.encoder import encode_request
from flyhttpc.client.errors import normalize_errors
from flyhttpc.client.httpc import HttpcAdapter
from flyhttpc.client.options import ResolvedOptions, resolve_options
from flyhttpc.client.ports.outbound import HttpEnginePort
from flyhttpc.client.shared import EOF, next_chunk, stream_to_fun

__all__ = [
    "EOF",
    "HttpEnginePort",
    "HttpcAdapter",
    "ResolvedOptions",
    "decode_response",
    "encode_request",
    "next_chunk",
    "normalize_errors",
    "resolve_options",
    "stream_to_fun",
]
