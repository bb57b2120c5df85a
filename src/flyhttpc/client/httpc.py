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
"""HttpcAdapter — drives an HTTP engine from a request environment."""

from __future__ import annotations

import logging
from typing import Any

from flyhttpc.client.decoder import decode_response
from flyhttpc.client.encoder import BODYLESS_METHODS, encode_request
from flyhttpc.client.errors import normalize_errors
from flyhttpc.client.options import DEFAULT_PROFILE, resolve_options
from flyhttpc.client.ports.outbound import BodyRequest, ChunkedBody, HttpEnginePort
from flyhttpc.client.tls import ensure_capabilities
from flyhttpc.config.properties.adapter import AdapterProperties
from flyhttpc.core.config import Config
from flyhttpc.env import Env, Method

logger = logging.getLogger(__name__)


class HttpcAdapter:
    """Request-environment adapter in front of an :class:`HttpEnginePort`.

    Each :meth:`call` resolves options, encodes the request, issues it on the
    engine instance selected by the ``profile`` option, and decodes the
    response into the same ``Env``:

        adapter = HttpcAdapter(HttpxEngineAdapter())
        env = adapter.call(Env(method=Method.GET, url="https://example.com"))
        env.status, env.headers, env.body

    Redirects are not followed unless the caller passes ``autoredirect=True``.
    """

    def __init__(
        self,
        engine: HttpEnginePort,
        default_profile: str = DEFAULT_PROFILE,
        bodyless_methods: list[str] | None = None,
        defaults: dict[str, Any] | None = None,
    ) -> None:
        self._engine = engine
        self._default_profile = default_profile
        self._bodyless = (
            frozenset(Method(m.upper()) for m in bodyless_methods)
            if bodyless_methods is not None
            else BODYLESS_METHODS
        )
        self._defaults = dict(defaults or {})
        self._capabilities = ensure_capabilities()

    @classmethod
    def from_config(cls, config: Config, engine: HttpEnginePort | None = None) -> HttpcAdapter:
        """Build an adapter from ``flyhttpc.adapter.*`` settings.

        Without an explicit *engine*, an :class:`HttpxEngineAdapter` is
        created from the same properties.
        """
        props = config.bind(AdapterProperties)
        if engine is None:
            from flyhttpc.client.adapters.httpx_adapter import HttpxEngineAdapter

            engine = HttpxEngineAdapter(props)
        defaults = {"timeout": props.timeout} if props.timeout is not None else {}
        return cls(
            engine,
            default_profile=props.default_profile,
            bodyless_methods=props.bodyless_methods,
            defaults=defaults,
        )

    @property
    def engine(self) -> HttpEnginePort:
        return self._engine

    def call(self, env: Env, opts: dict[str, Any] | None = None) -> Env:
        """Perform the request described by *env* and return it populated."""
        resolved = resolve_options(
            env,
            opts,
            defaults=self._defaults,
            capabilities=self._capabilities,
            default_profile=self._default_profile,
        )
        request = encode_request(env, self._bodyless)

        logger.debug(
            "Dispatching %s %s profile=%s body=%s",
            env.method.value,
            request.url,
            resolved.profile,
            _body_form(request),
        )

        with normalize_errors():
            response = self._engine.request(
                env.method.value,
                request,
                resolved.http_options,
                resolved.adapter_options,
                resolved.profile,
            )

        return decode_response(env, response)

    def close(self) -> None:
        """Close the underlying engine."""
        self._engine.close()


def _body_form(request: Any) -> str:
    if not isinstance(request, BodyRequest):
        return "none"
    if isinstance(request.body, ChunkedBody):
        return "chunked"
    return f"binary({len(request.body)})"
