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
"""httpx-based HTTP engine adapter."""

from __future__ import annotations

import base64
import json
import logging
import ssl
import threading
from collections.abc import Iterator
from datetime import timedelta
from typing import Any

import httpx

from flyhttpc.client.ports.outbound import (
    BodyRequest,
    ChunkedBody,
    EngineRequest,
    EngineResponse,
    StatusLine,
)
from flyhttpc.client.shared import iter_chunks
from flyhttpc.config.properties.adapter import AdapterProperties
from flyhttpc.kernel.exceptions import EngineConnectException

logger = logging.getLogger(__name__)

ADAPTER_OPTIONS = frozenset({"body_format", "chunk_size"})

_HTTP2_VERSIONS = frozenset({"HTTP/2", "HTTP/2.0", "http2"})


class HttpxEngineAdapter:
    """HTTP engine backed by one ``httpx.Client`` per profile.

    Clients are created lazily the first time a profile is used, from
    ``AdapterProperties.profiles[profile]``. Because TLS settings and the
    HTTP/2 switch live on the client in httpx, calls with a different ``ssl``
    block or ``version`` get their own client under the same profile.
    Clients are never evicted: every distinct ``ssl`` block keeps an open
    client (and its connection pool) until :meth:`close`, so per-call TLS
    settings should come from a small fixed set.

    Response bodies are returned as received on the wire; a
    ``content-encoding`` is left for the caller to undo, matching the
    returned headers.

    Adapter options:
        body_format: ``"chunks"`` (default) returns the body as a list of
            chunks, ``"binary"`` as one ``bytes`` value.
        chunk_size: read size used with ``"chunks"``.
    """

    def __init__(
        self,
        properties: AdapterProperties | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._props = properties or AdapterProperties()
        self._transport = transport
        self._clients: dict[tuple[str, bool, str], httpx.Client] = {}
        self._lock = threading.Lock()

    def request(
        self,
        method: str,
        request: EngineRequest,
        http_options: dict[str, Any],
        adapter_options: dict[str, Any],
        profile: str,
    ) -> EngineResponse:
        unknown = set(adapter_options) - ADAPTER_OPTIONS
        if unknown:
            logger.debug("Ignoring unsupported adapter options: %s", sorted(unknown))

        http2 = http_options.get("version") in _HTTP2_VERSIONS
        client = self._client(profile, http2, http_options.get("ssl"))

        headers = list(request.headers)
        content: bytes | Iterator[bytes] | None = None
        if isinstance(request, BodyRequest):
            headers = _with_content_type(headers, request.content_type)
            content = _content(request.body)

        proxy_auth = http_options.get("proxy_auth")
        if proxy_auth:
            headers.append(("proxy-authorization", _basic_auth(*proxy_auth)))

        try:
            outgoing = client.build_request(
                method,
                request.url,
                headers=headers,
                content=content,
                timeout=_timeout(client.timeout, http_options),
            )
            response = client.send(
                outgoing,
                stream=True,
                follow_redirects=bool(http_options.get("autoredirect", False)),
            )
            try:
                body = _read_body(response, adapter_options)
            finally:
                response.close()
        except (httpx.ConnectError, httpx.ConnectTimeout) as exc:
            raise EngineConnectException(str(exc) or type(exc).__name__, reason=exc) from exc

        return EngineResponse(
            status_line=StatusLine(response.http_version, response.status_code, response.reason_phrase),
            headers=list(response.headers.raw),
            body=body,
        )

    def close(self) -> None:
        """Close every client created so far."""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        for client in clients:
            client.close()

    def _client(self, profile: str, http2: bool, ssl_options: dict[str, Any] | None) -> httpx.Client:
        key = (profile, http2, json.dumps(ssl_options, sort_keys=True, default=str))
        with self._lock:
            client = self._clients.get(key)
            if client is None:
                client = self._build_client(profile, http2, ssl_options)
                self._clients[key] = client
            return client

    def _build_client(self, profile: str, http2: bool, ssl_options: dict[str, Any] | None) -> httpx.Client:
        settings = self._props.profile(profile)
        logger.debug("Creating httpx client for profile=%s http2=%s", profile, http2 or settings.http2)
        kwargs: dict[str, Any] = {
            "http2": http2 or settings.http2,
            "verify": build_ssl_context(ssl_options),
            "trust_env": settings.trust_env,
            "limits": httpx.Limits(
                max_connections=settings.max_connections,
                max_keepalive_connections=settings.max_keepalive_connections,
            ),
        }
        if self._transport is not None:
            kwargs["transport"] = self._transport
        elif settings.proxy:
            kwargs["proxy"] = settings.proxy
        return httpx.Client(**kwargs)


def build_ssl_context(options: dict[str, Any] | None) -> ssl.SSLContext | bool:
    """Translate a TLS option block into an ``ssl.SSLContext``.

    Recognized keys: ``verify`` (``verify_peer``/``verify_none``),
    ``cacerts`` (``"system"``), ``cacertfile``, ``certfile``/``keyfile``,
    ``hostname_check``, ``crl_check`` with ``crlfile``. Without a block httpx
    keeps its own default verification. ``depth`` and ``crl_cache`` have no
    ssl-module equivalent and are not applied.
    """
    if options is None:
        return True

    if options.get("verify") == "verify_none":
        ctx = ssl.create_default_context()
        ctx.check_hostname = False
        ctx.verify_mode = ssl.CERT_NONE
        return ctx

    ctx = ssl.create_default_context(cafile=options.get("cacertfile"))
    ctx.check_hostname = bool(options.get("hostname_check", "https"))
    if options.get("certfile"):
        ctx.load_cert_chain(options["certfile"], options.get("keyfile"))
    # Leaf CRL checking fails every handshake unless CRLs are loaded.
    if options.get("crl_check") and options.get("crlfile"):
        ctx.load_verify_locations(cafile=options["crlfile"])
        ctx.verify_flags |= ssl.VERIFY_CRL_CHECK_LEAF
    return ctx


def _content(body: bytes | ChunkedBody) -> bytes | Iterator[bytes]:
    if isinstance(body, ChunkedBody):
        return iter_chunks(body.producer, step=body.next_chunk)
    return body


def _with_content_type(headers: list[tuple[str, str]], content_type: str) -> list[tuple[str, str]]:
    if not content_type:
        return headers
    kept = [(k, v) for k, v in headers if k.lower() != "content-type"]
    kept.append(("content-type", content_type))
    return kept


def _seconds(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def _timeout(base: httpx.Timeout, http_options: dict[str, Any]) -> httpx.Timeout:
    total = _seconds(http_options.get("timeout"))
    connect = _seconds(http_options.get("connect_timeout"))
    if total is None and connect is None:
        return base
    if total is None:
        return httpx.Timeout(connect=connect, read=base.read, write=base.write, pool=base.pool)
    return httpx.Timeout(total, connect=connect if connect is not None else total)


def _read_body(response: httpx.Response, adapter_options: dict[str, Any]) -> list[bytes] | bytes:
    if adapter_options.get("body_format") == "binary":
        return b"".join(response.iter_raw())
    return list(response.iter_raw(adapter_options.get("chunk_size")))


def _basic_auth(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode()).decode("ascii")
    return f"Basic {token}"
