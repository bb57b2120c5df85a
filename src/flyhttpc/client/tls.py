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
"""TLS capability probe and the default TLS option block.

The probe runs once per process, the first time an adapter is constructed,
and its result is cached here. Calls never re-probe.
"""

from __future__ import annotations

import logging
import ssl
import sys
import threading
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

CERT_CHAIN_DEPTH = 3
CRL_CACHE_REFRESH_MS = 1000


@dataclass(frozen=True)
class TlsCapabilities:
    """What the local TLS stack can do without caller-supplied trust anchors."""

    openssl_version: str
    system_trust_store: bool
    crl_check: bool

    @property
    def inject_defaults(self) -> bool:
        """True when the adapter should inject :func:`default_tls_options`."""
        return self.system_trust_store


_capabilities: TlsCapabilities | None = None
_lock = threading.Lock()


def probe() -> TlsCapabilities:
    """Inspect the ssl module and the platform trust store."""
    paths = ssl.get_default_verify_paths()
    system_store = bool(paths.cafile or paths.capath) or sys.platform == "win32"
    return TlsCapabilities(
        openssl_version=ssl.OPENSSL_VERSION,
        system_trust_store=system_store,
        crl_check=hasattr(ssl, "VERIFY_CRL_CHECK_LEAF"),
    )


def ensure_capabilities() -> TlsCapabilities:
    """Probe on first use and cache the result process-wide."""
    global _capabilities
    if _capabilities is None:
        with _lock:
            if _capabilities is None:
                _capabilities = probe()
                logger.debug(
                    "TLS capabilities probed: openssl=%s system_trust_store=%s",
                    _capabilities.openssl_version,
                    _capabilities.system_trust_store,
                )
    return _capabilities


def default_tls_options() -> dict[str, Any]:
    """Peer verification against system CAs with hostname and CRL checks."""
    return {
        "ssl": {
            "verify": "verify_peer",
            "cacerts": "system",
            "depth": CERT_CHAIN_DEPTH,
            "hostname_check": "https",
            "crl_check": True,
            "crl_cache": {"type": "internal", "http_ms": CRL_CACHE_REFRESH_MS},
        }
    }
