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
"""Option resolution: merge option tiers and split engine options from adapter options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flyhttpc.client.tls import TlsCapabilities, default_tls_options, ensure_capabilities
from flyhttpc.env import Env

# Redirects stay off unless the caller asks for them, whatever the engine default.
OVERRIDE_DEFAULTS: dict[str, Any] = {"autoredirect": False}

HTTP_OPTIONS = frozenset(
    {
        "timeout",
        "connect_timeout",
        "ssl",
        "autoredirect",
        "proxy_auth",
        "version",
        "relaxed",
        "url_encode",
    }
)

PROFILE_KEY = "profile"
DEFAULT_PROFILE = "default"


@dataclass(frozen=True)
class ResolvedOptions:
    """Merged options with engine-native and adapter views."""

    options: dict[str, Any] = field(default_factory=dict)
    default_profile: str = DEFAULT_PROFILE

    @property
    def http_options(self) -> dict[str, Any]:
        """Allow-listed options understood natively by the engine."""
        return {k: v for k, v in self.options.items() if k in HTTP_OPTIONS and k != PROFILE_KEY}

    @property
    def adapter_options(self) -> dict[str, Any]:
        """Engine extras: everything outside the allow-list, minus the profile."""
        return {k: v for k, v in self.options.items() if k not in HTTP_OPTIONS and k != PROFILE_KEY}

    @property
    def profile(self) -> str:
        return self.options.get(PROFILE_KEY) or self.default_profile


def merge_options(defaults: dict[str, Any], env: Env, opts: dict[str, Any]) -> dict[str, Any]:
    """defaults < env.opts["adapter"] < opts; later tiers win on key collisions."""
    return {**defaults, **(env.opts.get("adapter") or {}), **opts}


def resolve_options(
    env: Env,
    opts: dict[str, Any] | None = None,
    defaults: dict[str, Any] | None = None,
    capabilities: TlsCapabilities | None = None,
    default_profile: str = DEFAULT_PROFILE,
) -> ResolvedOptions:
    """Resolve the options for one call.

    *defaults* are adapter-level defaults (e.g. a configured timeout) and sit
    at the lowest tier together with the TLS block, when the TLS stack calls
    for one. ``autoredirect`` only changes when the caller passes it.
    """
    caller = dict(opts or {})
    capabilities = capabilities or ensure_capabilities()

    base: dict[str, Any] = {**OVERRIDE_DEFAULTS, **(defaults or {})}
    if capabilities.inject_defaults:
        base.update(default_tls_options())

    merged = merge_options(base, env, caller)
    for key, value in OVERRIDE_DEFAULTS.items():
        if key not in caller:
            merged[key] = value

    return ResolvedOptions(options=merged, default_profile=default_profile)
