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
"""Adapter configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from flyhttpc.core.config import config_properties


@dataclass
class ProfileProperties:
    """Settings for one logical engine instance (flyhttpc.adapter.profiles.<name>.*)."""

    proxy: str | None = None
    http2: bool = False
    max_connections: int = 100
    max_keepalive_connections: int = 20
    trust_env: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProfileProperties:
        known = {f: data[f] for f in cls.__dataclass_fields__ if f in data}
        return cls(**known)


@config_properties(prefix="flyhttpc.adapter")
@dataclass
class AdapterProperties:
    """Configuration for the HTTP adapter (flyhttpc.adapter.*)."""

    default_profile: str = "default"
    # Methods whose request body is dropped before reaching the engine.
    bodyless_methods: list[str] = field(default_factory=lambda: ["GET", "OPTIONS", "HEAD", "TRACE"])
    # Seconds; None leaves the engine default in place.
    timeout: float | None = None
    profiles: dict[str, dict[str, Any]] = field(default_factory=dict)

    def profile(self, name: str) -> ProfileProperties:
        """Settings for *name*; unknown profiles get the defaults."""
        return ProfileProperties.from_dict(self.profiles.get(name) or {})
