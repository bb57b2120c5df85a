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
"""Tests for option resolution and the engine/adapter option split."""

from datetime import timedelta

from flyhttpc.client.options import HTTP_OPTIONS, resolve_options
from flyhttpc.client.tls import TlsCapabilities, default_tls_options
from flyhttpc.env import Env

NO_TLS = TlsCapabilities(openssl_version="test", system_trust_store=False, crl_check=True)
WITH_TLS = TlsCapabilities(openssl_version="test", system_trust_store=True, crl_check=True)


class TestAutoredirect:
    def test_disabled_by_default(self):
        resolved = resolve_options(Env(), capabilities=NO_TLS)
        assert resolved.http_options["autoredirect"] is False

    def test_environment_cannot_enable_it(self):
        env = Env(opts={"adapter": {"autoredirect": True}})
        resolved = resolve_options(env, {}, capabilities=NO_TLS)
        assert resolved.http_options["autoredirect"] is False

    def test_caller_can_enable_it(self):
        env = Env(opts={"adapter": {"autoredirect": True}})
        resolved = resolve_options(env, {"autoredirect": True}, capabilities=NO_TLS)
        assert resolved.http_options["autoredirect"] is True

    def test_caller_can_disable_it_explicitly(self):
        env = Env(opts={"adapter": {"autoredirect": True}})
        resolved = resolve_options(env, {"autoredirect": False}, capabilities=NO_TLS)
        assert resolved.http_options["autoredirect"] is False


class TestPrecedence:
    def test_environment_overrides_defaults(self):
        env = Env(opts={"adapter": {"timeout": 5}})
        resolved = resolve_options(env, defaults={"timeout": 30}, capabilities=NO_TLS)
        assert resolved.http_options["timeout"] == 5

    def test_caller_overrides_environment(self):
        env = Env(opts={"adapter": {"timeout": 5}})
        resolved = resolve_options(env, {"timeout": timedelta(seconds=1)}, capabilities=NO_TLS)
        assert resolved.http_options["timeout"] == timedelta(seconds=1)

    def test_missing_adapter_entry_is_ignored(self):
        resolved = resolve_options(Env(opts={"adapter": None}), {"relaxed": True}, capabilities=NO_TLS)
        assert resolved.http_options == {"autoredirect": False, "relaxed": True}


class TestTlsDefaults:
    def test_injected_when_supported(self):
        resolved = resolve_options(Env(), capabilities=WITH_TLS)
        ssl_opts = resolved.http_options["ssl"]
        assert ssl_opts["verify"] == "verify_peer"
        assert ssl_opts["cacerts"] == "system"
        assert ssl_opts["depth"] == 3
        assert ssl_opts["hostname_check"] == "https"
        assert ssl_opts["crl_check"] is True
        assert ssl_opts["crl_cache"] == {"type": "internal", "http_ms": 1000}

    def test_not_injected_without_system_store(self):
        resolved = resolve_options(Env(), capabilities=NO_TLS)
        assert "ssl" not in resolved.http_options

    def test_caller_replaces_block(self):
        resolved = resolve_options(Env(), {"ssl": {"verify": "verify_none"}}, capabilities=WITH_TLS)
        assert resolved.http_options["ssl"] == {"verify": "verify_none"}

    def test_environment_replaces_block(self):
        env = Env(opts={"adapter": {"ssl": {"cacertfile": "/etc/ca.pem"}}})
        resolved = resolve_options(env, capabilities=WITH_TLS)
        assert resolved.http_options["ssl"] == {"cacertfile": "/etc/ca.pem"}

    def test_default_block_is_fresh_each_time(self):
        first = default_tls_options()
        first["ssl"]["depth"] = 9
        assert default_tls_options()["ssl"]["depth"] == 3


class TestSplit:
    def test_profile_in_neither_view(self):
        resolved = resolve_options(Env(), {"profile": "internal", "timeout": 1}, capabilities=NO_TLS)
        assert "profile" not in resolved.http_options
        assert "profile" not in resolved.adapter_options
        assert resolved.profile == "internal"

    def test_views_are_disjoint(self):
        opts = {"timeout": 1, "connect_timeout": 2, "body_format": "binary", "chunk_size": 10}
        resolved = resolve_options(Env(), opts, capabilities=NO_TLS)
        assert set(resolved.http_options) <= HTTP_OPTIONS
        assert resolved.adapter_options == {"body_format": "binary", "chunk_size": 10}
        assert not set(resolved.http_options) & set(resolved.adapter_options)

    def test_default_profile(self):
        assert resolve_options(Env(), capabilities=NO_TLS).profile == "default"

    def test_configured_default_profile(self):
        resolved = resolve_options(Env(), capabilities=NO_TLS, default_profile="edge")
        assert resolved.profile == "edge"
