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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

import pytest

from flyhttpc.core.config import Config
from flyhttpc.logging.port import LoggingPort
from flyhttpc.logging.structlog_adapter import StructlogAdapter


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    for name in ("flyhttpc.client", "flyhttpc.encoder"):
        logging.getLogger(name).setLevel(logging.NOTSET)


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyhttpc": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger().level == logging.DEBUG

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyhttpc": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"flyhttpc": {"logging": {"level": {"root": "INFO", "flyhttpc.client": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"flyhttpc.client": "DEBUG"}
        assert logging.getLogger("flyhttpc.client").level == logging.DEBUG


class TestStructlogAdapterLogging:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("flyhttpc.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_stdlib_records_are_rendered(self, capsys):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flyhttpc": {"logging": {"format": "json"}}}))
        logging.getLogger("flyhttpc.client.errors").warning("Connection failed: %s", "nxdomain")
        out = capsys.readouterr().out
        assert "Connection failed: nxdomain" in out
        assert '"logger": "flyhttpc.client.errors"' in out

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("flyhttpc.encoder", "WARNING")
        assert logging.getLogger("flyhttpc.encoder").level == logging.WARNING
