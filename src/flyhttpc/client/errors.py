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
"""Engine error normalization."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from flyhttpc.kernel.exceptions import ConnectionRefusedException, EngineConnectException

logger = logging.getLogger(__name__)


@contextmanager
def normalize_errors() -> Iterator[None]:
    """Collapse engine connect failures into :class:`ConnectionRefusedException`.

    Every other exception propagates untouched.
    """
    try:
        yield
    except EngineConnectException as exc:
        logger.warning("Connection failed: %s", exc.reason)
        raise ConnectionRefusedException(context={"reason": exc.reason}) from exc
