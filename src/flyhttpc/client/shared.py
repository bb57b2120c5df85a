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
"""Producer-function protocol shared by the encoder and the engines.

A *producer* is a zero-argument callable. Each call returns either
``(chunk, next_producer)`` or :data:`EOF`. Engines never see the original
body shape: they pull chunks through :func:`next_chunk` until EOF.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import Any, Union


class _EOF:
    __slots__ = ()

    def __repr__(self) -> str:
        return "EOF"

    def __bool__(self) -> bool:
        return False


EOF = _EOF()
"""Terminal marker returned by a producer when the body is exhausted."""

Producer = Callable[[], Union[tuple[Any, "Producer"], _EOF]]


def stream_to_fun(stream: Iterable[Any]) -> Producer:
    """Adapt any iterable into a producer without materializing it."""
    iterator = iter(stream)

    def producer() -> tuple[Any, Producer] | _EOF:
        try:
            item = next(iterator)
        except StopIteration:
            return EOF
        return item, producer

    return producer


def next_chunk(producer: Producer) -> tuple[Any, Producer] | _EOF:
    """Pull one step from *producer*."""
    return producer()


def iter_chunks(
    producer: Producer,
    step: Callable[[Producer], tuple[Any, Producer] | _EOF] = next_chunk,
) -> Iterator[bytes]:
    """Drive *producer* through *step* until EOF, yielding bytes chunks."""
    state = producer
    while True:
        result = step(state)
        if result is EOF:
            return
        chunk, state = result
        if isinstance(chunk, str):
            chunk = chunk.encode("utf-8")
        if chunk:
            yield bytes(chunk)
