"""Thread-safe 64-bit identifier generator.

Each identifier packs the milliseconds since a custom epoch, the node id of the
generating process and a per-millisecond sequence number (see
:mod:`longseq.layout`). Identifiers from one generator are strictly increasing;
identifiers from generators with distinct node ids never collide.
"""

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime

from longseq.config import GeneratorSettings, load_settings
from longseq.exceptions import ClockRolledBack, SequenceSpinTimeout
from longseq.layout import (
    DEFAULT_EPOCH_MS,
    MAX_NODE_ID,
    MAX_SEQUENCE,
    IdParts,
    current_millis,
    decode,
    encode,
)
from longseq.node import (
    UniquenessSource,
    hardware_uniqueness_source,
    random_uniqueness_source,
    resolve_node_id,
)

logger = logging.getLogger(__name__)


class LongSequenceGenerator:
    """Snowflake-style identifier generator for one node.

    Args:
        node_id: Node id in [0, 1023], fixed for the generator's lifetime.
        epoch_ms: Custom epoch in Unix milliseconds.
        clock: Returns the current Unix time in milliseconds.
        spin_timeout_ms: If set, give up waiting for the clock to advance after
            an exhausted sequence and raise SequenceSpinTimeout.
    """

    def __init__(
        self,
        node_id: int,
        *,
        epoch_ms: int = DEFAULT_EPOCH_MS,
        clock: Callable[[], int] = current_millis,
        spin_timeout_ms: float | None = None,
    ) -> None:
        if not 0 <= node_id <= MAX_NODE_ID:
            raise ValueError(f"node_id must be between 0 and {MAX_NODE_ID}, got {node_id}")

        self._node_id = node_id
        self._epoch_ms = epoch_ms
        self._clock = clock
        self._spin_timeout_ms = spin_timeout_ms

        self._lock = threading.Lock()
        self._last_timestamp = -1
        self._sequence = 0

    @classmethod
    def from_settings(
        cls,
        settings: GeneratorSettings,
        *,
        source: UniquenessSource = hardware_uniqueness_source,
        fallback: UniquenessSource = random_uniqueness_source,
        clock: Callable[[], int] = current_millis,
    ) -> "LongSequenceGenerator":
        """Build a generator, resolving the node id as the settings ask."""
        if settings.use_hardware_node_id:
            node_id = resolve_node_id(source, fallback)
        else:
            node_id = settings.explicit_node_id

        return cls(
            node_id,
            epoch_ms=settings.custom_epoch_ms,
            clock=clock,
            spin_timeout_ms=settings.spin_timeout_ms,
        )

    @property
    def node_id(self) -> int:
        return self._node_id

    @property
    def epoch_ms(self) -> int:
        return self._epoch_ms

    @property
    def last_timestamp(self) -> int:
        with self._lock:
            return self._last_timestamp

    @property
    def sequence(self) -> int:
        with self._lock:
            return self._sequence

    def _timestamp(self) -> int:
        return self._clock() - self._epoch_ms

    def _wait_for_next_millisecond(self, last_timestamp: int) -> int:
        deadline = None
        if self._spin_timeout_ms is not None:
            deadline = time.monotonic() + self._spin_timeout_ms / 1000

        timestamp = self._timestamp()
        while timestamp <= last_timestamp:
            if deadline is not None and time.monotonic() > deadline:
                raise SequenceSpinTimeout(last_timestamp, self._spin_timeout_ms)
            timestamp = self._timestamp()
        return timestamp

    def next_id(self) -> int:
        """Generate the next identifier.

        Raises:
            ClockRolledBack: the clock is behind the last generated identifier.
            SequenceSpinTimeout: only with spin_timeout_ms set.
        """
        with self._lock:
            current_timestamp = self._timestamp()

            if current_timestamp < self._last_timestamp:
                logger.error(
                    "Clock moved backwards: last=%d now=%d",
                    self._last_timestamp,
                    current_timestamp,
                )
                raise ClockRolledBack(self._last_timestamp, current_timestamp)

            if current_timestamp == self._last_timestamp:
                sequence = (self._sequence + 1) & MAX_SEQUENCE
                if sequence == 0:
                    logger.debug("Sequence exhausted at %d, waiting for clock", current_timestamp)
                    current_timestamp = self._wait_for_next_millisecond(self._last_timestamp)
            else:
                sequence = 0

            self._sequence = sequence
            self._last_timestamp = current_timestamp

            return encode(current_timestamp, self._node_id, sequence)

    generate_next_id = next_id

    def decode(self, identifier: int) -> IdParts:
        return decode(identifier)

    def created_at(self, identifier: int) -> datetime:
        """UTC time an identifier from this generator was produced at."""
        return decode(identifier).created_at(self._epoch_ms)

    def __repr__(self) -> str:
        return f"LongSequenceGenerator(node_id={self._node_id}, epoch_ms={self._epoch_ms})"


_default_generator: LongSequenceGenerator | None = None
_default_lock = threading.Lock()


def get_default_generator() -> LongSequenceGenerator:
    """Process-wide generator built from the environment on first use."""
    global _default_generator
    with _default_lock:
        if _default_generator is None:
            _default_generator = LongSequenceGenerator.from_settings(load_settings())
        return _default_generator


def generate_next_id() -> int:
    return get_default_generator().next_id()
