"""64-bit identifier layout.

    IDENTIFIER (64 bits) = TIMESTAMP (42 bits) + NODE_ID (10 bits) + SEQUENCE (12 bits)

    TIMESTAMP => milliseconds since the custom epoch, ~139 years of range
    NODE_ID   => per-process node identifier, max 1024 nodes
    SEQUENCE  => per-millisecond local counter, max value 4095
"""

import time
from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

TOTAL_BITS = 64
TIMESTAMP_BITS = 42
NODE_ID_BITS = 10
SEQUENCE_BITS = 12

MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MAX_NODE_ID = (1 << NODE_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
MAX_IDENTIFIER = (1 << TOTAL_BITS) - 1

NODE_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = NODE_ID_BITS + SEQUENCE_BITS

# 1992-12-31 20:52:00 UTC
DEFAULT_EPOCH_MS = 725835120000

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def current_millis() -> int:
    """Wall-clock time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class IdParts(BaseModel):
    """The three fields packed into one identifier."""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(ge=0, le=MAX_TIMESTAMP, description="ms since the custom epoch")
    node_id: int = Field(ge=0, le=MAX_NODE_ID)
    sequence: int = Field(ge=0, le=MAX_SEQUENCE)

    def created_at(self, epoch_ms: int = DEFAULT_EPOCH_MS) -> datetime:
        """UTC time the identifier was generated at."""
        return _UNIX_EPOCH + timedelta(milliseconds=self.timestamp + epoch_ms)


def encode(timestamp: int, node_id: int, sequence: int) -> int:
    """Pack the fields into one identifier, masking each to its width."""
    identifier = (timestamp & MAX_TIMESTAMP) << TIMESTAMP_SHIFT
    identifier |= (node_id & MAX_NODE_ID) << NODE_ID_SHIFT
    identifier |= sequence & MAX_SEQUENCE
    return identifier


def decode(identifier: int) -> IdParts:
    """Split an identifier back into its fields."""
    if identifier < 0 or identifier > MAX_IDENTIFIER:
        raise ValueError(f"{identifier} is not a {TOTAL_BITS}-bit identifier")

    return IdParts(
        timestamp=identifier >> TIMESTAMP_SHIFT,
        node_id=(identifier >> NODE_ID_SHIFT) & MAX_NODE_ID,
        sequence=identifier & MAX_SEQUENCE,
    )
