"""Snowflake algorithm (Twitter-style 64-bit ids).

Layout: 1 unused sign bit | 41-bit ms since epoch | 10-bit node | 12-bit sequence
"""

import logging
import re

from idmint.algorithms.base import Algorithm, Clock, Encoded, now_ms
from idmint.exceptions import (
    ClockBeforeEpochError,
    ClockMovedBackwardsError,
    InvalidNodeIdError,
    InvalidSnowflakeFormatError,
)

logger = logging.getLogger(__name__)

DEFAULT_EPOCH = 1288834974657  # 2010-11-04T01:42:54.657Z

NODE_ID_BITS = 10
SEQUENCE_BITS = 12
MAX_NODE_ID = (1 << NODE_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1
NODE_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = NODE_ID_BITS + SEQUENCE_BITS
MAX_ID = 2**63 - 1
MAX_ID_DIGITS = len(str(MAX_ID))

PATTERN = re.compile(r"^[0-9]+$")


class SnowflakeAlgorithm(Algorithm):
    """Snowflake generation for a single node.

    Up to 4096 ids per millisecond; when the sequence is exhausted the
    generator spins until the clock reaches the next millisecond.
    """

    name = "snowflake"

    def __init__(self, node_id: int = 0, epoch: int = DEFAULT_EPOCH, clock: Clock = now_ms):
        """Initialize generator state.

        Args:
            node_id: Node (worker) id, 0-1023
            epoch: Custom epoch in Unix milliseconds
            clock: Millisecond clock

        Raises:
            InvalidNodeIdError: If node_id does not fit in 10 bits
        """
        if node_id < 0 or node_id > MAX_NODE_ID:
            raise InvalidNodeIdError(node_id, MAX_NODE_ID)

        self.node_id = node_id
        self.epoch = epoch
        self.clock = clock
        self._last_timestamp = -1
        self._sequence = 0

    def generate(self) -> Encoded:
        """Generate the next id.

        Raises:
            ClockMovedBackwardsError: If the clock is behind the last generated id
            ClockBeforeEpochError: If the clock reads earlier than the epoch
        """
        timestamp = self.clock()

        if timestamp < self._last_timestamp:
            logger.error(
                f"Clock moved backwards by {self._last_timestamp - timestamp}ms "
                f"(node {self.node_id})"
            )
            raise ClockMovedBackwardsError(self._last_timestamp, timestamp)

        if timestamp == self._last_timestamp:
            self._sequence = (self._sequence + 1) & MAX_SEQUENCE
            if self._sequence == 0:
                logger.debug(f"Sequence exhausted at {timestamp}, waiting for next millisecond")
                timestamp = self._wait_next_millis(self._last_timestamp)
        else:
            self._sequence = 0

        if timestamp < self.epoch:
            raise ClockBeforeEpochError(self.epoch, timestamp)

        self._last_timestamp = timestamp

        id = (
            ((timestamp - self.epoch) << TIMESTAMP_SHIFT)
            | (self.node_id << NODE_ID_SHIFT)
            | self._sequence
        )
        return Encoded(value=str(id), bytes=id.to_bytes(8, "big"))

    def parse(self, value: str) -> Encoded:
        if not self.is_valid(value):
            raise InvalidSnowflakeFormatError(value)

        return Encoded(value=value, bytes=int(value.lstrip("0") or "0").to_bytes(8, "big"))

    def is_valid(self, value: str) -> bool:
        """Decimal digits only, within the signed 64-bit range."""
        if not PATTERN.fullmatch(value):
            return False

        digits = value.lstrip("0") or "0"
        return len(digits) <= MAX_ID_DIGITS and int(digits) <= MAX_ID

    def _wait_next_millis(self, last_timestamp: int) -> int:
        timestamp = self.clock()
        while timestamp <= last_timestamp:
            timestamp = self.clock()
        return timestamp
