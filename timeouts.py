#!/usr/bin/env python3
"""
Timeout budget shared between a caller and the connection establisher.
"""

import time


class Timeout:
    """
    block: seconds granted to each individual attempt (restarted by mark_start)
    total: seconds granted to the whole operation, counted from construction

    Either may be None (unbounded). With both set, an attempt gets whatever
    is smaller: its own block window or what is left until the deadline.
    """

    def __init__(self, block: float | None = None, total: float | None = None, clock=time.monotonic):
        self.block = block
        self.total = total
        self._clock = clock
        now = clock()
        self.deadline = None if total is None else now + total
        self.start = now

    def mark_start(self) -> None:
        self.start = self._clock()

    def remaining(self) -> float | None:
        now = self._clock()
        left = None
        if self.block is not None:
            left = self.block - (now - self.start)
        if self.deadline is not None:
            until_deadline = self.deadline - now
            left = until_deadline if left is None else min(left, until_deadline)
        if left is None:
            return None
        return max(left, 0.0)

    def expired(self) -> bool:
        left = self.remaining()
        return left is not None and left <= 0.0

    def __repr__(self):
        return f"Timeout(block={self.block!r}, total={self.total!r})"
