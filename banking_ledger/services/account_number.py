"""
Account number generation.

Account numbers are the UTC date (YYYYMMDD) followed by six random
digits, 14 characters in total. Two accounts opened on the same day
collide with probability 1 in 899,999 per pair; the store's unique
constraint catches a collision and nothing retries it.
"""

import random
from datetime import datetime, timezone
from typing import Callable, Protocol


class AccountNumberGenerator(Protocol):
    def generate(self) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DateRandomAccountNumberGenerator:
    """Date prefix plus a random six-digit suffix in [100000, 999998]."""

    SUFFIX_MIN = 100000
    SUFFIX_MAX = 999999  # exclusive

    def __init__(
        self,
        clock: Callable[[], datetime] = _utcnow,
        rng: random.Random | None = None,
    ):
        self.clock = clock
        self.rng = rng or random.Random()

    def generate(self) -> str:
        prefix = self.clock().strftime("%Y%m%d")
        suffix = self.rng.randrange(self.SUFFIX_MIN, self.SUFFIX_MAX)
        return f"{prefix}{suffix}"
