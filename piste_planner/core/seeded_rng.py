"""Seeded random number generation and shareable seed codes.

Every procedural decision in the generator draws from a SeededRNG so that the
same (seed, rank) pair always yields the same level:
- SeededRNG: private generator state per instance (no module-level random)
- seed_to_code / code_to_seed: base-36 share codes (e.g. "K7Q2")
- daily_seed: one seed per UTC calendar day
- position_noise: stateless sin-hash for position-keyed organic variation
"""

import logging
import random
from datetime import date, datetime, timezone
from math import floor, sin
from typing import Optional, Sequence, TypeVar

from piste_planner.constants import SeedConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


def seed_to_code(seed: int) -> str:
    """Encode a seed as an upper-case base-36 code, at least 4 characters.

    Args:
        seed: Any integer; its absolute value is reduced to 32 bits.

    Returns:
        Code such as "00A3" or "1Z141Z3".
    """
    value = abs(seed) & SeedConfig.SEED_MASK
    chars = []
    while value:
        value, digit = divmod(value, 36)
        chars.append(SeedConfig.BASE36_CHARS[digit])
    code = "".join(reversed(chars)) or "0"
    return code.rjust(SeedConfig.CODE_MIN_LENGTH, "0")


def code_to_seed(code: str) -> int:
    """Decode a share code back to a seed. Never raises.

    Case-insensitive; characters outside 0-9A-Z are dropped, an empty code
    decodes to 0, and the result is reduced to 32 bits.
    """
    result = 0
    for char in code.upper():
        idx = SeedConfig.BASE36_CHARS.find(char)
        if idx < 0:
            continue
        result = result * 36 + idx
    return result & SeedConfig.SEED_MASK


def _utc_day(when: date | datetime | None) -> date:
    if when is None:
        return datetime.now(timezone.utc).date()
    if isinstance(when, datetime):
        if when.tzinfo is not None:
            when = when.astimezone(timezone.utc)
        return when.date()
    return when


def daily_seed(when: date | datetime | None = None) -> int:
    """Seed shared by every player on the same UTC calendar day.

    djb2 hash of "LAB" + YYYYMMDD. Naive datetimes are taken as UTC.
    """
    day = _utc_day(when)
    text = f"{SeedConfig.DAILY_PREFIX}{day.strftime('%Y%m%d')}"
    value = 5381
    for char in text:
        value = (value * 33 + ord(char)) & SeedConfig.SEED_MASK
    return value


def random_seed() -> int:
    """Fresh 32-bit seed from the OS entropy source."""
    return random.SystemRandom().getrandbits(32)


def position_noise(value: float) -> float:
    """Deterministic pseudo-noise in [0, 1) keyed on a position."""
    n = sin(value) * 43758.5453
    return n - floor(n)


class SeededRNG:
    """Deterministic random source owned by one generation call.

    Attributes:
        seed: Unsigned 32-bit seed the instance was created with
        code: Share code of the seed

    Example:
        rng = SeededRNG.from_code("K7Q2")
        width = rng.integer_in_range(30, 42)
    """

    def __init__(self, seed: int):
        self.seed = seed & SeedConfig.SEED_MASK
        self.code = seed_to_code(self.seed)
        self._random = random.Random(self.seed)

    @classmethod
    def from_code(cls, code: str) -> "SeededRNG":
        return cls(code_to_seed(code))

    @classmethod
    def daily(cls, when: Optional[date | datetime] = None) -> "SeededRNG":
        return cls(daily_seed(when))

    def frac(self) -> float:
        """Uniform float in [0, 1)."""
        return self._random.random()

    def integer_in_range(self, min_value: int, max_value: int) -> int:
        """Uniform integer in [min_value, max_value], both ends inclusive."""
        if min_value > max_value:
            min_value, max_value = max_value, min_value
        return min_value + floor(self.frac() * (max_value - min_value + 1))

    def real_in_range(self, min_value: float, max_value: float) -> float:
        return min_value + self.frac() * (max_value - min_value)

    def chance(self, probability: float) -> bool:
        """True with the given probability (0 never, 1 always)."""
        return self.frac() < probability

    def pick(self, items: Sequence[T]) -> T:
        """Uniformly chosen element.

        Raises:
            ValueError: If items is empty.
        """
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        return items[self.integer_in_range(0, len(items) - 1)]

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Fisher-Yates shuffled copy; the input is left untouched."""
        result = list(items)
        for i in range(len(result) - 1, 0, -1):
            j = self.integer_in_range(0, i)
            result[i], result[j] = result[j], result[i]
        return result

    def sign(self) -> int:
        return 1 if self.frac() < 0.5 else -1

    def __repr__(self) -> str:
        return f"SeededRNG(seed={self.seed}, code={self.code!r})"
