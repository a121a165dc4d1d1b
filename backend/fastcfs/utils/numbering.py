"""Tracking number generation for new cargo.

Format (14 digits, no separators):

    DDMMYYHHMMSSRR
    │ │ │ │ │ │ └─ 2-digit random suffix 00-99
    │ │ │ │ │ └─── second
    │ │ │ │ └───── minute
    │ │ │ └─────── hour (24h)
    │ │ └───────── 2-digit year
    │ └─────────── month
    └───────────── day

The clock part has one-second resolution, so up to 100 numbers per second
are distinguishable.  Uniqueness is ultimately guaranteed by the unique
constraint on cargo.tracking_number; services.cargo retries on collision.
"""

import random
import re
from datetime import datetime

TRACKING_NUMBER_LENGTH = 14
TRACKING_NUMBER_RE = re.compile(r"^\d{14}$")

_system_random = random.SystemRandom()


def generate_tracking_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Return a new DDMMYYHHMMSSRR tracking number.

    Args:
        now: Instant to encode (defaults to the server's local time).
        rng: Random source for the suffix (defaults to SystemRandom).
    """
    now = now or datetime.now()
    suffix = (rng or _system_random).randint(0, 99)
    return f"{now:%d%m%y%H%M%S}{suffix:02d}"


def is_tracking_number(value: str) -> bool:
    """Whether a string has the shape of a generated tracking number."""
    return bool(TRACKING_NUMBER_RE.match(value))
