"""Default parameters for key generation and primality testing."""
from __future__ import annotations

import os

PUBLIC_EXPONENT = 65537

# Miller-Rabin rounds; false-positive probability is at most 4**-rounds.
DEFAULT_ROUNDS = 40

DEFAULT_KEY_BITS = 1024

# Roughly one in 0.35 * bits odd candidates is prime, so this bound is only
# hit when the random source is broken.
ATTEMPTS_PER_BIT = 100

LOG_LEVEL = os.environ.get("TEXTBOOK_RSA_LOG_LEVEL", "WARNING")


def max_attempts_for(bits: int) -> int:
    """Return the default candidate budget for a ``bits``-bit prime."""
    return max(1, bits) * ATTEMPTS_PER_BIT


__all__ = [
    "PUBLIC_EXPONENT",
    "DEFAULT_ROUNDS",
    "DEFAULT_KEY_BITS",
    "ATTEMPTS_PER_BIT",
    "LOG_LEVEL",
    "max_attempts_for",
]
