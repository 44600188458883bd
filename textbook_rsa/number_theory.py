"""Number-theory primitives for textbook RSA.

Everything here works on plain Python integers.  Functions that need
randomness accept an ``rng`` keyword: any object with ``getrandbits(k)`` and
``randint(a, b)`` will do, so tests can pass a seeded ``random.Random``.  The
default source is pycryptodome's :class:`StrongRandom`, which draws from the
operating system CSPRNG.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol, Tuple

from Crypto.Random.random import StrongRandom

from textbook_rsa import config
from textbook_rsa.errors import (
    GenerationError,
    InvalidExponentError,
    InvalidModulusError,
    NoModularInverseError,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    def getrandbits(self, k: int) -> int: ...

    def randint(self, a: int, b: int) -> int: ...


_default_rng = StrongRandom()

SMALL_PRIMES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29)


def _resolve_rng(rng: Optional[RandomSource]) -> RandomSource:
    return _default_rng if rng is None else rng


def mod_pow(base: int, exp: int, modulus: int) -> int:
    """Return ``base**exp % modulus`` using square-and-multiply."""

    if modulus <= 0:
        raise InvalidModulusError(f"Modulus must be positive, got {modulus}")
    if exp < 0:
        raise InvalidExponentError(f"Exponent must be non-negative, got {exp}")

    result = 1 % modulus
    base %= modulus
    while exp > 0:
        if exp & 1:
            result = (result * base) % modulus
        base = (base * base) % modulus
        exp //= 2
    return result


def extended_gcd(a: int, b: int) -> Tuple[int, int, int]:
    """Return ``(g, x, y)`` with ``g == gcd(a, b) == a*x + b*y``.

    This is the loop form of the usual recursion
    ``egcd(a, b) = (g, y1, x1 - (a // b) * y1)`` where
    ``(g, x1, y1) = egcd(b, a % b)`` and ``egcd(a, 0) = (a, 1, 0)``.
    Carrying the coefficients forward keeps the stack flat no matter how
    many division steps the inputs need.
    """

    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t

    return old_r, old_s, old_t


def mod_inverse(value: int, modulus: int) -> int:
    """Return ``x`` in ``[0, modulus)`` with ``value * x % modulus == 1``."""

    if modulus <= 0:
        raise InvalidModulusError(f"Modulus must be positive, got {modulus}")
    g, x, _ = extended_gcd(value, modulus)
    if g != 1:
        raise NoModularInverseError(value, modulus, g)
    return x % modulus


def decompose(n_minus_one: int) -> Tuple[int, int]:
    """Split an even ``n - 1`` into ``(d, s)`` with ``d`` odd and ``d * 2**s == n - 1``."""

    if n_minus_one <= 0:
        raise ValueError("Value to decompose must be positive")
    d = n_minus_one
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1
    return d, s


def is_probably_prime(
    n: int,
    rounds: int = config.DEFAULT_ROUNDS,
    *,
    rng: Optional[RandomSource] = None,
) -> bool:
    """Return ``True`` when ``n`` is probably prime using Miller–Rabin.

    A composite slips through with probability at most ``4**-rounds``.
    """

    if rounds < 1:
        raise ValueError("At least one Miller-Rabin round is required")

    if n < 2:
        return False

    # Answer anything with a factor below 30 directly.  Witnesses come from
    # [2, n-2], which has no members until n reaches 4, so tiny primes such
    # as 3 must be settled here.
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    source = _resolve_rng(rng)
    d, s = decompose(n - 1)

    for _ in range(rounds):
        a = source.randint(2, n - 2)
        x = mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = mod_pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def random_prime(
    bits: int,
    *,
    rng: Optional[RandomSource] = None,
    rounds: int = config.DEFAULT_ROUNDS,
    max_attempts: Optional[int] = None,
) -> int:
    """Generate a random probable prime of exactly ``bits`` bits.

    Candidates are resampled until one passes :func:`is_probably_prime`.
    ``GenerationError`` is raised after ``max_attempts`` rejected candidates
    (default :func:`config.max_attempts_for`) or when the random source
    itself fails.
    """

    if bits < 2:
        raise ValueError("Prime size must be at least 2 bits")

    source = _resolve_rng(rng)
    limit = config.max_attempts_for(bits) if max_attempts is None else max_attempts

    for attempt in range(1, limit + 1):
        try:
            candidate = source.getrandbits(bits)
        except OSError as exc:
            raise GenerationError("Random source unavailable") from exc
        # Top bit fixes the size, low bit skips even candidates.
        candidate |= (1 << (bits - 1)) | 1
        if is_probably_prime(candidate, rounds, rng=source):
            logger.debug("Found %d-bit prime after %d candidate(s)", bits, attempt)
            return candidate

    raise GenerationError(
        f"No {bits}-bit prime found after {limit} candidates; check the random source"
    )


__all__ = [
    "RandomSource",
    "SMALL_PRIMES",
    "mod_pow",
    "extended_gcd",
    "mod_inverse",
    "decompose",
    "is_probably_prime",
    "random_prime",
]
