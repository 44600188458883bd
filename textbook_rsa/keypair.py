"""RSA keypair model."""
from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Optional, Tuple

from textbook_rsa import config
from textbook_rsa.errors import GenerationError, NoModularInverseError
from textbook_rsa.number_theory import RandomSource, mod_inverse, random_prime

logger = logging.getLogger(__name__)

# Prime pairs drawn by Keypair.generate before giving up.
DEFAULT_PAIR_ATTEMPTS = 64


@dataclass(frozen=True)
class RsaPublicKey:
    n: int
    e: int


@dataclass(frozen=True)
class RsaPrivateKey:
    n: int
    d: int


@dataclass(frozen=True)
class Keypair:
    """Modulus with its public (encryption) and private (decryption) exponents."""

    modulus: int
    public_exponent: int
    private_exponent: int

    @classmethod
    def from_primes(cls, p: int, q: int) -> "Keypair":
        """Derive a keypair from two primes with the public exponent fixed to 65537.

        Raises ``NoModularInverseError`` when 65537 shares a factor with
        ``(p-1)(q-1)``; callers should retry with fresh primes.
        """

        e = config.PUBLIC_EXPONENT
        phi = (p - 1) * (q - 1)
        d = mod_inverse(e, phi)
        return cls(modulus=p * q, public_exponent=e, private_exponent=d)

    @classmethod
    def from_values(cls, n: int, e: int, d: int) -> "Keypair":
        """Wrap existing key integers without checking them.  Floats raise ``TypeError``."""
        return cls(
            modulus=operator.index(n),
            public_exponent=operator.index(e),
            private_exponent=operator.index(d),
        )

    @classmethod
    def generate(
        cls,
        bits: int = config.DEFAULT_KEY_BITS,
        *,
        rng: Optional[RandomSource] = None,
        max_attempts: int = DEFAULT_PAIR_ATTEMPTS,
    ) -> "Keypair":
        """Generate a fresh keypair whose modulus has about ``bits`` bits."""

        # Below 5 bits both halves are 2-bit primes, which are always 3.
        if bits < 5:
            raise ValueError("Key size must be at least 5 bits")

        p_bits = bits // 2
        q_bits = bits - p_bits

        for attempt in range(1, max_attempts + 1):
            p = random_prime(p_bits, rng=rng)
            q = random_prime(q_bits, rng=rng)
            if p == q:
                logger.debug("Attempt %d: drew the same prime twice, retrying", attempt)
                continue
            try:
                keypair = cls.from_primes(p, q)
            except NoModularInverseError:
                logger.debug(
                    "Attempt %d: exponent %d not invertible for this prime pair, retrying",
                    attempt,
                    config.PUBLIC_EXPONENT,
                )
                continue
            logger.info(
                "Generated RSA keypair with %d-bit modulus", keypair.modulus.bit_length()
            )
            return keypair

        raise GenerationError(
            f"No usable prime pair for a {bits}-bit key after {max_attempts} attempts"
        )

    def export_values(self) -> Tuple[int, int, int]:
        """Return ``(modulus, public_exponent, private_exponent)``."""
        return self.modulus, self.public_exponent, self.private_exponent

    @property
    def public_key(self) -> RsaPublicKey:
        return RsaPublicKey(n=self.modulus, e=self.public_exponent)

    @property
    def private_key(self) -> RsaPrivateKey:
        return RsaPrivateKey(n=self.modulus, d=self.private_exponent)

    def __repr__(self) -> str:
        return (
            f"Keypair(modulus=<{self.modulus.bit_length()} bits>, "
            f"public_exponent={self.public_exponent}, private_exponent=<hidden>)"
        )


__all__ = ["Keypair", "RsaPublicKey", "RsaPrivateKey", "DEFAULT_PAIR_ATTEMPTS"]
