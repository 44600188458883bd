"""Exceptions raised by the textbook RSA primitives."""
from __future__ import annotations


class RsaError(Exception):
    """Base class for every error raised by :mod:`textbook_rsa`."""


class InvalidModulusError(RsaError, ValueError):
    """Raised when a modulus is zero or negative."""


class InvalidExponentError(RsaError, ValueError):
    """Raised when an exponent is negative."""


class NoModularInverseError(RsaError, ValueError):
    """Raised when ``value`` has no multiplicative inverse modulo ``modulus``."""

    def __init__(self, value: int, modulus: int, gcd: int) -> None:
        super().__init__(
            f"{value} has no inverse modulo {modulus} (gcd = {gcd})"
        )
        self.value = value
        self.modulus = modulus
        self.gcd = gcd


class InvalidCodepointError(RsaError, ValueError):
    """Raised when a decrypted integer is not a Unicode scalar value."""

    def __init__(self, value: int, index: int) -> None:
        super().__init__(
            f"Ciphertext #{index} decrypts to {value:#x}, which is not a Unicode scalar value"
        )
        self.value = value
        self.index = index


class GenerationError(RsaError, RuntimeError):
    """Raised when prime or key generation cannot produce a result."""


__all__ = [
    "RsaError",
    "InvalidModulusError",
    "InvalidExponentError",
    "NoModularInverseError",
    "InvalidCodepointError",
    "GenerationError",
]
