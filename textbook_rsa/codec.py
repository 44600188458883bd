"""Per-code-point text encryption with raw textbook RSA.

Each Unicode code point becomes one ciphertext integer.  There is no
padding, so the scheme is deterministic and malleable, and every code point
must be smaller than the modulus or the mapping stops being invertible.
"""
from __future__ import annotations

from typing import Iterable, List

from textbook_rsa.errors import InvalidCodepointError
from textbook_rsa.keypair import Keypair
from textbook_rsa.number_theory import mod_pow

MAX_CODEPOINT = 0x10FFFF
SURROGATES = range(0xD800, 0xE000)


def _to_char(value: int, index: int) -> str:
    if value > MAX_CODEPOINT or value in SURROGATES:
        raise InvalidCodepointError(value, index)
    return chr(value)


def encrypt(text: str, public_exponent: int, modulus: int) -> List[int]:
    """Encrypt ``text`` into one ciphertext integer per code point."""
    return [mod_pow(ord(ch), public_exponent, modulus) for ch in text]


def decrypt(ciphertexts: Iterable[int], private_exponent: int, modulus: int) -> str:
    """Recover the text from a ciphertext sequence produced by :func:`encrypt`."""

    chars = [
        _to_char(mod_pow(c, private_exponent, modulus), index)
        for index, c in enumerate(ciphertexts)
    ]
    return "".join(chars)


def encrypt_with(keypair: Keypair, text: str) -> List[int]:
    return encrypt(text, keypair.public_exponent, keypair.modulus)


def decrypt_with(keypair: Keypair, ciphertexts: Iterable[int]) -> str:
    return decrypt(ciphertexts, keypair.private_exponent, keypair.modulus)


__all__ = ["encrypt", "decrypt", "encrypt_with", "decrypt_with", "MAX_CODEPOINT"]
