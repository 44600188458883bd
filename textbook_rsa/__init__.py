"""Textbook RSA built from first principles on Python integers."""
from __future__ import annotations

import logging
from typing import Optional, Union

from textbook_rsa import config
from textbook_rsa.codec import decrypt, decrypt_with, encrypt, encrypt_with
from textbook_rsa.errors import (
    GenerationError,
    InvalidCodepointError,
    InvalidExponentError,
    InvalidModulusError,
    NoModularInverseError,
    RsaError,
)
from textbook_rsa.keypair import Keypair, RsaPrivateKey, RsaPublicKey
from textbook_rsa.number_theory import (
    extended_gcd,
    is_probably_prime,
    mod_inverse,
    mod_pow,
    random_prime,
)


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Send library log records to stderr at ``level`` (default from the environment)."""

    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level_value = getattr(logging, level.upper(), logging.WARNING)
    else:
        level_value = level

    logging.basicConfig(
        level=level_value,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


__all__ = [
    "configure_logging",
    "decrypt",
    "decrypt_with",
    "encrypt",
    "encrypt_with",
    "extended_gcd",
    "is_probably_prime",
    "mod_inverse",
    "mod_pow",
    "random_prime",
    "Keypair",
    "RsaPublicKey",
    "RsaPrivateKey",
    "RsaError",
    "InvalidModulusError",
    "InvalidExponentError",
    "NoModularInverseError",
    "InvalidCodepointError",
    "GenerationError",
]
