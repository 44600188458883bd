import math
import random

import pytest
from Crypto.Util.number import inverse, isPrime

from textbook_rsa.errors import (
    GenerationError,
    InvalidExponentError,
    InvalidModulusError,
    NoModularInverseError,
)
from textbook_rsa.number_theory import (
    decompose,
    extended_gcd,
    is_probably_prime,
    mod_inverse,
    mod_pow,
    random_prime,
)


def _naive_pow(base, exp, modulus):
    acc = 1
    for _ in range(exp):
        acc *= base
    return acc % modulus


def _trial_division(n):
    if n < 2:
        return False
    f = 2
    while f * f <= n:
        if n % f == 0:
            return False
        f += 1
    return True


def test_mod_pow_matches_naive_loop():
    for modulus in range(1, 16):
        for base in range(0, 12):
            for exp in range(0, 10):
                assert mod_pow(base, exp, modulus) == _naive_pow(base, exp, modulus)


def test_mod_pow_edge_values():
    assert mod_pow(5, 0, 7) == 1
    assert mod_pow(0, 5, 7) == 0
    assert mod_pow(123, 0, 1) == 0
    assert mod_pow(-2, 3, 7) == (-8) % 7


def test_mod_pow_large_operands_match_builtin():
    base = 0xC0FFEE ** 9
    exp = 2 ** 127 - 1
    modulus = 2 ** 255 - 19
    assert mod_pow(base, exp, modulus) == pow(base, exp, modulus)


@pytest.mark.parametrize("modulus", [0, -5])
def test_mod_pow_rejects_non_positive_modulus(modulus):
    with pytest.raises(InvalidModulusError):
        mod_pow(3, 4, modulus)


def test_mod_pow_rejects_negative_exponent():
    with pytest.raises(InvalidExponentError):
        mod_pow(3, -1, 11)


def test_extended_gcd_bezout_identity():
    for a in range(0, 40):
        for b in range(0, 40):
            g, x, y = extended_gcd(a, b)
            assert a * x + b * y == g
            if a or b:
                assert g == math.gcd(a, b)


def test_extended_gcd_base_case():
    assert extended_gcd(17, 0) == (17, 1, 0)


def test_mod_inverse_coprime_pairs():
    for m in range(2, 60):
        for a in range(1, m):
            g, _, _ = extended_gcd(a, m)
            if g == 1:
                assert (a * mod_inverse(a, m)) % m == 1
            else:
                with pytest.raises(NoModularInverseError):
                    mod_inverse(a, m)


@pytest.mark.parametrize("modulus", [0, -7])
def test_mod_inverse_rejects_non_positive_modulus(modulus):
    with pytest.raises(InvalidModulusError):
        mod_inverse(3, modulus)


def test_mod_inverse_result_is_normalized():
    # extended_gcd(3, 7) gives a negative coefficient.
    _, x, _ = extended_gcd(3, 7)
    assert x < 0
    assert mod_inverse(3, 7) == 5


def test_mod_inverse_matches_pycryptodome():
    modulus = (2 ** 127 - 1) * (2 ** 61 - 1) - 1
    value = 65537
    assert mod_inverse(value, modulus) == inverse(value, modulus)


def test_no_modular_inverse_carries_details():
    with pytest.raises(NoModularInverseError) as excinfo:
        mod_inverse(6, 9)
    assert excinfo.value.gcd == 3
    assert excinfo.value.value == 6
    assert excinfo.value.modulus == 9
    assert isinstance(excinfo.value, ValueError)


def test_decompose():
    assert decompose(1) == (1, 0)
    assert decompose(12) == (3, 2)
    d, s = decompose(560)
    assert d % 2 == 1 and d * 2 ** s == 560
    with pytest.raises(ValueError):
        decompose(0)


def test_primality_agrees_with_trial_division(rng):
    for n in range(-2, 10_001):
        assert is_probably_prime(n, 40, rng=rng) == _trial_division(n), n


@pytest.mark.parametrize("n", [561, 1105, 1729, 2465, 2821, 6601, 8911, 41041, 825265])
def test_carmichael_numbers_are_composite(n, rng):
    assert not is_probably_prime(n, rng=rng)


@pytest.mark.parametrize(
    "n",
    [2 ** 61 - 1, 2 ** 89 - 1, 2 ** 127 - 1, 2 ** 61 + 1, 2 ** 64 + 1, (2 ** 31 - 1) * (2 ** 61 - 1)],
)
def test_large_values_agree_with_pycryptodome(n, rng):
    assert is_probably_prime(n, rng=rng) == isPrime(n)


def test_primality_default_rng():
    assert is_probably_prime(2 ** 127 - 1)
    assert not is_probably_prime(2 ** 127 + 1)


def test_primality_requires_rounds():
    with pytest.raises(ValueError):
        is_probably_prime(97, 0)


@pytest.mark.parametrize("bits", [2, 3, 8, 16, 64, 256])
def test_random_prime_has_exact_bit_length(bits, rng):
    p = random_prime(bits, rng=rng)
    assert p.bit_length() == bits
    assert is_probably_prime(p, 40, rng=rng)
    assert isPrime(p)


def test_random_prime_is_reproducible_with_seeded_source():
    first = random_prime(96, rng=random.Random(42))
    second = random_prime(96, rng=random.Random(42))
    assert first == second


def test_random_prime_default_source():
    assert random_prime(32).bit_length() == 32


def test_random_prime_rejects_tiny_sizes():
    with pytest.raises(ValueError):
        random_prime(1)


class _ZeroSource:
    def getrandbits(self, k):
        return 0

    def randint(self, a, b):
        return a


class _BrokenSource:
    def getrandbits(self, k):
        raise OSError("entropy pool unavailable")

    def randint(self, a, b):
        raise OSError("entropy pool unavailable")


def test_random_prime_gives_up_after_max_attempts():
    # Every 4-bit candidate becomes 0b1001 = 9, which is composite.
    with pytest.raises(GenerationError):
        random_prime(4, rng=_ZeroSource(), max_attempts=5)


def test_random_prime_reports_broken_source():
    with pytest.raises(GenerationError) as excinfo:
        random_prime(64, rng=_BrokenSource())
    assert isinstance(excinfo.value.__cause__, OSError)
