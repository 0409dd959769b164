"""
polynomial_builder.py: Defining polynomial of the Frey hyperelliptic curve C(z, s).

    C(z, s) : y^2 = f(x),   f(x) = x^r + sum_{k=1}^{(r-1)/2} c_k (-1)^k z^k x^(r-2k) + s,
    c_k = r * binom(r-k, k) / (r-k).

The integer coefficients are produced once by `curve_coefficients` and then
handed to the oracle twice: once over the global field (Q or K) and once over
Q_r, so both polynomials always agree coefficient by coefficient.
"""
from math import comb, isqrt
from typing import NamedTuple

from .conductor_config import (
    RATIONALS, MIN_DEGREE, InvalidDegree, check_field
)


class CurveParameters(NamedTuple):
    r: int
    s: int
    z: int

    @property
    def delta(self):
        """Delta = s^2 - 4 z^r."""
        return self.s**2 - 4 * self.z**self.r

    def __str__(self):
        return f"(r={self.r}, s={self.s}, z={self.z})"


class CurvePolynomials(NamedTuple):
    f: object
    f_local: object
    coefficients: tuple
    field: str


def _is_prime(n):
    if n < 2:
        return False
    if n % 2 == 0:
        return n == 2
    for d in range(3, isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def check_degree(r):
    """Raise InvalidDegree unless r is an odd prime >= 5."""
    if isinstance(r, bool) or int(r) != r:
        raise InvalidDegree(f"r must be an integer, got {r!r}")
    r = int(r)
    if r < MIN_DEGREE or not _is_prime(r):
        raise InvalidDegree(f"r must be an odd prime >= {MIN_DEGREE}, got r={r}")
    return r


def binomial_coefficient(r, k):
    """c_k = r * C(r-k, k) / (r-k), which is always an integer."""
    num = r * comb(r - k, k)
    c, rem = divmod(num, r - k)
    assert rem == 0, f"c_{k} is not integral for r={r}"
    return c


def curve_coefficients(r, s, z):
    """
    Integer coefficients of f, lowest degree first (length r + 1).

    Only odd powers x^(r-2k) and the constant term s are nonzero besides x^r.
    """
    r = check_degree(r)
    coeffs = [0] * (r + 1)
    coeffs[r] = 1
    for k in range(1, (r - 1) // 2 + 1):
        coeffs[r - 2 * k] += binomial_coefficient(r, k) * (-1)**k * z**k
    coeffs[0] += s
    return tuple(int(c) for c in coeffs)


def build_curve_polynomials(params, oracle, field=RATIONALS):
    """
    Return CurvePolynomials(f, f_local, coefficients, field) for C(z, s).

    f lives over Q or K depending on `field`; f_local lives over Q_r and is
    only used for the irreducibility test of rows 3 and 4.
    """
    field = check_field(field)
    r, s, z = params
    coeffs = curve_coefficients(r, s, z)
    f = oracle.polynomial(coeffs, r, field)
    f_local = oracle.local_polynomial(coeffs, r)
    return CurvePolynomials(f, f_local, coeffs, field)
