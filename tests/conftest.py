# tests/conftest.py
# Stub algebraic engine shared by the test modules

"""Stub oracle with hand-crafted answers, so no SageMath is needed."""
import math
from collections import Counter, namedtuple

import pytest
import sympy

from frey_conductor.conductor_config import RATIONALS, TOTALLY_REAL, OracleUnavailable
from frey_conductor.classifier import expected_exponent
from frey_conductor.oracle import AlgebraicOracle, ConductorRecord
from frey_conductor.polynomial_builder import CurveParameters, curve_coefficients


StubPolynomial = namedtuple('StubPolynomial', ['domain', 'r', 'coefficients'])
StubCurve = namedtuple('StubCurve', ['f'])

# (r, s, z) whose f is irreducible over Q_r in the example table (row 4)
IRREDUCIBLE_EXAMPLES = {(5, 2, 4), (5, 4, 1), (5, 4, 16)}


def params_of(poly):
    """Recover (r, s, z) from the coefficients: f = x^r - r z x^(r-2) + ... + s."""
    r = poly.r
    coeffs = poly.coefficients
    return CurveParameters(r, coeffs[0], -coeffs[r - 2] // r)


class StubOracle(AlgebraicOracle):
    """
    Integer arithmetic is exact (sympy); everything else is scripted.

    irreducible(params) -> bool       irreducibility of f over Q_r
    singular(params) -> bool          disc(f) == 0 (default: Delta == 0)
    exponent(params, q, field) -> int conductor exponent at q
    bad_primes(params) -> set         primes in the conductor
    degrees                           r values with a computable conductor (None: all)
    """

    def __init__(self, irreducible=None, singular=None, exponent=None,
                 bad_primes=None, odd_part_only=False, fields=(RATIONALS, TOTALLY_REAL),
                 degrees=None):
        self.irreducible = irreducible or (lambda p: tuple(p) in IRREDUCIBLE_EXAMPLES)
        self.singular = singular or (lambda p: p.delta == 0)
        self.exponent = exponent or self.truthful_exponent
        self.bad_primes = bad_primes or self.theoretical_bad_primes
        self.odd_part_only = odd_part_only
        self.fields = fields
        self.degrees = degrees
        self.calls = Counter()

    # ---------------- scripted answers ----------------
    def truthful_exponent(self, params, q, field):
        coeffs = curve_coefficients(*params)
        return expected_exponent(params, q, self, self.local_polynomial(coeffs, params.r), field)

    def theoretical_bad_primes(self, params):
        return {2, params.r} | set(self.prime_divisors(params.delta))

    # ---------------- AlgebraicOracle ----------------
    def totally_real_minimal_polynomial(self, r):
        return StubPolynomial('Q', r, ())

    def polynomial(self, coefficients, r, field=RATIONALS):
        self.calls['polynomial'] += 1
        return StubPolynomial(field, r, tuple(coefficients))

    def local_polynomial(self, coefficients, r):
        self.calls['local_polynomial'] += 1
        return StubPolynomial('Q_r', r, tuple(coefficients))

    def discriminant(self, f):
        self.calls['discriminant'] += 1
        return 0 if self.singular(params_of(f)) else 1

    def is_irreducible(self, f_local):
        self.calls['is_irreducible'] += 1
        assert f_local.domain == 'Q_r'
        return self.irreducible(params_of(f_local))

    def prime_divisors(self, n):
        if n == 0:
            return []
        return sorted(sympy.primefactors(abs(n)))

    def valuation(self, n, p):
        if n == 0:
            return math.inf
        return sympy.multiplicity(p, abs(n))

    def hyperelliptic_curve(self, f):
        return StubCurve(f)

    def conductor(self, curve, field=RATIONALS):
        self.calls['conductor'] += 1
        params = params_of(curve.f)
        if not self.supports(params.r, field):
            raise OracleUnavailable(f"no conductor for r={params.r} over {field}")
        primes = sorted(self.bad_primes(params))
        if self.odd_part_only:
            primes = [p for p in primes if p != 2]
        if field == RATIONALS:
            return ConductorRecord.from_factorization(
                [(q, self.exponent(params, q, field) if q != 2 else 1) for q in primes],
                odd_part_only=self.odd_part_only)
        entries = []
        for q in primes:
            e = self.exponent(params, q, field) if q != 2 else 1
            # r is totally ramified in K; pretend other primes split into two ideals
            n_ideals = 1 if q == params.r else 2
            for i in range(n_ideals):
                entries.append((q, q, e, f"P{i} | {q}"))
        return ConductorRecord(TOTALLY_REAL, entries, odd_part_only=self.odd_part_only)

    def available_fields(self):
        return self.fields

    def supports(self, r, field=RATIONALS):
        if field not in self.fields:
            return False
        return self.degrees is None or r in self.degrees


@pytest.fixture
def oracle():
    return StubOracle()
