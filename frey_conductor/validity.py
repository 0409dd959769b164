"""
validity.py: Hypotheses of the conductor theorem for a candidate (r, s, z).

A pair (s, z) is valid for the degree r when
  1. s != 0,
  2. for every odd prime p | s, either p does not divide z or v_p(s) < r * v_p(z),
  3. f has no repeated root, i.e. disc(f) != 0, so y^2 = f(x) is a genuine
     hyperelliptic curve.
"""
from collections import namedtuple
from enum import Enum

from .conductor_config import (
    RATIONALS, DegenerateParameter, InvalidParameters
)
from .polynomial_builder import CurveParameters, build_curve_polynomials


class InvalidReason(Enum):
    DIVISIBILITY = 'divisibility'   # some odd p | s has v_p(s) >= r * v_p(z) > 0
    SINGULAR = 'singular'           # disc(f) = 0


Validity = namedtuple('Validity', ['valid', 'reason', 'prime', 'polynomials'])


def divisibility_witness(params, oracle, strict=False):
    """
    First odd prime p | s breaking the divisibility hypothesis, or None.

    With strict=True every odd prime of s must also divide z (the sampling
    rule of the first random experiments).
    """
    r, s, z = params
    if s == 0:
        raise DegenerateParameter(f"s = 0 for {CurveParameters(*params)}: the divisibility condition cannot hold")
    for p in oracle.prime_divisors(s):
        if p % 2 == 0:
            continue
        v = oracle.valuation(z, p)
        if v == 0 and not strict:
            continue
        if oracle.valuation(s, p) >= r * v:
            return p
    return None


def check_validity(params, oracle, field=RATIONALS, strict=False):
    """
    Decide whether (r, s, z) satisfies the hypotheses of the theorem.

    Returns Validity(valid, reason, prime, polynomials). `polynomials` is the
    CurvePolynomials built for the discriminant test (None when the
    divisibility test already failed), so callers need not rebuild f.
    The discriminant does not depend on `field`: f has integer coefficients.
    Raises DegenerateParameter for s = 0.
    """
    params = CurveParameters(*params)
    p = divisibility_witness(params, oracle, strict=strict)
    if p is not None:
        return Validity(False, InvalidReason.DIVISIBILITY, p, None)

    polys = build_curve_polynomials(params, oracle, field)
    if oracle.discriminant(polys.f) == 0:
        return Validity(False, InvalidReason.SINGULAR, None, polys)
    return Validity(True, None, None, polys)


def is_valid(params, oracle, field=RATIONALS, strict=False):
    try:
        return check_validity(params, oracle, field=field, strict=strict).valid
    except DegenerateParameter:
        return False


def assert_valid(params, oracle, field=RATIONALS):
    """
    Fatal form of check_validity used on hand-picked examples.

    Any violation (including s = 0) means the example table is misconfigured,
    so it is raised as InvalidParameters and aborts the run.
    """
    params = CurveParameters(*params)
    try:
        verdict = check_validity(params, oracle, field=field)
    except DegenerateParameter as e:
        raise InvalidParameters(str(e)) from e
    if not verdict.valid:
        if verdict.reason is InvalidReason.DIVISIBILITY:
            raise InvalidParameters(
                f"{params}: v_p(s) >= r*v_p(z) at p={verdict.prime}")
        raise InvalidParameters(f"{params}: disc(f) = 0, the curve is singular")
    return verdict
