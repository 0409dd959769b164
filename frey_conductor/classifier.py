"""
classifier.py: Expected conductor exponent of C(z, s) at an odd prime q.

The eight rows of Tables 1 (over Q) and 2 (over K = Q(zeta_r + zeta_r^-1))
are tried in order and the first matching row wins. Rows 3-8 all have q = r
and overlap in their numerical conditions, so the order is part of the
statement: e.g. r | s forces r | Delta, and row 5 must fire before the
v_r(Delta) tests of rows 6-8 are looked at.
"""
from collections import namedtuple
from functools import cached_property

from .conductor_config import (
    Fraction, RATIONALS, ClassificationInconsistency, check_field
)
from .oracle import ConductorEntry
from .outcome import PrimeVerdict
from .polynomial_builder import CurveParameters


class CaseContext:
    """
    Facts about (r, s, z, q) consulted by the row predicates.

    v_r(Delta) and the irreducibility of f over Q_r are computed on first use
    only: irreducibility is the expensive one and is only needed when q = r
    and r does not divide Delta.
    """

    def __init__(self, params, q, oracle, f_local=None):
        self.params = CurveParameters(*params)
        self.r, self.s, self.z = self.params
        self.q = q
        self.oracle = oracle
        self.f_local = f_local

    @cached_property
    def delta(self):
        return self.params.delta

    @cached_property
    def delta_valuation(self):
        return self.oracle.valuation(self.delta, self.r)

    @cached_property
    def local_irreducible(self):
        if self.f_local is None:
            raise ClassificationInconsistency(
                f"{self.params}: rows 3/4 need f over Q_{self.r}, none was supplied")
        return bool(self.oracle.is_irreducible(self.f_local))


ClassificationRow = namedtuple('ClassificationRow',
                               ['number', 'label', 'predicate', 'exponent_Q', 'exponent_K'])

Classification = namedtuple('Classification', ['row', 'field', 'expected'])


def _half(a, b=2):
    return lambda r: Fraction(a(r), b)


ROWS = (
    ClassificationRow(
        1, "q != r, q not dividing s",
        lambda c: c.q != c.r and c.s % c.q != 0,
        _half(lambda r: r - 1), _half(lambda r: r - 1)),
    ClassificationRow(
        2, "q != r, q dividing s",
        lambda c: c.q != c.r,
        lambda r: Fraction(r - 1), lambda r: Fraction(r - 1)),
    ClassificationRow(
        3, "not dividing delta with f reducible",
        lambda c: c.delta % c.r != 0 and not c.local_irreducible,
        lambda r: Fraction(r - 1), lambda r: Fraction(r - 1)),
    ClassificationRow(
        4, "not dividing delta with f irreducible",
        lambda c: c.delta % c.r != 0 and c.local_irreducible,
        lambda r: Fraction(r), _half(lambda r: 3 * (r - 1))),
    ClassificationRow(
        5, "dividing delta and s",
        lambda c: c.s % c.r == 0,
        lambda r: Fraction(2 * r - 1), _half(lambda r: (r - 1) * (r + 2))),
    ClassificationRow(
        6, "with r not dividing s and v(Delta) = 1",
        lambda c: c.delta_valuation == 1,
        _half(lambda r: 3 * r - 1), _half(lambda r: (r - 1) * (r + 5), 4)),
    ClassificationRow(
        7, "with r not dividing s and v(Delta) = 2",
        lambda c: c.delta_valuation == 2,
        lambda r: Fraction(r), _half(lambda r: 3 * (r - 1))),
    # Only v(Delta) = 3 occurs in the example table; larger valuations are assumed to behave alike.
    ClassificationRow(
        8, "with r not dividing s and v(Delta) >= 3",
        lambda c: c.delta_valuation >= 3,
        lambda r: Fraction(r - 1), lambda r: Fraction(r - 1)),
)

ROWS_BY_NUMBER = {row.number: row for row in ROWS}


def match_row(ctx):
    """First row whose predicate holds for ctx."""
    for row in ROWS:
        if row.predicate(ctx):
            return row
    raise ClassificationInconsistency(
        f"No row of the case table applies to {ctx.params} at q={ctx.q} "
        f"(Delta={ctx.delta})")


def row_exponent(row, r, field=RATIONALS):
    """Exponent predicted by `row` for degree r, as an int. Non-integral values are a bug."""
    field = check_field(field)
    value = row.exponent_Q(r) if field == RATIONALS else row.exponent_K(r)
    if value.denominator != 1:
        raise ClassificationInconsistency(
            f"Row {row.number}/{field} predicts the non-integral exponent {value} for r={r}")
    return int(value)


def classify(params, q, oracle, f_local=None, field=RATIONALS):
    """
    Classification(row, field, expected) for C(z, s) at the odd prime q.

    `f_local` is f over Q_r; it is only evaluated when q = r and r does not
    divide Delta.
    """
    ctx = CaseContext(params, q, oracle, f_local)
    row = match_row(ctx)
    return Classification(row, field, row_exponent(row, ctx.r, field))


def expected_exponent(params, q, oracle, f_local=None, field=RATIONALS):
    return classify(params, q, oracle, f_local, field).expected


def describe(classification, q, r, actual):
    """One diagnostic line, e.g. 'ROW 6/Q: prime q=r=5, with r not dividing s ... expected=7, actual=7'."""
    row = classification.row
    where = f"prime q={q}" if q != r else f"prime q=r={r}"
    if row.number <= 2:
        return (f"ROW {row.number}/{classification.field}: {where}, "
                f"expected={classification.expected}, actual={actual}")
    return (f"ROW {row.number}/{classification.field}: {where}, {row.label}, "
            f"expected={classification.expected}, actual={actual}")


def compare_at_prime(params, q, oracle, record, f_local=None, field=RATIONALS):
    """
    Classify q and compare against every prime (ideal) of `record` above q.

    Returns (classification, [PrimeVerdict, ...]). A prime absent from the
    record is compared with exponent 0.
    """
    params = CurveParameters(*params)
    classification = classify(params, q, oracle, f_local, field)
    entries = record.entries_above(q) or [ConductorEntry(q, q, 0, str(q))]
    verdicts = [
        PrimeVerdict(params, q, field, classification.row.number,
                     classification.expected, e.exponent, e.label)
        for e in entries
    ]
    return classification, verdicts
