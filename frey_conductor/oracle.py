"""
oracle.py: Interface to the algebraic engine and the conductor record it returns.

Everything that needs exact algebraic number theory (number fields, r-adic
polynomials, discriminants, conductors of hyperelliptic curves) goes through
an AlgebraicOracle. The classification and the drivers only ever see this
interface, so they run against the Sage engine or a hand-written stub alike.
"""
from abc import ABC, abstractmethod
from collections import namedtuple

from .conductor_config import RATIONALS, FIELDS, check_field


# One factor of the conductor. Over Q, `prime == norm` and `label` is the prime.
# Over K, `label` names the prime ideal and `prime` is the rational prime below it.
ConductorEntry = namedtuple('ConductorEntry', ['prime', 'norm', 'exponent', 'label'])


class ConductorRecord:
    """
    Conductor of C(z, s) over one base field, factored into (prime or ideal, exponent).

    Produced once per curve by the oracle and read-only afterwards.
    `odd_part_only` is set when the engine could not determine the 2-part of the
    conductor, in which case only odd primes are meaningful.
    """

    def __init__(self, field, entries, odd_part_only=False):
        self.field = check_field(field)
        self.entries = tuple(ConductorEntry(*e) for e in entries)
        self.odd_part_only = bool(odd_part_only)

    @classmethod
    def from_factorization(cls, factorization, odd_part_only=False):
        """Build a record over Q from [(p, e), ...]."""
        return cls(RATIONALS,
                   [(int(p), int(p), int(e), str(p)) for p, e in factorization if int(e) > 0],
                   odd_part_only=odd_part_only)

    def bad_primes(self):
        """Rational primes of bad reduction (below some ideal of positive exponent)."""
        return {e.prime for e in self.entries if e.exponent > 0}

    def entries_above(self, q):
        return [e for e in self.entries if e.prime == q]

    def exponents_at(self, q):
        """Exponents of every prime (ideal) above q; [0] when q is a prime of good reduction."""
        exps = [e.exponent for e in self.entries_above(q)]
        return exps if exps else [0]

    def __eq__(self, other):
        if not isinstance(other, ConductorRecord):
            return NotImplemented
        return (self.field, self.entries, self.odd_part_only) == \
               (other.field, other.entries, other.odd_part_only)

    def __repr__(self):
        body = ", ".join(f"{e.label}^{e.exponent}" for e in self.entries)
        return f"ConductorRecord({self.field}: {body or '1'})"


class AlgebraicOracle(ABC):
    """
    Exact algebraic engine consumed by the polynomial builder, the validity
    filter, the classifier and the drivers.

    Polynomials and curves are opaque: the core only passes them back to the
    oracle that produced them.
    """

    @abstractmethod
    def totally_real_minimal_polynomial(self, r):
        """Minimal polynomial of zeta_r + zeta_r^-1 over Q."""

    @abstractmethod
    def polynomial(self, coefficients, r, field=RATIONALS):
        """The polynomial with the given integer coefficients (lowest degree first) over Q or K."""

    @abstractmethod
    def local_polynomial(self, coefficients, r):
        """The same polynomial over the r-adic field Q_r."""

    @abstractmethod
    def discriminant(self, f):
        pass

    @abstractmethod
    def is_irreducible(self, f_local):
        pass

    @abstractmethod
    def prime_divisors(self, n):
        """Sorted positive primes dividing n; empty for 0 and +-1."""

    @abstractmethod
    def valuation(self, n, p):
        """p-adic valuation of the integer n; +infinity for n = 0."""

    @abstractmethod
    def hyperelliptic_curve(self, f):
        """The hyperelliptic curve y^2 = f(x)."""

    @abstractmethod
    def conductor(self, curve, field=RATIONALS):
        """ConductorRecord of `curve` over its base field."""

    def conductor_record(self, f, field=RATIONALS):
        return self.conductor(self.hyperelliptic_curve(f), field)

    def available_fields(self):
        """Base fields whose conductors this engine can compute."""
        return FIELDS

    def supports(self, r, field=RATIONALS):
        """True when the conductor of a degree-r curve over `field` can be computed."""
        return check_field(field) in self.available_fields()

    def available_degrees(self, r_values, field=RATIONALS):
        """The degrees among r_values that `supports` accepts over `field`."""
        return [r for r in r_values if self.supports(r, field)]
