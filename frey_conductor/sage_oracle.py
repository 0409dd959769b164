"""
sage_oracle.py: AlgebraicOracle backed by SageMath.

Number fields, r-adic polynomials, discriminants and integer factorisation are
done natively in Sage. Conductors of hyperelliptic curves are delegated to
Magma through Sage's Magma interface when a Magma binary is installed; without
Magma only genus 2 curves over Q (r = 5) are supported, through PARI's
genus2red.
"""
from functools import lru_cache

# SageMath imports
from sage.all import (
    ZZ, QQ, Qp, CyclotomicField, NumberField, PolynomialRing, HyperellipticCurve,
    Infinity, magma
)
from sage.interfaces.genus2reduction import genus2reduction

from .conductor_config import (
    PADIC_PRECISION, DEBUG, RATIONALS, TOTALLY_REAL, FIELDS,
    OracleUnavailable, check_field
)
from .oracle import AlgebraicOracle, ConductorRecord


@lru_cache(maxsize=1)
def magma_available():
    """True when Sage can start a Magma session."""
    try:
        magma.eval('1;')
    except Exception as e:
        # Sage raises TypeError/RuntimeError depending on how the binary is missing
        if DEBUG:
            print(f"[sage_oracle] Magma not available: {e}")
        return False
    return True


@lru_cache(maxsize=None)
def totally_real_minpoly(r):
    """Minimal polynomial over Q of w = zeta_r + 1/zeta_r."""
    cycl = CyclotomicField(r, 'zeta')
    zeta = cycl.gen()
    return (zeta + ~zeta).minpoly()


@lru_cache(maxsize=None)
def totally_real_field(r):
    """K = Q(zeta_r + zeta_r^-1), of degree (r-1)/2."""
    return NumberField(totally_real_minpoly(r), 'w')


class SageOracle(AlgebraicOracle):

    def __init__(self, padic_precision=PADIC_PRECISION, use_magma=None, debug=DEBUG):
        self.padic_precision = padic_precision
        self.use_magma = magma_available() if use_magma is None else bool(use_magma)
        self.debug = debug

    # ---------------- Fields and polynomials ----------------
    def totally_real_minimal_polynomial(self, r):
        return totally_real_minpoly(r)

    def polynomial(self, coefficients, r, field=RATIONALS):
        field = check_field(field)
        base = ZZ if field == RATIONALS else totally_real_field(r)
        return PolynomialRing(base, 'x')(list(coefficients))

    def local_polynomial(self, coefficients, r):
        return PolynomialRing(Qp(r, self.padic_precision), 'y')(list(coefficients))

    def discriminant(self, f):
        return f.discriminant()

    def is_irreducible(self, f_local):
        fac = f_local.factor()
        return len(fac) == 1 and fac[0][1] == 1 and fac[0][0].degree() == f_local.degree()

    # ---------------- Integers ----------------
    def prime_divisors(self, n):
        n = ZZ(n)
        if n == 0:
            return []
        return [int(p) for p in n.prime_divisors()]

    def valuation(self, n, p):
        n = ZZ(n)
        if n == 0:
            return Infinity
        return int(n.valuation(p))

    # ---------------- Curves and conductors ----------------
    def hyperelliptic_curve(self, f):
        if f.base_ring() == ZZ:
            f = f.change_ring(QQ)
        return HyperellipticCurve(f)

    def conductor(self, curve, field=RATIONALS):
        field = check_field(field)
        f = curve.hyperelliptic_polynomials()[0]
        if self.use_magma:
            return self._magma_conductor(f, field)
        if field == RATIONALS and f.degree() in (5, 6):
            return self._genus2_conductor(f)
        raise OracleUnavailable(
            f"Conductor of y^2 = {f} over {field} needs Magma "
            f"(without it only genus 2 curves over Q are supported)")

    def available_fields(self):
        return FIELDS if self.use_magma else (RATIONALS,)

    def supports(self, r, field=RATIONALS):
        field = check_field(field)
        if self.use_magma:
            return True
        # genus2red: y^2 = f(x) with deg f = 5 only
        return field == RATIONALS and r == 5

    def _magma_conductor(self, f, field):
        mC = magma.HyperellipticCurve(magma(f))
        cond = magma.Conductor(mC)
        if field == RATIONALS:
            N = ZZ(cond.sage())
            return ConductorRecord.from_factorization(N.factor())

        entries = []
        fac = magma.Factorisation(cond)
        for i in range(1, len(fac) + 1):
            ideal, e = fac[i][1], fac[i][2]
            norm = ZZ(magma.Norm(ideal).sage())
            p = norm.prime_divisors()[0]
            entries.append((int(p), int(norm), int(e.sage()), f"P{i} | {p}"))
        if self.debug:
            print(f"[sage_oracle] conductor over K: {entries}")
        return ConductorRecord(TOTALLY_REAL, entries)

    def _genus2_conductor(self, f):
        red = genus2reduction(0, f.change_ring(ZZ))
        if self.debug:
            print(f"[sage_oracle] genus2red: {red}")
        return ConductorRecord.from_factorization(
            ZZ(red.conductor).factor(),
            odd_part_only=bool(red.prime_to_2_conductor_only))
