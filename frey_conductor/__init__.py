"""
__init__.py: Exposes key functions from the submodules.

The Sage-backed oracle lives in frey_conductor.sage_oracle and is imported
on demand, so the classification logic can be used without SageMath.
"""
# Expose core configuration and exceptions
from .conductor_config import (
    RATIONALS, TOTALLY_REAL, FIELDS,
    FreyConductorError, InvalidDegree, DegenerateParameter, InvalidParameters,
    ClassificationInconsistency, SearchExhausted, OracleUnavailable
)

# Expose the oracle interface
from .oracle import AlgebraicOracle, ConductorRecord, ConductorEntry

# Expose main utilities
from .polynomial_builder import (
    CurveParameters, CurvePolynomials, curve_coefficients, build_curve_polynomials
)
from .validity import InvalidReason, Validity, check_validity, is_valid, assert_valid
from .classifier import ROWS, Classification, classify, expected_exponent, compare_at_prime
from .outcome import TestOutcome, PrimeVerdict

# Expose main execution functions
from .random_test import HarnessState, RandomConductorTest, run_random_tests
from .examples import EXAMPLE_TABLE, ExampleResult, check_example, run_examples
