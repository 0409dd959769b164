"""
conductor_config.py: Central config for the frey_conductor package.

Defines the run constants (number of random cases, sample range, admissible
degrees r, verbosity), the two base fields the conductor is checked over,
and the exception hierarchy shared by every module.
"""

# === 1. Standard library imports ===
import random
from fractions import Fraction

# === 2. Third-party imports ===
from tqdm import tqdm
from colorama import Fore, Style


#### BEGIN USER CONFIG

# Number of random cases to be tested.
N_CASES = 2

# Maximum size, in absolute value, of s and z. The random driver draws
# s and z uniformly from [-MAX_SIZE, MAX_SIZE].
MAX_SIZE = 100

# Possible values of r, chosen at random for every case. Only primes >= 5.
R_VALUES = [5, 7]

# Print correct results as well. Incorrect results, the beginning and the
# end of the run are always printed.
VERBOSE = True

# Precision of the r-adic field used for the irreducibility test.
PADIC_PRECISION = 30

# Give up the search for a valid (s, z) after this many draws.
MAX_SEARCH_ATTEMPTS = 100000

# None -> fresh entropy on every run
SEED_INT = None

DEBUG = False

#### END USER CONFIG


# === 3. Base fields ===
RATIONALS = 'Q'       # conductor over Q, Table 1
TOTALLY_REAL = 'K'    # conductor over Q(zeta_r + zeta_r^-1), Table 2
FIELDS = (RATIONALS, TOTALLY_REAL)

MIN_DEGREE = 5


# === 4. Custom Exception Classes ===
class FreyConductorError(Exception):
    """Base exception for errors in the conductor verification."""
    pass

class InvalidDegree(FreyConductorError):
    """Raised when r is not an odd prime >= 5."""
    pass

class DegenerateParameter(FreyConductorError):
    """Raised when s = 0: no odd prime can witness the divisibility hypothesis."""
    pass

class InvalidParameters(FreyConductorError):
    """Raised when a hand-picked example violates the hypotheses of the theorem."""
    pass

class ClassificationInconsistency(FreyConductorError):
    """Raised when no row of the case table fires, or a row predicts a non-integer."""
    pass

class SearchExhausted(FreyConductorError):
    """Raised when the random search finds no valid (s, z) within the attempt cap."""
    pass

class OracleUnavailable(FreyConductorError):
    """Raised when the algebraic engine cannot compute the requested conductor."""
    pass


def check_field(field):
    if field not in FIELDS:
        raise ValueError(f"Unknown base field {field!r}; expected one of {FIELDS}")
    return field
