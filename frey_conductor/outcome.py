"""
outcome.py: Counters and per-prime verdicts of one verification run.
"""
import time
from collections import Counter, defaultdict, namedtuple


class PrimeVerdict(namedtuple('PrimeVerdict',
                              ['params', 'q', 'field', 'row', 'expected', 'actual', 'label'])):
    """Comparison of the predicted and computed conductor exponent at one prime (ideal)."""
    __slots__ = ()

    @property
    def correct(self):
        return self.expected == self.actual


class TestOutcome:
    # keep pytest from collecting this class
    __test__ = False

    def __init__(self):
        self.start_time = time.time()
        self.counters = Counter()
        self.counters.update({
            'cases': 0,
            'cases_incorrect': 0,
            'primes_checked': 0,
            'primes_incorrect': 0,
            'bad_set_mismatches': 0,
            'samples_drawn': 0,
            'samples_rejected': 0,
        })
        # Reasons for rejected random samples, with a few examples each
        self.discard_reasons = Counter()
        self.discard_examples = defaultdict(list)
        self.verdicts = []
        self.bad_set_failures = []
        self._case_failed = False

    # ---------------- Sampling ----------------
    def record_sample(self):
        self.counters['samples_drawn'] += 1

    def record_discard(self, reason, example=None):
        self.counters['samples_rejected'] += 1
        self.discard_reasons[reason] += 1
        if example is not None and len(self.discard_examples[reason]) < 5:
            self.discard_examples[reason].append(example)

    # ---------------- Cases ----------------
    def start_case(self):
        self.counters['cases'] += 1
        self._case_failed = False

    def end_case(self):
        if self._case_failed:
            self.counters['cases_incorrect'] += 1

    def record_verdict(self, verdict):
        self.counters['primes_checked'] += 1
        self.verdicts.append(verdict)
        if not verdict.correct:
            self.counters['primes_incorrect'] += 1
            self._case_failed = True

    def record_bad_set_mismatch(self, params, actual, expected):
        self.counters['bad_set_mismatches'] += 1
        self.bad_set_failures.append({'params': params, 'actual': actual, 'expected': expected})
        self._case_failed = True

    # ---------------- Reporting ----------------
    @property
    def total_cases(self):
        return self.counters['cases']

    @property
    def incorrect_cases(self):
        return self.counters['cases_incorrect']

    @property
    def correct_cases(self):
        return self.total_cases - self.incorrect_cases

    @property
    def mismatches(self):
        return [v for v in self.verdicts if not v.correct]

    @property
    def passed(self):
        return self.counters['primes_incorrect'] == 0 and self.counters['bad_set_mismatches'] == 0

    def elapsed(self):
        return time.time() - self.start_time

    def summary(self):
        return (f"Total cases={self.total_cases}, correct cases={self.correct_cases}, "
                f"incorrect cases={self.incorrect_cases}")

    def report(self):
        lines = [self.summary()]
        lines.append(f"  primes checked: {self.counters['primes_checked']}, "
                     f"incorrect exponents: {self.counters['primes_incorrect']}, "
                     f"bad-reduction set mismatches: {self.counters['bad_set_mismatches']}")
        if self.counters['samples_drawn']:
            lines.append(f"  samples drawn: {self.counters['samples_drawn']}, "
                         f"rejected: {self.counters['samples_rejected']}")
            for reason, n in self.discard_reasons.most_common():
                lines.append(f"    {reason}: {n} (e.g. {self.discard_examples[reason][:3]})")
        lines.append(f"  elapsed: {self.elapsed():.2f}s")
        return "\n".join(lines)
