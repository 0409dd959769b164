# tests/test_examples.py
# Fixed example table for rows 1-8
import pytest

from frey_conductor.conductor_config import (
    RATIONALS, TOTALLY_REAL, InvalidParameters,
)
from frey_conductor import examples
from frey_conductor.examples import EXAMPLE_TABLE, check_example, run_examples
from conftest import StubOracle


class TestExampleTable:
    def test_covers_every_row(self):
        assert sorted(EXAMPLE_TABLE) == list(range(1, 9))
        assert all(EXAMPLE_TABLE[row] for row in EXAMPLE_TABLE)

    def test_rows_away_from_r_use_q_seven(self):
        for row in (1, 2):
            assert all(q == 7 and r == 5 for r, q, s, z in EXAMPLE_TABLE[row])
        for row in range(3, 9):
            assert all(q == r for r, q, s, z in EXAMPLE_TABLE[row])

    def test_every_example_is_routed_to_its_row(self, oracle):
        results = run_examples(oracle, fields=(RATIONALS,), verbose=False)
        misrouted = [(res.designed_row, tuple(res.params), res.row)
                     for res in results if not res.routed_correctly]
        assert misrouted == []


class TestRunExamples:
    def test_truthful_oracle_passes_all(self, oracle):
        results = run_examples(oracle, verbose=False)
        n_examples = sum(len(v) for v in EXAMPLE_TABLE.values())
        assert len(results) == 2 * n_examples
        assert all(res.passed for res in results)
        assert {res.field for res in results} == {RATIONALS, TOTALLY_REAL}

    def test_wrong_exponent_is_reported(self, capsys):
        lying = StubOracle()
        lying.exponent = lambda params, q, field: (
            lying.truthful_exponent(params, q, field) + (field == TOTALLY_REAL))
        results = run_examples(lying, rows=[6], verbose=True)
        assert [res.passed for res in results] == [True, False] * len(EXAMPLE_TABLE[6])
        out = capsys.readouterr().out
        assert "ERROR IN ROW 6 (K)" in out
        assert "ERROR IN ROW 6 (Q)" not in out

    def test_row_filter(self, oracle):
        results = run_examples(oracle, rows=[5], fields=(RATIONALS,), verbose=False)
        assert [tuple(res.params) for res in results] == [(5, 20, 25), (7, 14, 49)]
        assert [res.expected for res in results] == [9, 13]

    def test_invalid_example_aborts(self, oracle):
        table = {1: [(5, 7, 4, 9)], 2: [(5, 7, 0, 49)], 3: [(5, 5, 18, 4)]}
        with pytest.raises(InvalidParameters):
            run_examples(oracle, table=table, verbose=False)
        # nothing after the bad example was computed
        assert oracle.calls['conductor'] == 2

    def test_divisibility_violation_aborts(self, oracle):
        with pytest.raises(InvalidParameters):
            check_example(5, 5, 243, 3, oracle, RATIONALS)

    def test_singular_example_aborts(self):
        oracle = StubOracle(singular=lambda p: True)
        with pytest.raises(InvalidParameters):
            check_example(5, 7, 4, 9, oracle, RATIONALS)

    def test_misrouted_example_fails(self, oracle):
        result = check_example(5, 5, 4, 4, oracle, RATIONALS, designed_row=7)
        assert result.row == 6
        assert all(v.correct for v in result.verdicts)
        assert not result.passed

    def test_verbose_lines(self, oracle, capsys):
        run_examples(oracle, rows=[1], fields=(RATIONALS,))
        out = capsys.readouterr().out
        assert "r=5, q=7, s=4, z=9:" in out
        assert "ROW 1/Q: prime q=7, expected=2, actual=2" in out


class TestPartialOracle:
    def test_unsupported_degree_is_skipped(self, capsys):
        oracle = StubOracle(degrees={5})
        results = run_examples(oracle, rows=[5])
        assert [(tuple(res.params), res.field) for res in results] == \
            [((5, 20, 25), RATIONALS), ((5, 20, 25), TOTALLY_REAL)]
        assert all(res.passed for res in results)
        out = capsys.readouterr().out
        assert "r=7, q=7, s=14, z=49:" in out
        assert "skipped over Q" in out and "skipped over K" in out

    def test_unsupported_field_is_skipped(self):
        oracle = StubOracle(fields=(RATIONALS,))
        results = run_examples(oracle, rows=[1], verbose=False)
        assert {res.field for res in results} == {RATIONALS}


class TestMain:
    def test_truthful_oracle_exits_zero(self, capsys):
        assert examples.main(StubOracle()) == 0
        assert "failed: 0, skipped: 0" in capsys.readouterr().out

    def test_mismatch_exits_one(self):
        lying = StubOracle()
        lying.exponent = lambda params, q, field: lying.truthful_exponent(params, q, field) + 1
        assert examples.main(lying) == 1

    def test_genus_two_only_oracle_finishes_the_table(self, capsys):
        oracle = StubOracle(fields=(RATIONALS,), degrees={5})
        assert examples.main(oracle) == 0
        n_quintic = sum(1 for v in EXAMPLE_TABLE.values() for ex in v if ex[0] == 5)
        assert oracle.calls['conductor'] == n_quintic
        assert "skipped: 1" in capsys.readouterr().out
