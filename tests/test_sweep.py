# tests/test_sweep.py
"""
Tests for the size-range grammar, SweepConfig and the sweep driver.
"""

import random

import pytest
from parsimonious.exceptions import ParseError

from opcount import ConfigError, SweepSpecError, UnknownAlgorithmError, UnknownBatchKindError
from opcount.batches import make_batch, random_batch, reversed_batch, sorted_batch
from opcount.sweep import (
    SIZE_RANGE_GRAMMAR,
    SizeRange,
    SweepConfig,
    parse_sizes,
    run_sweep,
)


class TestSizeRangeGrammar:

    @pytest.mark.parametrize("text", ["16", "1..1024", " 1 .. 1000 * 10 ", "0..50+10"])
    def test_grammar_accepts(self, text):
        assert SIZE_RANGE_GRAMMAR.parse(text) is not None

    @pytest.mark.parametrize("text", ["", "..4", "1..", "1..4*", "-1..4", "1..4/2", "a"])
    def test_grammar_rejects(self, text):
        with pytest.raises(ParseError):
            SIZE_RANGE_GRAMMAR.parse(text)


class TestParseSizes:

    @pytest.mark.parametrize("text,expected", [
        ("16", [16]),
        ("0", [0]),
        ("1..16", [1, 2, 4, 8, 16]),
        ("1..20", [1, 2, 4, 8, 16]),
        ("1..1000*10", [1, 10, 100, 1000]),
        ("3..81 * 3", [3, 9, 27, 81]),
        ("0..50+10", [0, 10, 20, 30, 40, 50]),
        ("5..5", [5]),
        ("0..0*2", [0]),
    ])
    def test_expansion(self, text, expected):
        assert parse_sizes(text).sizes() == expected

    def test_default_step_is_doubling(self):
        assert parse_sizes("2..8") == SizeRange(2, 8, "*", 2)

    @pytest.mark.parametrize("text", ["0..8", "0..8*2", "1..8*1", "1..8*0", "0..8+0", "9..3"])
    def test_non_terminating_or_empty_ranges(self, text):
        with pytest.raises(SweepSpecError) as excinfo:
            parse_sizes(text)
        assert excinfo.value.spec == text

    def test_syntax_error_is_a_sweep_spec_error(self):
        with pytest.raises(SweepSpecError, match="syntax error"):
            parse_sizes("1..x")

    def test_sweep_spec_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_sizes("nope")


class TestBatches:

    def test_sorted_and_reversed(self):
        assert sorted_batch(4) == [0, 1, 2, 3]
        assert reversed_batch(4) == [3, 2, 1, 0]
        assert reversed_batch(0) == []

    def test_random_batch_is_a_permutation(self):
        batch = random_batch(50, random.Random(3))
        assert sorted(batch) == list(range(50))

    def test_random_batch_is_reproducible(self):
        assert random_batch(20, random.Random(7)) == random_batch(20, random.Random(7))

    def test_make_batch_dispatch(self):
        assert make_batch("sorted", 3) == [0, 1, 2]
        with pytest.raises(UnknownBatchKindError):
            make_batch("zigzag", 3)


class TestSweepConfig:

    def test_defaults_are_valid(self):
        config = SweepConfig()
        assert config.algorithm == "sort"
        assert config.sizes == "1..1024"
        assert config.validate() == []

    def test_validate_reports_every_problem(self):
        problems = SweepConfig(algorithm="nope", batch="zigzag", sizes="0..4").validate()
        assert len(problems) == 3

    def test_from_env(self):
        config = SweepConfig.from_env({
            "OPCOUNT_ALGORITHM": "insertion_sort",
            "OPCOUNT_SIZES": "1..8",
            "OPCOUNT_BATCH": "reversed",
            "OPCOUNT_SEED": "42",
            "OPCOUNT_INCLUDE_TEARDOWN": "yes",
        })
        assert config == SweepConfig("insertion_sort", "1..8", "reversed", 42, True)

    def test_from_env_ignores_empty_values(self):
        assert SweepConfig.from_env({"OPCOUNT_SEED": ""}) == SweepConfig()

    def test_from_env_rejects_a_non_integer_seed(self):
        with pytest.raises(ConfigError) as excinfo:
            SweepConfig.from_env({"OPCOUNT_SEED": "abc"})
        assert excinfo.value.key == "OPCOUNT_SEED"
        assert isinstance(excinfo.value, ValueError)

    def test_from_process_environment(self, clean_env):
        clean_env.setenv("OPCOUNT_SIZES", "4")
        assert SweepConfig.from_env().sizes == "4"


class TestRunSweep:

    def test_one_row_per_size(self):
        rows = run_sweep(SweepConfig(algorithm="insertion_sort", sizes="1..8", batch="sorted"))
        assert [row.size for row in rows] == [1, 2, 4, 8]
        assert [row.counts["new"] for row in rows] == [1, 2, 4, 8]
        assert [row.counts["partial_cmp"] for row in rows] == [0, 1, 3, 7]

    def test_reversed_insertion_sort_is_quadratic(self):
        rows = run_sweep(SweepConfig(algorithm="insertion_sort", sizes="4..16", batch="reversed"))
        assert [row.counts["partial_cmp"] for row in rows] == [6, 28, 120]

    def test_include_teardown(self):
        rows = run_sweep(SweepConfig(sizes="8", include_teardown=True, seed=1))
        assert rows[0].counts["drop"] == 8

    def test_seeded_sweeps_are_reproducible(self):
        config = SweepConfig(sizes="1..64", seed=1234)
        first = [row.counts.get() for row in run_sweep(config)]
        second = [row.counts.get() for row in run_sweep(config)]
        assert first == second

    def test_unknown_algorithm(self):
        with pytest.raises(UnknownAlgorithmError):
            run_sweep(SweepConfig(algorithm="bogo_sort"))
