# tests/test_report.py
"""
Tests for the report renderers.
"""

import json
import re

import pytest
import sexpdata

from opcount.report import (
    FORMATS,
    render,
    render_json,
    render_pairs,
    render_sexp,
    render_table,
)
from opcount.sweep import SweepRow
from tests.conftest import tallies


@pytest.fixture
def rows():
    return [
        SweepRow(4, tallies(new=4, partial_cmp=3)),
        SweepRow(1024, tallies(new=1024, partial_cmp=8977, drop=1024)),
    ]


class TestPairs:

    def test_render_pairs(self):
        assert render_pairs(tallies(new=4, partial_cmp=3)) == (
            "new=4 clone=0 drop=0 eq=0 partial_cmp=3 cmp=0"
        )


class TestTable:

    def test_header_and_rows(self, rows):
        lines = render_table(rows, colour=False).splitlines()
        assert lines[0].split() == ["size", "new", "clone", "drop", "eq", "partial_cmp", "cmp"]
        assert lines[1].split() == ["4", "4", "0", "0", "0", "3", "0"]
        assert lines[2].split() == ["1024", "1024", "0", "1024", "0", "8977", "0"]

    def test_columns_are_aligned(self, rows):
        lines = render_table(rows, colour=False).splitlines()
        assert len({len(line) for line in lines}) == 1

    def test_empty_table_has_only_a_header(self):
        assert len(render_table([], colour=False).splitlines()) == 1

    def test_coloured_header_keeps_the_labels(self, rows):
        # termcolor decides on its own whether the stream gets escapes
        header = render_table(rows, colour=True).splitlines()[0]
        plain = re.sub(r"\x1b\[[0-9;]*m", "", header)
        assert plain == render_table(rows, colour=False).splitlines()[0]


class TestMachineReadable:

    def test_json(self, rows):
        data = json.loads(render_json(rows))
        assert data[0] == {
            "size": 4, "new": 4, "clone": 0, "drop": 0, "eq": 0, "partial_cmp": 3, "cmp": 0,
        }
        assert data[1]["partial_cmp"] == 8977

    def test_sexp(self, rows):
        text = render_sexp(rows)
        assert text.startswith("(sweep (row (size 4) (new 4)")
        tree = sexpdata.loads(text)
        assert tree[0] == sexpdata.Symbol("sweep")
        assert len(tree) == 3


class TestDispatch:

    @pytest.mark.parametrize("fmt", FORMATS)
    def test_every_format_renders(self, rows, fmt):
        assert render(rows, fmt, colour=False)

    def test_pairs_format_prefixes_the_size(self, rows):
        first = render(rows, "pairs").splitlines()[0]
        assert first == "size=4 new=4 clone=0 drop=0 eq=0 partial_cmp=3 cmp=0"

    def test_unknown_format(self, rows):
        with pytest.raises(ValueError, match="unknown output format"):
            render(rows, "xml")
