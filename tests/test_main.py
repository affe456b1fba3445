# tests/test_main.py
"""
End-to-end tests of the ``opcount`` command line.
"""

import json

import pytest

from opcount import __version__
from opcount.main import EXIT_ERROR, EXIT_INFRA, EXIT_OK, main


@pytest.fixture(autouse=True)
def _no_env(clean_env):
    return clean_env


class TestSweepCommand:

    def test_json_output(self, capsys):
        code = main([
            "sweep", "--algorithm", "insertion_sort", "--batch", "sorted",
            "--sizes", "4", "--format", "json",
        ])
        assert code == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data == [{
            "size": 4, "new": 4, "clone": 0, "drop": 0, "eq": 0, "partial_cmp": 3, "cmp": 0,
        }]

    def test_table_output(self, capsys):
        code = main([
            "sweep", "-a", "insertion_sort", "-b", "reversed", "-s", "1..4", "--no-colour",
        ])
        assert code == EXIT_OK
        lines = capsys.readouterr().out.splitlines()
        assert lines[0].split()[0] == "size"
        assert [line.split()[5] for line in lines[1:]] == ["0", "1", "6"]

    def test_include_teardown_flag(self, capsys):
        main(["sweep", "-s", "8", "--seed", "3", "--include-teardown", "-f", "json"])
        assert json.loads(capsys.readouterr().out)[0]["drop"] == 8

    def test_environment_supplies_defaults(self, capsys, clean_env):
        clean_env.setenv("OPCOUNT_ALGORITHM", "dedup")
        clean_env.setenv("OPCOUNT_SIZES", "2")
        clean_env.setenv("OPCOUNT_BATCH", "sorted")
        assert main(["sweep", "-f", "json"]) == EXIT_OK
        assert json.loads(capsys.readouterr().out)[0]["eq"] == 1

    def test_output_file(self, tmp_path, capsys):
        target = tmp_path / "reports" / "sweep.sexp"
        code = main(["sweep", "-s", "1..2", "-f", "sexp", "-o", str(target)])
        assert code == EXIT_OK
        assert target.read_text(encoding="utf-8").startswith("(sweep")
        assert capsys.readouterr().out == ""

    def test_unwritable_output(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x", encoding="utf-8")
        code = main(["sweep", "-s", "2", "-o", str(blocker / "sub" / "out.txt")])
        assert code == EXIT_INFRA

    def test_bad_size_range(self, capsys):
        assert main(["sweep", "--sizes", "0..8"]) == EXIT_ERROR
        assert "OPC-3001" in capsys.readouterr().err

    def test_bad_algorithm_from_environment(self, capsys, clean_env):
        clean_env.setenv("OPCOUNT_ALGORITHM", "bogo_sort")
        assert main(["sweep", "-s", "2"]) == EXIT_ERROR
        assert "bogo_sort" in capsys.readouterr().err

    def test_bad_seed_from_environment(self, capsys, clean_env):
        clean_env.setenv("OPCOUNT_SEED", "abc")
        assert main(["sweep", "-s", "2"]) == EXIT_ERROR
        assert "OPC-3002" in capsys.readouterr().err

    def test_bad_algorithm_flag_is_a_usage_error(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["sweep", "--algorithm", "bogo_sort"])
        assert excinfo.value.code == 2


class TestOtherCommands:

    def test_algorithms_listing(self, capsys):
        assert main(["algorithms"]) == EXIT_OK
        out = capsys.readouterr().out
        for name in ("sort", "insertion_sort", "cmp_sort", "heap_sort", "copy_sort", "dedup"):
            assert name in out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_ERROR
        assert "usage" in capsys.readouterr().err

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out
