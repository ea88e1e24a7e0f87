"""Tests for cli.py: argument handling and exit codes."""
import pytest

from cubegen.cli import build_policies, main
from cubegen.evaluation import DefaultEvaluation, RiverEvaluation
from cubegen.validation import DefaultValidation, RiverValidation


class TestBuildPolicies:
    def test_default(self):
        validator, evaluator = build_policies("default", 4)
        assert validator == DefaultValidation(max_height=4)
        assert isinstance(evaluator, DefaultEvaluation)

    def test_river(self):
        validator, evaluator = build_policies("river", 50)
        assert validator == RiverValidation(side_length=50)
        assert evaluator == RiverEvaluation(side_length=50)

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown mode"):
            build_policies("castle", 3)


class TestMain:
    def test_found_structures_exit_zero(self, capsys):
        code = main(["-n", "1", "-m", "2", "-k", "1", "--max-attempts", "5",
                     "--seed", "0", "--no-progress"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Default Solutions using n=1 m=2 k=1" in out
        assert "Best Solution (Score: 2.8):" in out
        assert "5 Structures evaluated" in out

    def test_no_structures_exit_one(self, capsys):
        # a 25-cell map can not hold a 50-cube river
        code = main(["--mode", "river", "-n", "50", "-m", "4", "-k", "1",
                     "--max-attempts", "5", "--no-progress"])
        out = capsys.readouterr().out
        assert code == 1
        assert "No solutions for the given parameters found." in out

    @pytest.mark.parametrize("argv", [
        ["-n", "0"],
        ["-k", "0"],
        ["-m", "0"],
        ["--workers", "0"],
        ["--max-attempts", "-1"],
    ])
    def test_invalid_parameters_exit_two(self, capsys, argv):
        assert main(argv + ["--no-progress"]) == 2
        assert capsys.readouterr().out.startswith("Error:")

    def test_unknown_mode_rejected_by_parser(self):
        with pytest.raises(SystemExit) as exc:
            main(["--mode", "castle"])
        assert exc.value.code == 2

    def test_progress_line_on_stderr(self, capsys):
        code = main(["-n", "2", "-m", "2", "-k", "1", "--max-attempts", "3", "--seed", "1"])
        captured = capsys.readouterr()
        assert code == 0
        assert "Generating and evaluating structures:" in captured.err

    def test_export(self, tmp_path, capsys):
        target = tmp_path / "best.stl"
        code = main(["-n", "4", "-m", "3", "-k", "2", "--max-attempts", "20",
                     "--seed", "3", "--no-progress", "--export", str(target)])
        assert code == 0
        assert target.exists()
        assert f"Best structure written to {target}" in capsys.readouterr().out
