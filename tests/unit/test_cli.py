"""Tests for the command-line calculator."""

import pytest

from sqldecimal import cli
from sqldecimal.config import CalcConfig
from tests.helpers import D


class TestEvaluate:
    """Tests for evaluate and render."""

    def test_single_operand(self):
        d = D("1.50")
        assert cli.evaluate(d, None, None, CalcConfig()) is d

    def test_missing_rhs(self):
        with pytest.raises(ValueError, match="right-hand operand"):
            cli.evaluate(D("1"), "+", None, CalcConfig())

    def test_unknown_operator(self):
        with pytest.raises(ValueError, match="Unknown operator"):
            cli.evaluate(D("1"), "^", D("2"), CalcConfig())

    def test_division_uses_increment(self):
        config = CalcConfig(div_precision_increment=10)
        result = cli.evaluate(D("1"), "/", D("3"), config)
        assert result.string() == "0." + "3" * 18

    @pytest.mark.parametrize(
        "mode,expected",
        [("mysql", "1.5"), ("canonical", "1.500"), ("fixed", "1.50")],
    )
    def test_render_modes(self, mode, expected):
        assert cli.render(D("1.500"), CalcConfig(output_mode=mode)) == expected


class TestMain:
    """Tests for the CLI entry point."""

    @pytest.mark.parametrize(
        "argv,expected",
        [
            (["1.50", "+", "2.250"], "3.75"),
            (["1", "/", "3"], "0.333333333"),
            (["10", "/", "4", "--mode", "fixed", "--places", "4"], "2.5000"),
            (["5.45", "--mode", "fixed", "--places", "1"], "5.5"),
            (["12345.678", "--clamp", "3", "2"], "999.99"),
            (["-12345.678", "--clamp", "3", "2"], "-999.99"),
            (["1.50", "+", "2.250", "--mode", "canonical"], "3.750"),
            (["1", "/", "3", "--scale-incr", "10"], "0." + "3" * 18),
            (["-5", "*", "2"], "-10"),
            (["1e3", "+", "1"], "1001"),
            (["7.5", "%", "2"], "1.5"),
        ],
    )
    def test_outputs(self, clean_env, capsys, argv, expected):
        assert cli.main(argv) == 0
        assert capsys.readouterr().out.strip() == expected

    def test_invalid_operand(self, clean_env, capsys):
        assert cli.main(["1.2.3", "+", "1"]) == 1
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "too many .s" in err

    def test_division_by_zero(self, clean_env, capsys):
        assert cli.main(["1", "/", "0"]) == 3
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "division by 0" in captured.err

    def test_clamp_ceiling_is_fatal(self, clean_env, capsys):
        assert cli.main(["1", "--clamp", "400", "0"]) == 3

    def test_operator_without_rhs(self, clean_env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["1", "+"])
        assert exc_info.value.code == 2

    def test_unknown_operator(self, clean_env):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["1", "^", "2"])
        assert exc_info.value.code == 2

    def test_env_output_mode(self, clean_env, capsys):
        clean_env.setenv("SQLDECIMAL_OUTPUT_MODE", "canonical")
        assert cli.main(["1.50"]) == 0
        assert capsys.readouterr().out.strip() == "1.50"

    def test_option_overrides_env(self, clean_env, capsys):
        clean_env.setenv("SQLDECIMAL_OUTPUT_MODE", "canonical")
        assert cli.main(["1.50", "--mode", "mysql"]) == 0
        assert capsys.readouterr().out.strip() == "1.5"

    def test_env_increment(self, clean_env, capsys):
        clean_env.setenv("SQLDECIMAL_DIV_PRECISION_INCREMENT", "0")
        assert cli.main(["2", "/", "3"]) == 0
        assert capsys.readouterr().out.strip() == "1"

    def test_bad_env_mode(self, clean_env, capsys):
        clean_env.setenv("SQLDECIMAL_OUTPUT_MODE", "bogus")
        assert cli.main(["1"]) == 1
        assert "Invalid output mode" in capsys.readouterr().err

    def test_verbose_logs_result(self, clean_env, capsys):
        assert cli.main(["1", "+", "1", "--verbose"]) == 0
        captured = capsys.readouterr()
        assert captured.out.strip() == "2"
        assert "calculation_done" in captured.err

    def test_quiet_by_default(self, clean_env, capsys):
        assert cli.main(["1", "+", "1"]) == 0
        assert "calculation_done" not in capsys.readouterr().err


class TestLongOperands:
    """Tests for operands past the interpreter's int/str digit limit."""

    def test_large_exponent_renders(self, clean_env, capsys):
        assert cli.main(["1e5000"]) == 0
        assert capsys.readouterr().out.strip() == "1" + "0" * 5000

    def test_long_addition(self, clean_env, capsys):
        assert cli.main(["9" * 5000, "+", "1"]) == 0
        assert capsys.readouterr().out.strip() == "1" + "0" * 5000
