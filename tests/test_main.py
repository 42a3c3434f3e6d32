"""Test the infix-calc command line."""
import builtins

import pytest

from infix_calculator import main as cli


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the process environment from leaking into the settings."""
    monkeypatch.delenv("INFIX_CALC_STRICT", raising=False)
    monkeypatch.delenv("INFIX_CALC_LOG_LEVEL", raising=False)


def test_main_expression(capsys) -> None:
    """An expression argument prints its result."""
    assert cli.main(["4*(6-3)+(8-6)/2"]) == 0
    assert capsys.readouterr().out == "Result : 13\n"


def test_main_postfix(capsys) -> None:
    """--postfix prints the converter output first."""
    assert cli.main(["--postfix", "2+3*4"]) == 0
    assert capsys.readouterr().out.splitlines() == ["Postfix : 2 3 4 * +", "Result : 14"]


def test_main_invalid_expression(capsys) -> None:
    """Malformed expressions print the error and exit with 1."""
    assert cli.main(["(1+2"]) == 1
    assert "Unclosed '('" in capsys.readouterr().out


def test_main_strict(capsys) -> None:
    """--strict rejects leftover operands."""
    assert cli.main(["3 4"]) == 0
    assert cli.main(["--strict", "3 4"]) == 1


def test_main_prompts_for_expression(monkeypatch, capsys) -> None:
    """Without arguments the expression is read from stdin."""
    prompts = []

    def fake_input(prompt):
        prompts.append(prompt)
        return "10-2-3"

    monkeypatch.setattr(builtins, "input", fake_input)

    assert cli.main([]) == 0
    assert prompts == [cli.PROMPT]
    assert capsys.readouterr().out == "Result : 5\n"


def test_main_empty_expression(capsys) -> None:
    """An empty expression prints that there is no result."""
    assert cli.main([""]) == 0
    assert capsys.readouterr().out == "No result\n"


def test_main_file(tmp_path, capsys) -> None:
    """--file evaluates every line and writes the results file."""
    input_file = tmp_path / "ops.txt"
    input_file.write_text("1+2\n2+3*4\n")

    assert cli.main(["--file", str(input_file)]) == 0

    output_file = tmp_path / "ops_txt_results.txt"
    assert output_file.read_text() == "1+2 = 3\n2+3*4 = 14\n"
    assert str(output_file) in capsys.readouterr().out


def test_main_rejects_expression_and_file(tmp_path) -> None:
    """Giving both an expression and a file is a usage error."""
    input_file = tmp_path / "ops.txt"
    input_file.write_text("1+2\n")
    with pytest.raises(SystemExit):
        cli.main(["1+2", "--file", str(input_file)])


def test_main_missing_file() -> None:
    """A file that does not exist is a usage error."""
    with pytest.raises(SystemExit):
        cli.main(["--file", "does/not/exist.txt"])


def test_main_invalid_log_level(capsys) -> None:
    """An unknown log level exits with 2."""
    assert cli.main(["--log-level", "LOUD", "1+1"]) == 2


def test_main_corrupt_archive(tmp_path, capsys) -> None:
    """A corrupt archive prints an error and exits with 1."""
    archive_path = tmp_path / "ops.zip"
    archive_path.write_bytes(b"garbage")

    assert cli.main(["--file", str(archive_path)]) == 1
    assert "Corrupt archive" in capsys.readouterr().err
