"""Test the command-line runner."""
from pathlib import Path

import pytest

from calculator_fixture.main import CliArgs, build_output_path, parse_args, run

PASSING = "|Calculator Fixture|\n|first number|second number|operation|result?|\n|10|0|divide|error: Cannot divide by zero|\n"
FAILING = "|Calculator Fixture|\n|first number|second number|operation|result?|\n|1|1|add|3.0|\n"


@pytest.mark.parametrize("path,expected", [
    ("resources/CalculatorTests.wiki", "resources/CalculatorTests_wiki_results.txt"),
    ("resources/ops.tar.xz", "resources/ops_tar_xz_results.txt"),
    ("resources/ops.7z", "resources/ops_7z_results.txt"),
    ("resources/ops", "resources/ops_results.txt"),
])
def test_build_output_path(path, expected) -> None:
    """Report paths sit next to the input with the suffixes folded into the name."""
    assert build_output_path(Path(path)) == Path(expected)


def test_parse_args(tmp_path) -> None:
    """Arguments are validated into CliArgs."""
    page = tmp_path / "page.wiki"
    page.write_text(PASSING)
    args = parse_args([str(page), "--output", str(tmp_path / "out.txt"), "--log-level", "debug"])
    assert args.file_path == page
    assert args.output == tmp_path / "out.txt"
    assert args.log_level == "DEBUG"


def test_parse_args_missing_file(tmp_path) -> None:
    """A missing page is rejected by the argument parser."""
    with pytest.raises(SystemExit):
        parse_args([str(tmp_path / "missing.wiki")])


def test_run_passing_page(tmp_path) -> None:
    """A passing page exits 0 and writes the default report."""
    page = tmp_path / "page.wiki"
    page.write_text(PASSING)
    assert run(CliArgs(file_path=page)) == 0
    report = (tmp_path / "page_wiki_results.txt").read_text()
    assert report.splitlines()[-1] == "1 right, 0 wrong, 0 ignored, 0 exceptions"


def test_run_failing_page(tmp_path) -> None:
    """A page with a wrong cell exits 1."""
    page = tmp_path / "page.txt"
    page.write_text(FAILING)
    output = tmp_path / "report.txt"
    assert run(CliArgs(file_path=page, output=output)) == 1
    assert "expected 3.0 actual 2.0" in output.read_text()


@pytest.mark.parametrize("content", [
    "|Calculator Fixture|\n",
    "|Abacus Fixture|\n|a|b?|\n|1|2|\n",
])
def test_run_unrunnable_page(tmp_path, content) -> None:
    """Malformed pages and unknown fixtures exit 2."""
    page = tmp_path / "page.txt"
    page.write_text(content)
    assert run(CliArgs(file_path=page)) == 2


@pytest.mark.parametrize("name", ["page.zip", "page.tar.xz"])
def test_run_corrupt_archive(tmp_path, name) -> None:
    """A page archive that cannot be opened exits 2."""
    archive_path = tmp_path / name
    archive_path.write_bytes(b"not an archive at all")
    assert run(CliArgs(file_path=archive_path)) == 2
