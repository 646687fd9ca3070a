"""
Command-line runner for wiki decision-table pages.

This script:
- Loads a test page (plain .txt/.wiki file or an archive holding one)
- Runs every decision table on it against the registered fixtures
- Writes a right/wrong report next to the page, or to --output

Exit status: 0 when every cell passed, 1 on wrong or exception cells, 2 when
the page could not be loaded or parsed.
"""

import argparse
from pathlib import Path
import sys
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, FilePath, ValidationError

from calculator_fixture.common.logger import logger, set_level
from calculator_fixture.table.loader import load_page
from calculator_fixture.table.runner import DecisionTableRunner, PageReport, UnknownFixtureError, format_report

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class CliArgs(BaseModel):
    """
    Pydantic model used to validate CLI arguments.

    Attributes
    ----------
    file_path : FilePath
        Path to the test page or archive.
    output : Path, optional
        Where to write the report; derived from file_path when omitted.
    log_level : str
        Logging level name.
    """

    file_path: FilePath
    output: Optional[Path] = None
    log_level: LogLevel = Field(default="INFO")


def parse_args(argv: Optional[List[str]] = None) -> CliArgs:
    """
    Parse and validate command-line arguments.

    :param argv: Arguments without the program name; sys.argv when None
    :return: Validated CLI arguments
    :rtype: CliArgs
    """
    parser = argparse.ArgumentParser(
        prog="calculator-fixture",
        description="Run wiki decision-table pages against calculator fixtures",
    )

    parser.add_argument(
        "file_path",
        help="Path to the test page (.txt, .wiki) or an archive holding one",
    )
    parser.add_argument(
        "-o", "--output",
        help="Report path (default: <page>_results.txt next to the page)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    args = parser.parse_args(argv)

    try:
        return CliArgs(file_path=args.file_path, output=args.output, log_level=args.log_level)
    except ValidationError as exc:
        parser.error(str(exc))


def build_output_path(input_path: Path) -> Path:
    """
    Construct the report path based on the input file.

    - Preserves the original folder
    - Replaces dots in extensions with underscores
    - Appends '_results.txt' at the end

    Examples
    --------
    input: resources/CalculatorTests.wiki
    output: resources/CalculatorTests_wiki_results.txt

    input: resources/CalculatorTests.tar.xz
    output: resources/CalculatorTests_tar_xz_results.txt

    :param input_path: Path to the input file
    :return: Path to the report file
    """
    stem: str = input_path.name[: -len("".join(input_path.suffixes))] if input_path.suffixes else input_path.name
    suffix_safe = "".join(input_path.suffixes).replace(".", "_")
    return input_path.with_name(f"{stem}{suffix_safe}_results.txt")


def run(cli_args: CliArgs) -> int:
    """
    Run a page and write its report.

    :return: Process exit status
    :rtype: int
    """
    set_level(cli_args.log_level)
    input_path: Path = Path(cli_args.file_path)
    output_path: Path = cli_args.output or build_output_path(input_path)

    try:
        report: PageReport = DecisionTableRunner().run_page(load_page(input_path))
    except (ValueError, UnknownFixtureError) as exc:
        logger.error(f"📄❌ Cannot run {input_path}: {exc}")
        return 2

    output_path.write_text(format_report(report), encoding="utf-8")
    logger.info(f"✉️ Report written to {output_path}")
    return 0 if report.passed else 1


def main() -> None:
    """
    Main function executed by the console script.
    """
    sys.exit(run(parse_args()))


if __name__ == "__main__":
    main()
