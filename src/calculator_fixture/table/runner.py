"""Run decision tables against fixtures and collect right/wrong counts."""
from enum import Enum
import re
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, Field

from calculator_fixture.common.logger import logger
from calculator_fixture.common.operations import Success, render
from calculator_fixture.fixtures.calculator_fixture import CalculatorFixture
from calculator_fixture.table.parser import OUTPUT_MARKER, DecisionTable, parse_tables

# Fixture classes reachable from a table's first row
FIXTURES: Dict[str, Type[Any]] = {
    "CalculatorFixture": CalculatorFixture,
}


class UnknownFixtureError(LookupError):
    """Raised when a table names a fixture that is not registered."""


class CellStatus(str, Enum):
    """Verdict of one table cell."""

    RIGHT = "right"
    WRONG = "wrong"
    IGNORED = "ignored"
    EXCEPTION = "exception"


class CellOutcome(BaseModel):
    """Outcome of one output cell (or of a failing input cell)."""

    header: str
    status: CellStatus
    expected: str = ""
    actual: str = ""
    message: Optional[str] = None


class RowReport(BaseModel):
    """Cell outcomes of one table row, inputs first."""

    cells: List[CellOutcome] = Field(default_factory=list)


class TableReport(BaseModel):
    """Outcomes of every row of one table."""

    fixture_name: str
    line_number: int = 1
    rows: List[RowReport] = Field(default_factory=list)

    def count(self, status: CellStatus) -> int:
        return sum(1 for row in self.rows for cell in row.cells if cell.status is status)


class PageReport(BaseModel):
    """Reports of every table on a page; passed when nothing is wrong or raised."""

    tables: List[TableReport] = Field(default_factory=list)

    def count(self, status: CellStatus) -> int:
        return sum(table.count(status) for table in self.tables)

    @property
    def passed(self) -> bool:
        return self.count(CellStatus.WRONG) == 0 and self.count(CellStatus.EXCEPTION) == 0


def to_snake_case(header: str) -> str:
    """
    Translate a column header into a Python identifier.

    "first number" -> "first_number", "firstNumber" -> "first_number",
    "result?" -> "result".
    """
    name: str = header.rstrip(OUTPUT_MARKER).strip()
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name)
    name = re.sub(r"[^0-9a-zA-Z]+", "_", name)
    return name.strip("_").lower()


def resolve_fixture(name: str) -> Type[Any]:
    """
    Find the fixture class named in a table's first row.

    Spaces and case are ignored and only the last component of a dotted path
    is considered, so "Calculator Fixture" and "fixtures.CalculatorFixture"
    both resolve to CalculatorFixture.

    :param str name: Fixture name as written in the table

    :return: Fixture class
    :raises UnknownFixtureError: If no registered fixture matches
    """
    wanted: str = name.split(".")[-1].replace(" ", "").lower()
    for registered, fixture_cls in FIXTURES.items():
        if registered.lower() == wanted:
            return fixture_cls
    raise UnknownFixtureError(f"Unknown fixture: {name}")


def render_value(value: Any) -> str:
    """
    Render an accessor's return value as table text.

    Strings are diagnostics and pass through; numbers render like a Success.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return render(Success(value=value))
    return str(value)


class DecisionTableRunner:
    """
    Evaluate decision tables row by row.

    For every row:
        1. Create a fresh fixture instance.
        2. Call set_<header>(cell) for each input column, left to right.
        3. Call <header>() for each output column and compare its rendered
           value with the expected cell text.

    Exceptions raised by fixture code are recorded as exception cells and do not
    stop the table.
    """

    def _apply_inputs(self, fixture: Any, table: DecisionTable, row: List[str]) -> List[CellOutcome]:
        """Apply input cells; return exception outcomes for those that failed."""
        failures: List[CellOutcome] = []
        for column in table.input_columns:
            header: str = table.headers[column]
            setter: Optional[Callable[[str], Any]] = getattr(fixture, f"set_{to_snake_case(header)}", None)
            try:
                if setter is None:
                    raise AttributeError(f"No setter for column {header!r}")
                setter(row[column])
            except Exception as exc:
                logger.error(f"📋❌ Input {header!r}={row[column]!r} failed: {exc}")
                failures.append(
                    CellOutcome(header=header, status=CellStatus.EXCEPTION, expected=row[column], message=str(exc))
                )
        return failures

    def _check_output(self, fixture: Any, header: str, expected: str) -> CellOutcome:
        accessor: Optional[Callable[[], Any]] = getattr(fixture, to_snake_case(header), None)
        try:
            if accessor is None:
                raise AttributeError(f"No accessor for column {header!r}")
            actual: str = render_value(accessor())
        except Exception as exc:
            logger.error(f"📋❌ Output {header!r} failed: {exc}")
            return CellOutcome(header=header, status=CellStatus.EXCEPTION, expected=expected, message=str(exc))

        if not expected:
            status = CellStatus.IGNORED
        elif actual == expected:
            status = CellStatus.RIGHT
        else:
            status = CellStatus.WRONG
        return CellOutcome(header=header, status=status, expected=expected, actual=actual)

    def run_row(self, fixture_cls: Type[Any], table: DecisionTable, row: List[str]) -> RowReport:
        """
        Evaluate one row against a new fixture instance.

        :param fixture_cls: Fixture class resolved for the table
        :param DecisionTable table: Table the row belongs to
        :param List[str] row: Cell texts, aligned with table.headers

        :return: Outcomes of the row's cells
        :rtype: RowReport
        """
        fixture = fixture_cls()
        cells: List[CellOutcome] = self._apply_inputs(fixture, table, row)
        for column in table.output_columns:
            cells.append(self._check_output(fixture, table.headers[column], row[column]))
        logger.debug(f"📋 Row {row}: {[cell.status.value for cell in cells]}")
        return RowReport(cells=cells)

    def run_table(self, table: DecisionTable) -> TableReport:
        """
        Evaluate every row of a table.

        :raises UnknownFixtureError: If the table's fixture is not registered
        """
        fixture_cls: Type[Any] = resolve_fixture(table.fixture_name)
        logger.info(f"📋🏁 Running {table.fixture_name} ({len(table.rows)} rows) from line {table.line_number}")
        report = TableReport(fixture_name=table.fixture_name, line_number=table.line_number)
        for row in table.rows:
            report.rows.append(self.run_row(fixture_cls, table, row))
        return report

    def run_page(self, text: str) -> PageReport:
        """
        Parse a wiki page and evaluate all of its tables.

        :param str text: Page content

        :return: Report of every table on the page
        :rtype: PageReport
        :raises ValueError: If a table is malformed
        :raises UnknownFixtureError: If a table names an unknown fixture
        """
        report = PageReport(tables=[self.run_table(table) for table in parse_tables(text)])
        logger.info(f"📋✅ {summary_line(report)}")
        return report


def summary_line(report: PageReport) -> str:
    return (
        f"{report.count(CellStatus.RIGHT)} right, "
        f"{report.count(CellStatus.WRONG)} wrong, "
        f"{report.count(CellStatus.IGNORED)} ignored, "
        f"{report.count(CellStatus.EXCEPTION)} exceptions"
    )


def _format_cell(cell: CellOutcome) -> str:
    if cell.status is CellStatus.RIGHT:
        return f"{cell.header} {cell.actual} ok"
    if cell.status is CellStatus.WRONG:
        return f"{cell.header} expected {cell.expected} actual {cell.actual}"
    if cell.status is CellStatus.IGNORED:
        return f"{cell.header} {cell.actual} (ignored)"
    return f"{cell.header} ERROR: {cell.message}"


def format_report(report: PageReport) -> str:
    """
    Format a page report as plain text.

    One block per table, one line per row, then a summary line.
    """
    lines: List[str] = []
    for table in report.tables:
        lines.append(f"{table.fixture_name} (line {table.line_number})")
        for row_number, row in enumerate(table.rows, start=1):
            lines.append(f"  row {row_number}: " + " | ".join(_format_cell(cell) for cell in row.cells))
    lines.append(summary_line(report))
    return "\n".join(lines) + "\n"
