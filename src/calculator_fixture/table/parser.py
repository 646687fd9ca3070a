"""Parse decision tables out of wiki test pages."""
from typing import List

from pydantic import BaseModel, Field

TABLE_MARKER: str = "|"
OUTPUT_MARKER: str = "?"
# Leading "!" on a table line disables wiki markup inside its cells
ESCAPE_MARKER: str = "!"


class DecisionTable(BaseModel):
    """
    One decision table of a wiki page.

    Layout:
        |Calculator Fixture|
        |first number|second number|operation|result?|
        |5           |3            |add      |8.0    |

    The first row names the fixture, the second row holds the column headers
    and every following row is evaluated against a fresh fixture.
    """

    fixture_name: str = Field(..., min_length=1, description="Fixture named in the first row")
    headers: List[str] = Field(..., min_length=1, description="Column headers")
    rows: List[List[str]] = Field(default_factory=list, description="Data rows, one cell per header")
    line_number: int = Field(default=1, ge=1, description="Page line of the fixture row")

    @property
    def input_columns(self) -> List[int]:
        return [i for i, header in enumerate(self.headers) if not is_output_header(header)]

    @property
    def output_columns(self) -> List[int]:
        return [i for i, header in enumerate(self.headers) if is_output_header(header)]


def is_output_header(header: str) -> bool:
    """Output columns are marked with a trailing question mark."""
    return header.endswith(OUTPUT_MARKER)


def split_row(line: str) -> List[str]:
    """
    Split a table line into stripped cells.

    Leading and trailing bars are delimiters, not empty cells.

    :param str line: Table line, e.g. "|5|3|add|8.0|"

    :return: Cell texts
    :rtype: List[str]
    """
    body: str = line.strip()[1:]
    if body.endswith(TABLE_MARKER):
        body = body[:-1]
    return [cell.strip() for cell in body.split(TABLE_MARKER)]


def _build_table(block: List[tuple]) -> DecisionTable:
    """
    Build a DecisionTable from consecutive (line_number, cells) pairs.

    :raises ValueError: If the block has no header row or a row is misaligned
    """
    first_line, fixture_row = block[0]
    if len(block) < 2:
        raise ValueError(f"Table at line {first_line} has no header row")

    _, headers = block[1]
    rows: List[List[str]] = []
    for line_number, cells in block[2:]:
        if len(cells) != len(headers):
            raise ValueError(
                f"Row at line {line_number} has {len(cells)} cells, expected {len(headers)}"
            )
        rows.append(cells)

    return DecisionTable(
        fixture_name=fixture_row[0],
        headers=headers,
        rows=rows,
        line_number=first_line,
    )


def parse_tables(text: str) -> List[DecisionTable]:
    """
    Extract every decision table from a wiki page.

    A table is a run of consecutive lines starting with "|" (or "!|", the
    escaped form, which is read the same way). Any other line
    (prose, headings, !define directives, blank lines) ends the current table.

    :param str text: Page content

    :return: Tables in page order
    :rtype: List[DecisionTable]
    :raises ValueError: If a table is malformed
    """
    tables: List[DecisionTable] = []
    block: List[tuple] = []

    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped: str = line.strip()
        if stripped.startswith(ESCAPE_MARKER + TABLE_MARKER):
            stripped = stripped[1:]
        if stripped.startswith(TABLE_MARKER):
            block.append((line_number, split_row(stripped)))
            continue
        if block:
            tables.append(_build_table(block))
            block = []

    if block:
        tables.append(_build_table(block))

    return tables
