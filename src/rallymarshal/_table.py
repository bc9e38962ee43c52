"""Structural CSV parse: raw text into a header and string-valued rows."""

from __future__ import annotations

import io
from dataclasses import dataclass

import pandas as pd

from rallymarshal.exceptions import EmptyInputError, UnexpectedFailureError


@dataclass(frozen=True)
class TableRow:
    """A data row with whitespace-stripped cells, padded to the header width."""

    row_number: int
    cells: tuple[str, ...]

    @property
    def raw(self) -> str:
        return ",".join(self.cells)


@dataclass(frozen=True)
class ParsedTable:
    headers: tuple[str, ...]
    rows: tuple[TableRow, ...]


def _clean(cell: object) -> str:
    if cell is None or (isinstance(cell, float) and pd.isna(cell)):
        return ""
    return str(cell).strip()


def _trim_trailing_blanks(cells: tuple[str, ...]) -> tuple[str, ...]:
    end = len(cells)
    while end and cells[end - 1] == "":
        end -= 1
    return cells[:end]


def parse_table(text: str, source: str | None = None) -> ParsedTable:
    """Split delimited text into a header row and data rows.

    Every cell is kept as a string; no type inference happens here. Blank
    trailing fields are dropped on every line, so trailing delimiters are
    tolerated whether or not the header line carries them.

    Raises:
        EmptyInputError: If there is no header or no data row.
        UnexpectedFailureError: If the text cannot be tokenized, or a row
            carries values beyond the last header column.
    """
    if not text or not text.strip():
        raise EmptyInputError(source)

    # Upper bound on fields per line; shorter lines are padded to it.
    width = max(line.count(",") for line in text.splitlines()) + 1

    try:
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except pd.errors.EmptyDataError as exc:
        raise EmptyInputError(source) from exc
    except pd.errors.ParserError as exc:
        raise UnexpectedFailureError(f"Could not parse input: {exc}") from exc

    frame = frame.fillna("")
    if len(frame) < 2:
        raise EmptyInputError(source)

    records = [
        _trim_trailing_blanks(tuple(_clean(cell) for cell in row))
        for row in frame.itertuples(index=False, name=None)
    ]

    headers = records[0]
    rows = []
    for number, cells in enumerate(records[1:], start=1):
        if len(cells) > len(headers):
            raise UnexpectedFailureError(
                f"Could not parse input: row {number} has {len(cells)} fields, "
                f"header has {len(headers)}"
            )
        padded = cells + ("",) * (len(headers) - len(cells))
        rows.append(TableRow(row_number=number, cells=padded))
    return ParsedTable(headers=headers, rows=tuple(rows))
