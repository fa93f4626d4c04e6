"""Spreadsheet files for the tabular codec.

Reads and writes ``.xlsx`` workbooks with openpyxl. The first sheet is
read on import; export writes a single sheet named "Translations".

Python 3.13+.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Sequence
from pathlib import Path
from typing import IO

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from arbsync.constants import SHEET_TITLE
from arbsync.diagnostics import ErrorTemplate, WorkbookError
from arbsync.model import Row
from arbsync.sync import DocumentSet
from arbsync.tabular.codec import from_rows, table_columns, to_rows

__all__ = [
    "export_workbook",
    "import_workbook",
    "read_workbook",
    "write_workbook",
]

logger = logging.getLogger(__name__)

type WorkbookTarget = str | Path | IO[bytes]


def _describe(source: WorkbookTarget) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<stream>")


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def write_workbook(rows: Sequence[Row], columns: Sequence[str], target: WorkbookTarget) -> None:
    """Write rows to a one-sheet workbook.

    Args:
        rows: Table rows keyed by column name
        columns: Header, in column order; missing cells are written empty
        target: File path or binary stream
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    sheet.append(list(columns))
    for row in rows:
        sheet.append([row.get(column, "") for column in columns])
        # Translations starting with "=" are text, not formulas.
        for cell in sheet[sheet.max_row]:
            if cell.data_type == "f":
                cell.data_type = "s"
    workbook.save(target)
    logger.info("Wrote %d rows to workbook %s", len(rows), _describe(target))


def read_workbook(source: WorkbookTarget) -> list[dict[str, str]]:
    """Read the first sheet of a workbook as rows.

    The first row is the header. Empty cells read as "", fully empty rows
    are skipped and cells under an empty header are dropped.

    Raises:
        WorkbookError: If the file cannot be opened, has no header row
            or has no data rows
    """
    name = _describe(source)
    try:
        workbook = load_workbook(filename=source, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise WorkbookError(ErrorTemplate.workbook_unreadable(name, str(e))) from e

    try:
        sheet = workbook.worksheets[0]
        values = sheet.iter_rows(values_only=True)
        header = next(values, None)
        if header is None or all(cell is None or cell == "" for cell in header):
            raise WorkbookError(ErrorTemplate.workbook_no_header(name))
        columns = [_cell_text(cell) for cell in header]

        rows: list[dict[str, str]] = []
        for cells in values:
            if all(cell is None or cell == "" for cell in cells):
                continue
            padded = (*cells, *([None] * (len(columns) - len(cells))))
            rows.append(
                {column: _cell_text(cell) for column, cell in zip(columns, padded) if column}
            )
    finally:
        workbook.close()

    if not rows:
        raise WorkbookError(ErrorTemplate.workbook_empty(name))
    logger.debug("Read %d rows with columns %s from %s", len(rows), columns, name)
    return rows


def export_workbook(document_set: DocumentSet, target: WorkbookTarget) -> None:
    """Export a DocumentSet to an ``.xlsx`` workbook."""
    write_workbook(to_rows(document_set), table_columns(document_set), target)


def import_workbook(source: WorkbookTarget, document_set: DocumentSet) -> DocumentSet:
    """Import an ``.xlsx`` workbook into a DocumentSet.

    See ``from_rows()`` for the merge rules.
    """
    return from_rows(read_workbook(source), document_set)
