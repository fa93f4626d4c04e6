"""Spreadsheet export and import.

Submodules:
    codec    - DocumentSet <-> rows (pure)
    workbook - rows <-> .xlsx files (openpyxl)

Python 3.13+.
"""

from arbsync.tabular.codec import ColumnMatch, from_rows, match_columns, table_columns, to_rows
from arbsync.tabular.workbook import (
    export_workbook,
    import_workbook,
    read_workbook,
    write_workbook,
)

__all__ = [
    "ColumnMatch",
    "export_workbook",
    "from_rows",
    "import_workbook",
    "match_columns",
    "read_workbook",
    "table_columns",
    "to_rows",
    "write_workbook",
]
