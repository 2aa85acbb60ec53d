"""Serialization of a TabularDocument to an .xlsx workbook."""

import io
import logging
from datetime import time
from typing import Any, Set

import openpyxl
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from .models import Cell, CellKind, TabularDocument

logger = logging.getLogger(__name__)

MAX_COLUMN_WIDTH = 60
# Excel's own limit on worksheet titles
MAX_SHEET_TITLE = 31


def _excel_value(cell: Cell) -> Any:
    if cell.kind is CellKind.EMPTY:
        return None
    if cell.kind is CellKind.DATE and isinstance(cell.value, time):
        return cell.value.isoformat()
    if cell.kind is CellKind.TEXT:
        # Control characters are not allowed in worksheet XML
        return ILLEGAL_CHARACTERS_RE.sub("", cell.value)
    return cell.value


def _sheet_title(name: str, used: Set[str]) -> str:
    """Excel-safe title for ``name`` that no earlier sheet already took.

    Titles are cut to 31 characters and compared case-insensitively, as
    Excel does; a clash gets a ``_1``, ``_2``, ... suffix.
    """
    title = name[:MAX_SHEET_TITLE]
    suffix = 0
    while title.lower() in used:
        suffix += 1
        tag = f"_{suffix}"
        title = name[:MAX_SHEET_TITLE - len(tag)] + tag
    if title != name:
        logger.warning(f"Sheet '{name}' written as '{title}'")
    used.add(title.lower())
    return title


def write_workbook(document: TabularDocument) -> bytes:
    """Write one worksheet per sheet and return the workbook bytes.

    The first row holds the column keys (union of all row keys in
    first-encounter order); missing values are left blank.

    Args:
        document: Document to write

    Returns:
        Contents of an .xlsx file
    """
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)

    if not len(document):
        workbook.create_sheet("Sheet1")

    header_font = Font(bold=True)
    titles: Set[str] = set()
    for sheet in document:
        worksheet = workbook.create_sheet(_sheet_title(sheet.name, titles))
        columns = sheet.columns

        for column_index, key in enumerate(columns, start=1):
            header = worksheet.cell(
                row=1, column=column_index, value=ILLEGAL_CHARACTERS_RE.sub("", key)
            )
            header.data_type = "s"
            header.font = header_font

        for row_index, row in enumerate(sheet.rows, start=2):
            for column_index, key in enumerate(columns, start=1):
                cell = row.get(key)
                if cell is None:
                    continue
                written = worksheet.cell(row=row_index, column=column_index, value=_excel_value(cell))
                if cell.kind is CellKind.TEXT:
                    # Text such as "=1+1" stays text, never a formula
                    written.data_type = "s"

        for column_index, key in enumerate(columns, start=1):
            longest = max(
                [len(key)] + [len(row[key].display()) for row in sheet.rows if key in row]
            )
            worksheet.column_dimensions[get_column_letter(column_index)].width = min(
                longest + 2, MAX_COLUMN_WIDTH
            )

    buffer = io.BytesIO()
    workbook.save(buffer)
    logger.info(f"Wrote workbook with {len(document)} sheets ({buffer.tell()} bytes)")
    return buffer.getvalue()


def save_workbook(document: TabularDocument, path: str) -> None:
    """Write the document to ``path`` as .xlsx."""
    with open(path, "wb") as f:
        f.write(write_workbook(document))
    logger.info(f"Saved to {path}")
