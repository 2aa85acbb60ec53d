"""Combination of original and translated documents."""

import logging

from .errors import MergeError
from .models import Row, Sheet, TabularDocument

logger = logging.getLogger(__name__)


def translated_key(key: str, target_language: str) -> str:
    """Column name holding the translation of ``key``."""
    return f"{key}_{target_language}"


class ResultMerger:
    """Appends translated columns next to the original ones.

    Rows are paired by position. A sheet missing from the translated document
    is carried over unchanged, a row missing from a translated sheet adds no
    columns, and translated rows beyond the original row count are ignored.
    """

    def merge(
        self,
        original: TabularDocument,
        translated: TabularDocument,
        target_language: str
    ) -> TabularDocument:
        """Merge ``translated`` into ``original``.

        Args:
            original: Parsed source document
            translated: Output of the translation pipeline
            target_language: Target-language code used for the column suffix

        Returns:
            New document with one sheet per original sheet
        """
        if not target_language:
            raise MergeError("a target-language code is required to name translated columns")

        sheets = []
        for sheet in original:
            counterpart = translated.sheet(sheet.name)
            if counterpart is None:
                logger.info(f"Sheet '{sheet.name}' has no translation, carried over unchanged")
                sheets.append(sheet)
                continue
            if len(counterpart) != len(sheet):
                logger.warning(
                    f"Sheet '{sheet.name}': {len(sheet)} original rows vs "
                    f"{len(counterpart)} translated rows, pairing by position"
                )
            sheets.append(self._merge_sheet(sheet, counterpart, target_language))
        return TabularDocument(tuple(sheets))

    def _merge_sheet(self, sheet: Sheet, counterpart: Sheet, target_language: str) -> Sheet:
        rows = []
        for position, row in enumerate(sheet.rows):
            other = counterpart.rows[position] if position < len(counterpart.rows) else Row()
            rows.append(self._merge_row(row, other, target_language))
        return Sheet(sheet.name, tuple(rows))

    def _merge_row(self, row: Row, other: Row, target_language: str) -> Row:
        additions = {}
        for key in row:
            cell = other.get(key)
            if cell is None or cell.is_empty:
                continue
            new_key = translated_key(key, target_language)
            # Never overwrite a column the original already has
            if new_key in row or new_key in additions:
                continue
            additions[new_key] = cell
        return row.with_values(additions) if additions else row
