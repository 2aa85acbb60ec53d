"""Regrouping of translated values by column key for copy and export."""

from typing import Dict, List

from .models import GroupEntry, TabularDocument

BLOCK_SEPARATOR = ",\n"


class LanguageGrouper:
    """Collects every value of a document under its column key.

    Row numbers are 1-based and restart with every sheet, so entries of a key
    are ordered sheet by sheet, then row by row.
    """

    def group(self, document: TabularDocument) -> Dict[str, List[GroupEntry]]:
        groups: Dict[str, List[GroupEntry]] = {}
        for sheet in document:
            for position, row in enumerate(sheet.rows, start=1):
                for key, cell in row.items():
                    groups.setdefault(key, []).append(GroupEntry(position, cell.display()))
        return groups

    @staticmethod
    def format_block(entries: List[GroupEntry]) -> str:
        """Join entries into one copyable text block."""
        return BLOCK_SEPARATOR.join(str(entry) for entry in entries)

    def export_blocks(self, document: TabularDocument) -> Dict[str, str]:
        """Return ``{key: text block}`` for every column key of the document."""
        return {key: self.format_block(entries) for key, entries in self.group(document).items()}
