"""Shared pytest fixtures."""

import io

import openpyxl
import pytest

from sheet_translator.models import Row, Sheet, TabularDocument
from sheet_translator.translators import CellTranslator


def build_xlsx(sheets):
    """Create .xlsx bytes from ``{sheet name: [[cell, ...], ...]}``."""
    workbook = openpyxl.Workbook()
    workbook.remove(workbook.active)
    for name, rows in sheets.items():
        worksheet = workbook.create_sheet(name)
        for row in rows:
            worksheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_document(sheets):
    """Create a TabularDocument from ``{sheet name: [{column: value}, ...]}``."""
    return TabularDocument(tuple(
        Sheet(name, tuple(Row(row) for row in rows)) for name, rows in sheets.items()
    ))


class FlakyTranslator(CellTranslator):
    """Test double that fails for chosen texts and uppercases the rest."""

    name = "flaky"

    def __init__(self, failing=(), exception=RuntimeError):
        self.failing = set(failing)
        self.exception = exception
        self.calls = []

    async def translate(self, text, target_language):
        self.calls.append((text, target_language))
        if text in self.failing:
            raise self.exception(f"cannot translate {text}")
        return f"{text.upper()}[{target_language}]"


@pytest.fixture()
def make_xlsx():
    return build_xlsx


@pytest.fixture()
def make_document():
    return build_document


@pytest.fixture()
def sample_document():
    return build_document({
        "Greetings": [
            {"English": "Hello", "Count": 1},
            {"English": "world", "Count": 2, "Note": "Welcome file"},
        ],
        "Extra": [
            {"English": "download"},
        ],
    })
