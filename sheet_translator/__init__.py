"""Sheet Translator - Translate every text cell of a spreadsheet and regroup the results by column."""

__version__ = "1.0.0"
__description__ = "Parses spreadsheets, translates text cells with per-cell fault isolation, and appends translated columns."

from .errors import (
    CellTranslationError,
    MergeError,
    ParseError,
    SheetTranslatorError,
    TranslationCancelled,
    ValidationError,
)
from .grouper import LanguageGrouper
from .merger import ResultMerger
from .models import Cell, CellKind, GroupEntry, Row, Sheet, TabularDocument
from .parser import TableParser
from .pipeline import CancellationToken, CellFailure, TranslationPipeline, TranslationReport
from .service import TranslationService
from .translators import CellTranslator, DictionaryTranslator, OpenAITranslator

__all__ = [
    "CancellationToken",
    "Cell",
    "CellFailure",
    "CellKind",
    "CellTranslationError",
    "CellTranslator",
    "DictionaryTranslator",
    "GroupEntry",
    "LanguageGrouper",
    "MergeError",
    "OpenAITranslator",
    "ParseError",
    "ResultMerger",
    "Row",
    "Sheet",
    "SheetTranslatorError",
    "TableParser",
    "TabularDocument",
    "TranslationCancelled",
    "TranslationPipeline",
    "TranslationReport",
    "TranslationService",
    "ValidationError",
]
