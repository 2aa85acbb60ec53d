"""End-to-end translation of an uploaded spreadsheet."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .config import Settings
from .errors import ParseError, TranslationCancelled, ValidationError
from .grouper import LanguageGrouper
from .languages import get_supported_languages
from .merger import ResultMerger
from .models import GroupEntry, TabularDocument
from .parser import TableParser
from .pipeline import CancellationToken, CellFailure, ProgressCallback, TranslationPipeline
from .translators import CellTranslator, DictionaryTranslator
from .utils import build_output_filename, get_supported_formats, validate_upload
from .writer import write_workbook

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileSelection:
    """An upload that passed validation."""

    filename: str
    size_mb: float

    @property
    def message(self) -> str:
        return f"Selected file: {self.filename} ({self.size_mb:.2f}MB)"


@dataclass
class TranslationJobResult:
    """Everything a caller needs after a successful run."""

    filename: str
    target_language: str
    original: TabularDocument
    translated: TabularDocument
    merged: TabularDocument
    groups: Dict[str, List[GroupEntry]]
    export_blocks: Dict[str, str]
    output_filename: str
    output_bytes: bytes
    failures: List[CellFailure] = field(default_factory=list)

    @property
    def failure_count(self) -> int:
        return len(self.failures)


def error_message(error: Exception) -> str:
    """Single human-readable message for an error reaching the UI boundary."""
    if isinstance(error, ValidationError):
        return str(error)
    if isinstance(error, ParseError):
        return f"Failed to read Excel file: {error}"
    if isinstance(error, TranslationCancelled):
        return "Translation cancelled"
    return f"Translation failed: {error}"


class TranslationService:
    """Validates, parses, translates, merges and exports one file per call.

    Holds no per-run state, so one instance can serve any number of runs.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        translator: Optional[CellTranslator] = None,
        parser: Optional[TableParser] = None,
        merger: Optional[ResultMerger] = None,
        grouper: Optional[LanguageGrouper] = None,
        show_progress: bool = False
    ):
        """Initialize the service.

        Args:
            settings: Limits and tuning; defaults to ``Settings()``
            translator: Cell translator; defaults to a DictionaryTranslator
            parser: Table parser
            merger: Result merger
            grouper: Language grouper
            show_progress: Display a tqdm progress bar while translating
        """
        self.settings = settings or Settings()
        self.translator = translator or DictionaryTranslator(latency=self.settings.latency)
        self.parser = parser or TableParser(self.settings)
        self.merger = merger or ResultMerger()
        self.grouper = grouper or LanguageGrouper()
        self.show_progress = show_progress

    @staticmethod
    def supported_languages() -> List[Dict[str, str]]:
        return get_supported_languages()

    def supported_formats(self):
        return get_supported_formats(self.settings)

    def select_file(self, filename: str, size_bytes: int) -> FileSelection:
        """Validate an upload before it is read.

        Raises:
            ValidationError: If the extension or the size is not accepted
        """
        size_mb = validate_upload(filename, size_bytes, self.settings)
        return FileSelection(filename=filename, size_mb=size_mb)

    async def translate_file(
        self,
        filename: str,
        data: bytes,
        target_language: str,
        cancel_token: Optional[CancellationToken] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> TranslationJobResult:
        """Run the whole pipeline on one uploaded file.

        Args:
            filename: Original filename
            data: File contents
            target_language: Target-language code
            cancel_token: Optional cancellation token
            progress_callback: Called with (done, total) after every cell

        Returns:
            TranslationJobResult; cell failures are reported, never raised

        Raises:
            ValidationError: If the upload is rejected
            ParseError: If the file cannot be read
            TranslationCancelled: If the token is cancelled
        """
        selection = self.select_file(filename, len(data))
        logger.info(f"Starting translation of {selection.filename} ({selection.size_mb:.2f}MB)")

        original = self.parser.parse(data, filename)

        pipeline = TranslationPipeline.from_settings(
            self.translator,
            self.settings,
            show_progress=self.show_progress,
            progress_callback=progress_callback
        )
        report = await pipeline.translate_document(original, target_language, cancel_token)

        merged = self.merger.merge(original, report.document, target_language)
        groups = self.grouper.group(report.document)
        export_blocks = {key: self.grouper.format_block(entries) for key, entries in groups.items()}

        output_filename = build_output_filename(filename, target_language)
        output_bytes = write_workbook(merged)
        logger.info(
            f"Prepared {output_filename} with {report.failure_count} untranslated cells"
        )

        return TranslationJobResult(
            filename=filename,
            target_language=target_language,
            original=original,
            translated=report.document,
            merged=merged,
            groups=groups,
            export_blocks=export_blocks,
            output_filename=output_filename,
            output_bytes=output_bytes,
            failures=list(report.failures)
        )

    def translate_file_sync(
        self,
        filename: str,
        data: bytes,
        target_language: str,
        cancel_token: Optional[CancellationToken] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> TranslationJobResult:
        """Synchronous wrapper for translate_file."""
        return asyncio.run(self.translate_file(
            filename, data, target_language, cancel_token, progress_callback
        ))
