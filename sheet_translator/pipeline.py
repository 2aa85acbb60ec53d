"""Translation of every text cell of a TabularDocument."""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from tqdm import tqdm

from .config import Settings
from .errors import CellTranslationError, TranslationCancelled
from .models import Cell, Sheet, TabularDocument
from .translators import CellTranslator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


class CancellationToken:
    """Cooperative cancellation flag shared between a caller and a running pipeline."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise TranslationCancelled("Translation was cancelled")


@dataclass(frozen=True)
class CellFailure:
    """A cell whose translation failed and kept its original value.

    Attributes:
        sheet: Sheet name
        row: Row position within the sheet, 1-based
        column: Column key
        original: Text that was sent to the translator
        message: Error description
    """

    sheet: str
    row: int
    column: str
    original: str
    message: str


@dataclass
class TranslationReport:
    """Outcome of a pipeline run."""

    document: TabularDocument
    target_language: str
    failures: List[CellFailure] = field(default_factory=list)
    translated_cells: int = 0
    skipped_cells: int = 0
    elapsed_seconds: float = 0.0

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    def summary(self) -> str:
        return (
            f"translated={self.translated_cells} failed={self.failure_count} "
            f"skipped={self.skipped_cells} target={self.target_language} "
            f"elapsed_sec={self.elapsed_seconds:.2f}"
        )


class TranslationPipeline:
    """Runs a CellTranslator over every translatable cell of a document.

    A failing cell never fails the run: the original value is kept and the
    failure is recorded in the report.
    """

    def __init__(
        self,
        translator: CellTranslator,
        max_concurrency: int = 1,
        cell_timeout: Optional[float] = None,
        show_progress: bool = False,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """Initialize the pipeline.

        Args:
            translator: Translator used for each cell
            max_concurrency: Maximum outstanding translation calls per sheet
            cell_timeout: Seconds allowed per cell, None for no limit
            show_progress: Display a tqdm progress bar
            progress_callback: Called with (done, total) after every cell
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")
        self.translator = translator
        self.max_concurrency = max_concurrency
        self.cell_timeout = cell_timeout
        self.show_progress = show_progress
        self.progress_callback = progress_callback

    @classmethod
    def from_settings(cls, translator: CellTranslator, settings: Settings, **kwargs) -> "TranslationPipeline":
        return cls(
            translator,
            max_concurrency=settings.max_concurrency,
            cell_timeout=settings.cell_timeout,
            **kwargs
        )

    async def run(
        self,
        document: TabularDocument,
        target_language: str,
        cancel_token: Optional[CancellationToken] = None
    ) -> TabularDocument:
        """Translate a document and return only the translated document."""
        report = await self.translate_document(document, target_language, cancel_token)
        return report.document

    def run_sync(
        self,
        document: TabularDocument,
        target_language: str,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationReport:
        """Synchronous wrapper for translate_document."""
        return asyncio.run(self.translate_document(document, target_language, cancel_token))

    async def translate_document(
        self,
        document: TabularDocument,
        target_language: str,
        cancel_token: Optional[CancellationToken] = None
    ) -> TranslationReport:
        """Translate every non-blank text cell of a document.

        Args:
            document: Parsed source document
            target_language: Target-language code
            cancel_token: Checked before every cell translation

        Returns:
            TranslationReport with the translated document and per-cell failures

        Raises:
            TranslationCancelled: If the token is cancelled during the run
        """
        start_time = time.time()
        token = cancel_token or CancellationToken()
        total = document.translatable_cell_count()
        report = TranslationReport(document=document, target_language=target_language)
        report.skipped_cells = document.cell_count() - total

        logger.info(
            f"Translating {total} cells across {len(document)} sheets into '{target_language}' "
            f"with {self.translator.name} translator"
        )

        progress = tqdm(total=total, desc="Translating cells", disable=not self.show_progress)
        done = [0]

        def advance():
            done[0] += 1
            progress.update(1)
            if self.progress_callback:
                self.progress_callback(done[0], total)

        try:
            sheets = []
            for sheet in document:
                token.raise_if_cancelled()
                sheets.append(
                    await self._translate_sheet(sheet, target_language, token, report, advance)
                )
        finally:
            progress.close()

        report.document = TabularDocument(tuple(sheets))
        report.elapsed_seconds = time.time() - start_time

        if report.failures:
            logger.warning(
                f"{report.failure_count} of {total} cells kept their original value after failures"
            )
        logger.info(f"Translation completed: {report.summary()}")
        return report

    async def _translate_sheet(
        self,
        sheet: Sheet,
        target_language: str,
        token: CancellationToken,
        report: TranslationReport,
        advance: Callable[[], None]
    ) -> Sheet:
        jobs: List[Tuple[int, str, Cell]] = [
            (position, key, cell)
            for position, row in enumerate(sheet.rows)
            for key, cell in row.items()
            if cell.is_translatable
        ]
        # Pre-sized so output order never depends on completion order
        results: List[Optional[Tuple[Cell, Optional[CellFailure]]]] = [None] * len(jobs)
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def worker(index: int, position: int, key: str, cell: Cell) -> None:
            async with semaphore:
                token.raise_if_cancelled()
                results[index] = await self._translate_cell(
                    sheet.name, position + 1, key, cell, target_language
                )
                advance()

        tasks = [
            asyncio.ensure_future(worker(index, *job)) for index, job in enumerate(jobs)
        ]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        updates = [dict() for _ in sheet.rows]
        for (position, key, _), (translated, failure) in zip(jobs, results):
            if failure is not None:
                report.failures.append(failure)
                continue
            updates[position][key] = translated
            report.translated_cells += 1

        rows = tuple(
            row.with_values(changes) if changes else row
            for row, changes in zip(sheet.rows, updates)
        )
        logger.debug(f"Sheet '{sheet.name}': {len(jobs)} cells sent to translator")
        return Sheet(sheet.name, rows)

    async def _translate_cell(
        self,
        sheet_name: str,
        row_number: int,
        key: str,
        cell: Cell,
        target_language: str
    ) -> Tuple[Cell, Optional[CellFailure]]:
        try:
            call = self.translator.translate(cell.value, target_language)
            if self.cell_timeout:
                translated = await asyncio.wait_for(call, timeout=self.cell_timeout)
            else:
                translated = await call
            if not isinstance(translated, str):
                raise CellTranslationError(
                    f"translator returned {type(translated).__name__} instead of text"
                )
            return Cell.text(translated), None
        except asyncio.TimeoutError:
            message = f"timed out after {self.cell_timeout}s"
        except Exception as e:
            message = str(e) or type(e).__name__

        logger.warning(f"Failed to translate cell {sheet_name}!{key} (row {row_number}): {message}")
        return cell, CellFailure(
            sheet=sheet_name,
            row=row_number,
            column=key,
            original=cell.value,
            message=message
        )
