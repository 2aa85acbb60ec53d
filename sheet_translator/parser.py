"""Parsing of uploaded spreadsheet bytes into a TabularDocument."""

import csv
import io
import logging
import re
from typing import Any, List, Optional, Sequence, Tuple

import pandas as pd

from .config import Settings
from .errors import ParseError
from .languages import placeholder_key
from .models import Cell, Row, Sheet, TabularDocument
from .utils import get_extension

logger = logging.getLogger(__name__)

XLSX_MAGIC = b"PK\x03\x04"
XLS_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"

CSV_SHEET_NAME = "Sheet1"

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INT_RE = re.compile(r"^[+-]?\d+$")


def detect_format(data: bytes, filename: Optional[str] = None) -> str:
    """Guess the container format of raw bytes.

    Args:
        data: File contents
        filename: Optional original filename; a ``.csv`` name forces CSV

    Returns:
        One of ``"xlsx"``, ``"xls"`` or ``"csv"``
    """
    if filename and get_extension(filename) == "csv":
        return "csv"
    if data.startswith(XLSX_MAGIC):
        return "xlsx"
    if data.startswith(XLS_MAGIC):
        return "xls"
    return "csv"


def header_keys(header: Sequence[Any]) -> List[str]:
    """Turn a raw header row into unique column keys.

    Blank header cells become ``__EMPTY``, ``__EMPTY_1``, ...; repeated names
    get ``_1``, ``_2`` suffixes so no two columns share a key.

    Args:
        header: Raw values of the first row

    Returns:
        One key per column, in column order
    """
    keys: List[str] = []
    used = set()
    blanks = 0
    for value in header:
        label = Cell.from_python(value).display().strip()
        if not label:
            label = placeholder_key(blanks)
            blanks += 1
        key = label
        suffix = 0
        while key in used:
            suffix += 1
            key = f"{label}_{suffix}"
        used.add(key)
        keys.append(key)
    return keys


def coerce_csv_value(value: Any) -> Any:
    """Type a CSV field the way a spreadsheet application would.

    Numbers and TRUE/FALSE are converted; empty fields become None and
    everything else stays text.
    """
    if not isinstance(value, str):
        return value
    stripped = value.strip()
    if stripped == "":
        return None
    if stripped.upper() in ("TRUE", "FALSE"):
        return stripped.upper() == "TRUE"
    if _INT_RE.match(stripped):
        return int(stripped)
    if _NUMBER_RE.match(stripped):
        return float(stripped)
    return value


class TableParser:
    """Reads xlsx, xls and csv bytes into a TabularDocument."""

    def __init__(self, settings: Optional[Settings] = None):
        """Initialize the parser.

        Args:
            settings: Settings providing the maximum accepted size
        """
        self.settings = settings or Settings()

    def parse(self, data: bytes, filename: Optional[str] = None) -> TabularDocument:
        """Parse raw file bytes.

        Sheet order, row order and column order follow the source file. The
        first row of each sheet is the header row.

        Args:
            data: File contents
            filename: Optional original filename used as a format hint

        Returns:
            Parsed document

        Raises:
            ParseError: If the bytes are too large, empty or not a readable table
        """
        if not isinstance(data, (bytes, bytearray)):
            raise ParseError(f"Expected bytes, got {type(data).__name__}")
        if len(data) > self.settings.max_file_size_bytes:
            raise ParseError(
                f"Input of {len(data)} bytes exceeds the {self.settings.max_file_size_mb:g}MB limit"
            )
        if not data:
            raise ParseError("File is empty")

        fmt = detect_format(bytes(data), filename)
        try:
            if fmt == "csv":
                frames = self._read_csv(bytes(data))
            else:
                frames = self._read_workbook(bytes(data), "openpyxl" if fmt == "xlsx" else "xlrd")
        except Exception as e:
            raise ParseError(f"Failed to read {fmt} file: {e}") from e

        document = TabularDocument(tuple(self._build_sheet(name, frame) for name, frame in frames))
        logger.info(
            f"Parsed {fmt} file with {len(document)} sheets: {', '.join(document.sheet_names)}"
        )
        return document

    def _read_workbook(self, data: bytes, engine: str) -> List[Tuple[str, pd.DataFrame]]:
        frames = []
        with pd.ExcelFile(io.BytesIO(data), engine=engine) as workbook:
            for name in workbook.sheet_names:
                # Only blank cells are missing, so "NA" or "null" stay text
                frame = workbook.parse(name, header=None, keep_default_na=False, na_values=[""])
                frames.append((str(name), frame))
        return frames

    def _read_csv(self, data: bytes) -> List[Tuple[str, pd.DataFrame]]:
        text = data.decode("utf-8-sig")
        # Ragged files are sized to their widest record; short rows are padded
        width = max((len(record) for record in csv.reader(io.StringIO(text))), default=0)
        if not width:
            return [(CSV_SHEET_NAME, pd.DataFrame())]
        frame = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=list(range(width)),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
        return [(CSV_SHEET_NAME, frame.apply(lambda column: column.map(coerce_csv_value)))]

    def _build_sheet(self, name: str, frame: pd.DataFrame) -> Sheet:
        if frame.empty:
            return Sheet(name, ())

        keys = header_keys(frame.iloc[0].tolist())
        rows = []
        for raw in frame.iloc[1:].itertuples(index=False, name=None):
            cells = []
            for key, value in zip(keys, raw):
                cell = Cell.from_python(value)
                if not cell.is_empty:
                    cells.append((key, cell))
            # Fully blank rows are dropped
            if cells:
                rows.append(Row(cells))
        logger.debug(f"Sheet '{name}': {len(keys)} columns, {len(rows)} rows")
        return Sheet(name, tuple(rows))
