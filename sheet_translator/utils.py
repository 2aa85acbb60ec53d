"""Utility functions for spreadsheet translation."""

import logging
import os
from typing import Dict, List, Optional, Union

from .config import Settings
from .errors import ValidationError

logger = logging.getLogger(__name__)


def get_extension(filename: str) -> str:
    """Return the lower-cased text after the last dot of a filename."""
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


def is_valid_excel_file(filename: str, settings: Optional[Settings] = None) -> bool:
    """Check if a filename has a supported spreadsheet extension.

    Args:
        filename: Name of the uploaded file
        settings: Settings holding the accepted extensions

    Returns:
        True if the extension is accepted (case-insensitive)
    """
    if not isinstance(filename, str):
        return False
    settings = settings or Settings()
    return get_extension(os.path.basename(filename)) in settings.supported_extensions


def get_file_size_in_mb(size_bytes: int) -> float:
    """Convert a byte count to megabytes, rounded to two decimals."""
    return round(size_bytes / (1024 * 1024), 2)


def get_supported_formats(settings: Optional[Settings] = None) -> Dict[str, Union[List[str], float]]:
    """Describe the accepted uploads.

    Args:
        settings: Settings to describe

    Returns:
        Dict with ``extensions`` and ``max_size_mb``
    """
    settings = settings or Settings()
    return {
        "extensions": list(settings.supported_extensions),
        "max_size_mb": settings.max_file_size_mb,
    }


def validate_upload(filename: str, size_bytes: int, settings: Optional[Settings] = None) -> float:
    """Reject unsupported or oversize files before anything reads them.

    Args:
        filename: Name of the uploaded file
        size_bytes: Size of the upload in bytes
        settings: Settings holding the limits

    Returns:
        File size in megabytes

    Raises:
        ValidationError: If the extension or the size is not accepted
    """
    settings = settings or Settings()
    if not is_valid_excel_file(filename, settings):
        extensions = ", ".join(f".{ext}" for ext in settings.supported_extensions)
        raise ValidationError(f"Please upload a valid Excel file ({extensions})")

    size_mb = get_file_size_in_mb(size_bytes)
    if size_bytes > settings.max_file_size_bytes:
        raise ValidationError(f"File size exceeds the limit ({settings.max_file_size_mb:g}MB)")
    return size_mb


def build_output_filename(original_name: str, target_language: str) -> str:
    """Name of the downloadable result, e.g. ``report_translated_chinese.xlsx``.

    Args:
        original_name: Name of the uploaded file
        target_language: Target-language code

    Returns:
        Output filename with only the last extension replaced
    """
    base = os.path.basename(original_name)
    stem, dot, _ = base.rpartition(".")
    if not dot or not stem:
        stem = base
    return f"{stem}_translated_{target_language}.xlsx"


def setup_logging(log_level: str = "INFO", log_file: str = None) -> None:
    """Set up logging configuration.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
    """
    handlers = [logging.StreamHandler()]

    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
