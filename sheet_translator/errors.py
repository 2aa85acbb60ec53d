"""Exception hierarchy for the translation pipeline."""


class SheetTranslatorError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(SheetTranslatorError):
    """Raised when an uploaded file is rejected before parsing (extension, size)."""


class ParseError(SheetTranslatorError):
    """Raised when bytes cannot be read as a tabular document."""


class CellTranslationError(SheetTranslatorError):
    """Raised by a translator when a single text cannot be translated.

    The pipeline recovers from this locally and keeps the original value.
    """


class MergeError(SheetTranslatorError):
    """Raised when original and translated documents cannot be combined.

    The merge rules cover every row/sheet count mismatch, so seeing this
    indicates a programming error rather than bad input.
    """


class TranslationCancelled(SheetTranslatorError):
    """Raised when a run is cancelled through its CancellationToken."""
