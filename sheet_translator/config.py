"""Runtime settings for the translator."""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

ENV_PREFIX = "SHEET_TRANSLATOR_"

DEFAULT_MAX_FILE_SIZE_MB = 10
DEFAULT_EXTENSIONS = ("xlsx", "xls", "csv")


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _positive(name: str, value: float) -> float:
    if value <= 0:
        raise ValueError(f"{ENV_PREFIX}{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """Limits and tuning knobs shared by the pipeline stages.

    Attributes:
        max_file_size_mb: Largest accepted upload in megabytes
        supported_extensions: Accepted file extensions, lower case, without dot
        max_concurrency: Outstanding translation calls per sheet (1 = sequential)
        cell_timeout: Seconds allowed per translation call, None for no limit
        max_retries: Retries for network-backed translators
        latency: Simulated delay of the dictionary translator, in seconds
        log_level: Default logging level name
    """

    max_file_size_mb: float = DEFAULT_MAX_FILE_SIZE_MB
    supported_extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    max_concurrency: int = 1
    cell_timeout: Optional[float] = 30.0
    max_retries: int = 3
    latency: float = 0.3
    log_level: str = "INFO"

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "Settings":
        """Build settings from environment variables (and a .env file if present).

        Args:
            env_file: Optional path to a .env file; defaults to python-dotenv's lookup

        Returns:
            Settings instance

        Raises:
            ValueError: If a variable holds an invalid value
        """
        load_dotenv(env_file)

        max_size = float(_env("MAX_FILE_SIZE_MB", str(DEFAULT_MAX_FILE_SIZE_MB)))
        concurrency = int(_env("MAX_CONCURRENCY", "1"))
        timeout_raw = _env("CELL_TIMEOUT", "30")
        timeout = None if timeout_raw.lower() in ("", "none", "0") else float(timeout_raw)
        retries = int(_env("MAX_RETRIES", "3"))
        latency = float(_env("LATENCY", "0.3"))

        if retries < 0:
            raise ValueError(f"{ENV_PREFIX}MAX_RETRIES must not be negative, got {retries}")
        if latency < 0:
            raise ValueError(f"{ENV_PREFIX}LATENCY must not be negative, got {latency}")

        return cls(
            max_file_size_mb=_positive("MAX_FILE_SIZE_MB", max_size),
            max_concurrency=int(_positive("MAX_CONCURRENCY", concurrency)),
            cell_timeout=None if timeout is None else _positive("CELL_TIMEOUT", timeout),
            max_retries=retries,
            latency=latency,
            log_level=_env("LOG_LEVEL", "INFO").upper(),
        )
