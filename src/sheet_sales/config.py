"""Unified configuration for sheet_sales.

This module provides a single configuration class describing where the
published sales sheet lives and how it is fetched and refreshed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from sheet_sales.exceptions import ConfigError

DEFAULT_TIMEOUT = 60.0
DEFAULT_RETRIES = 3

# Periodic refresh interval (5 minutes)
DEFAULT_REFRESH_INTERVAL = 5 * 60


@dataclass
class SheetConfig:
    """Settings used to fetch and refresh the published sales sheet.

    Attributes:
        csv_url: Published-CSV URL of the spreadsheet.
        timeout: Default timeout in seconds for HTTP requests.
        retries: Number of retry attempts for transient HTTP failures.
        refresh_interval: Seconds between background refreshes.
        delimiter: Field delimiter of the exported text.

    """

    csv_url: str
    timeout: float = DEFAULT_TIMEOUT
    retries: int = DEFAULT_RETRIES
    refresh_interval: float = DEFAULT_REFRESH_INTERVAL
    delimiter: str = ","

    def __post_init__(self) -> None:
        if not self.csv_url:
            raise ConfigError("csv_url must not be empty.")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.retries < 0:
            raise ConfigError(f"retries must be >= 0, got {self.retries}")
        if self.refresh_interval <= 0:
            raise ConfigError(f"refresh_interval must be positive, got {self.refresh_interval}")
        if len(self.delimiter) != 1:
            raise ConfigError(f"delimiter must be a single character, got {self.delimiter!r}")

    @classmethod
    def from_env(cls, csv_url: str | None = None) -> SheetConfig:
        """Create a SheetConfig from environment variables.

        Reads SHEET_CSV_URL, SHEET_TIMEOUT, SHEET_RETRIES and
        SHEET_REFRESH_SECONDS. An explicit ``csv_url`` wins over the
        environment.

        Raises:
            ConfigError: If the URL is missing or a numeric value is invalid.

        Examples:
            >>> os.environ["SHEET_CSV_URL"] = "https://example.com/pub?output=csv"
            >>> SheetConfig.from_env().retries
            3

        """
        url = csv_url or os.environ.get("SHEET_CSV_URL", "")
        if not url:
            raise ConfigError("SHEET_CSV_URL environment variable must be set to fetch the sheet.")

        try:
            timeout = float(os.environ.get("SHEET_TIMEOUT", str(DEFAULT_TIMEOUT)))
            retries = int(os.environ.get("SHEET_RETRIES", str(DEFAULT_RETRIES)))
            interval = float(os.environ.get("SHEET_REFRESH_SECONDS", str(DEFAULT_REFRESH_INTERVAL)))
        except ValueError as e:
            raise ConfigError(f"Invalid numeric setting in environment: {e}") from e

        return cls(csv_url=url, timeout=timeout, retries=retries, refresh_interval=interval)
