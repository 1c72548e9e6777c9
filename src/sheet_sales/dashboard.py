"""In-memory sales snapshot with explicit background refresh.

The dashboard holds the most recent set of parsed orders. Loading replaces
the whole snapshot with one attribute assignment, so readers see either the
previous snapshot or the new one, never a mix. Reports are recomputed from
the current snapshot and filter bounds on every call.

Refresh lifecycle:
    >>> dashboard = SalesDashboard(SheetConfig.from_env())
    >>> dashboard.load()
    >>> handle = dashboard.start_auto_refresh()
    >>> ...
    >>> handle.stop()

Overlapping loads are not serialized: a slow fetch that finishes last
overwrites a newer snapshot.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from sheet_sales.etl.utils import format_duration, preset_range
from sheet_sales.exceptions import ConfigError, NoDataError, SheetSalesError
from sheet_sales.sales.api import SalesReport, build_report, fetch_orders
from sheet_sales.sales.metadata import (
    SOURCE_SHEET,
    SOURCE_SYNTHETIC,
    SnapshotMetadata,
    build_metadata,
)
from sheet_sales.sales.synthetic import generate_orders
from sheet_sales.types import Order

if TYPE_CHECKING:
    import requests

    from sheet_sales.config import SheetConfig

logger = logging.getLogger(__name__)

DEFAULT_PRESET = "this_month"


@dataclass(frozen=True)
class Snapshot:
    orders: tuple[Order, ...]
    metadata: SnapshotMetadata

    @property
    def is_synthetic(self) -> bool:
        return self.metadata.source == SOURCE_SYNTHETIC


class RefreshHandle:
    """Handle for a running periodic refresh.

    Calls ``refresh`` every ``interval`` seconds on a daemon thread until
    stop() is called. Stopping does not interrupt a fetch already in
    progress; it only prevents the next one.
    """

    def __init__(self, refresh: Callable[[], object], interval: float) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.interval = interval
        self._refresh = refresh
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="sheet-sales-refresh", daemon=True)

    def start(self) -> RefreshHandle:
        self._thread.start()
        return self

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            logger.info("Auto-refreshing sales data...")
            try:
                self._refresh()
            except SheetSalesError as e:
                # keep the previous snapshot
                logger.warning("Auto-refresh failed: %s", e)
            except Exception:
                logger.exception("Auto-refresh stopped by an unexpected error")
                raise

    def stop(self, timeout: float | None = None) -> None:
        """Stop the refresh loop and wait for the thread to finish."""
        self._stopped.set()
        if self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stopped.is_set()


class SalesDashboard:
    """Current sales snapshot plus the filter bounds applied to it.

    Args:
        config: Sheet configuration. May be None when only synthetic data
            is used.
        session: Optional requests session reused for every fetch.

    """

    def __init__(
        self,
        config: SheetConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config
        self.session = session
        self._snapshot: Snapshot | None = None
        self.start_date: date | None = None
        self.end_date: date | None = None
        self.active_filter = DEFAULT_PRESET
        self.apply_preset(DEFAULT_PRESET)

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    @property
    def orders(self) -> tuple[Order, ...]:
        snapshot = self._snapshot
        return snapshot.orders if snapshot else ()

    def load(self) -> Snapshot:
        """Fetch the sheet and replace the snapshot.

        Raises:
            ConfigError: If the dashboard has no sheet configuration.
            FetchError: If the sheet cannot be downloaded. The previous
                snapshot is kept.
            NoDataError: If the sheet holds no data rows. The previous
                snapshot is kept.

        """
        if self.config is None:
            raise ConfigError("No sheet configured; use load_synthetic() for demo data.")

        started = time.monotonic()
        orders = fetch_orders(self.config, session=self.session)
        if not orders:
            raise NoDataError("No data found in the sheet (the file may be empty).")

        snapshot = Snapshot(tuple(orders), build_metadata(SOURCE_SHEET, len(orders)))
        self._snapshot = snapshot
        logger.info(
            "Loaded %d orders in %s", len(orders), format_duration(time.monotonic() - started)
        )
        return snapshot

    def load_synthetic(self, days: int = 30, seed: int | None = None) -> Snapshot:
        """Replace the snapshot with generated demo orders."""
        orders = generate_orders(days=days, seed=seed)
        snapshot = Snapshot(tuple(orders), build_metadata(SOURCE_SYNTHETIC, len(orders)))
        self._snapshot = snapshot
        self.apply_preset(DEFAULT_PRESET)
        return snapshot

    def apply_preset(self, name: str, today: date | None = None) -> None:
        """Set the filter bounds from a named preset ("today", "all", ...)."""
        self.start_date, self.end_date = preset_range(name, today=today)
        self.active_filter = name

    def set_range(self, start_date: date | None, end_date: date | None) -> None:
        """Set custom filter bounds."""
        self.start_date = start_date
        self.end_date = end_date
        self.active_filter = "custom"

    def report(self) -> SalesReport:
        """Build the report for the current snapshot and filter bounds."""
        return build_report(self.orders, self.start_date, self.end_date)

    def start_auto_refresh(self, interval: float | None = None) -> RefreshHandle:
        """Start refreshing the snapshot in the background.

        Args:
            interval: Seconds between refreshes; defaults to the configured
                refresh interval.

        Returns:
            A running RefreshHandle; call stop() on shutdown.

        """
        if interval is None:
            if self.config is None:
                raise ValueError("interval is required when no sheet is configured")
            interval = self.config.refresh_interval
        logger.info("Starting auto-refresh every %s", format_duration(interval))
        return RefreshHandle(self.load, interval).start()
