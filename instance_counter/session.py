"""Scan session: the one place the current snapshot lives.

A session starts empty, scan() replaces its snapshot wholesale, and every
other operation only reads it. Nothing is persisted between sessions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from .errors import PreconditionError
from .exporters import export_delimited_text, export_structured
from .models import FilteredView, ScanSnapshot, ViewConfig
from .page_parser import DocPage
from .scanner import scan
from .utils import iso_timestamp, utc_now
from .view import build_view


class ScanSession:
    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self.snapshot: ScanSnapshot | None = None

    @property
    def has_scan(self) -> bool:
        return self.snapshot is not None

    @property
    def page_name(self) -> str:
        return self.snapshot.page_name if self.snapshot else ""

    def _now(self) -> str:
        return iso_timestamp(self.clock())

    def scan(self, page: DocPage, config: ViewConfig | None = None) -> FilteredView:
        """Scan the page, cache the snapshot and return its default view.

        If scanning raises, the previous snapshot is kept.
        """
        self.snapshot = scan(page, timestamp=self._now())
        return self.view(config or ViewConfig())

    def view(self, config: ViewConfig) -> FilteredView:
        if self.snapshot is None:
            raise PreconditionError()
        return build_view(self.snapshot, config)

    def export_structured(self, config: ViewConfig) -> dict:
        return export_structured(self.view(config), self._now())

    def export_delimited(self, config: ViewConfig) -> dict:
        return export_delimited_text(self.view(config), self._now())
