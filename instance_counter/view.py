"""Filter/view engine: projects a cached snapshot through a ViewConfig."""

from __future__ import annotations

from .models import FilteredView, ScanSnapshot, ViewConfig


def build_view(snapshot: ScanSnapshot | None, config: ViewConfig | None = None) -> FilteredView | None:
    """Derive a FilteredView without touching the snapshot.

    Dotted names are dropped before hidden instances are collapsed. Entries keep
    the snapshot's order. Returns None when nothing has been scanned yet.
    """
    if snapshot is None:
        return None
    config = config or ViewConfig()

    entries = list(snapshot.entries)

    if config.ignore_dotted:
        entries = [e for e in entries if not e.is_dotted]

    if not config.include_hidden:
        entries = [e.visible_only() for e in entries]
        entries = [e for e in entries if e.count > 0]

    return FilteredView(
        entries=tuple(entries),
        total_instances=sum(e.count for e in entries),
        total_hidden=sum(e.hidden_count for e in entries),
        page_name=snapshot.page_name,
        timestamp=snapshot.timestamp,
        config=config,
    )
