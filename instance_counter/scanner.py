"""Scanner: walks a page's instances and groups them by display name."""

from __future__ import annotations

from .models import ComponentUsageEntry, ScanSnapshot
from .naming import display_name
from .page_parser import DocPage
from .utils import iso_timestamp, utc_now


def count_instances(page: DocPage) -> dict[str, dict[str, int]]:
    """Map display name -> {count, hidden, visible}, in first-encounter order.

    Visibility is the instance node's own flag, not the main component's.
    """
    counts: dict[str, dict[str, int]] = {}
    for instance in page.instances:
        name = display_name(instance.main_component)
        bucket = counts.setdefault(name, {"count": 0, "hidden": 0, "visible": 0})
        bucket["count"] += 1
        if instance.visible:
            bucket["visible"] += 1
        else:
            bucket["hidden"] += 1
    return counts


def scan(page: DocPage, *, timestamp: str | None = None) -> ScanSnapshot:
    """Build a ScanSnapshot for the page. Entries are sorted by count descending."""
    counts = count_instances(page)
    entries = [
        ComponentUsageEntry(
            name=name,
            count=c["count"],
            hidden_count=c["hidden"],
            visible_count=c["visible"],
        )
        for name, c in counts.items()
    ]
    entries.sort(key=lambda e: e.count, reverse=True)

    return ScanSnapshot(
        entries=tuple(entries),
        total_instances=sum(c["count"] for c in counts.values()),
        total_hidden=sum(c["hidden"] for c in counts.values()),
        page_name=page.name,
        timestamp=timestamp or iso_timestamp(utc_now()),
    )
