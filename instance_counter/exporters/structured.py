"""Structured (JSON-shaped) export: metadata, "count:name" summary, per-name details."""

from __future__ import annotations

from .. import PLUGIN_NAME, PLUGIN_VERSION
from ..models import FilteredView


def _summary_key(pair: str) -> int:
    return int(pair.split(":", 1)[0])


def build_summary(view: FilteredView) -> list[str]:
    """"count:name" strings, numerically by count descending ("15:A" before "3:B")."""
    pairs = [f"{e.count}:{e.name}" for e in view.entries]
    return sorted(pairs, key=_summary_key, reverse=True)


def build_details(view: FilteredView) -> dict:
    """name -> {total, hidden} when hidden instances are counted, else name -> count."""
    details = {}
    for e in view.entries:
        if view.include_hidden:
            details[e.name] = {"total": e.count, "hidden": e.hidden_count}
        else:
            details[e.name] = e.count
    return details


def export_metadata(view: FilteredView, export_date: str) -> dict:
    # totalHidden is left out entirely (not zeroed) when hidden instances aren't tracked
    metadata = {
        "plugin": PLUGIN_NAME,
        "version": PLUGIN_VERSION,
        "exportDate": export_date,
        "pageName": view.page_name,
        "totalInstances": view.total_instances,
    }
    if view.include_hidden:
        metadata["totalHidden"] = view.total_hidden
    metadata.update({
        "uniqueComponents": view.unique_components,
        "includeHidden": view.include_hidden,
        "ignoreDotted": view.ignore_dotted,
    })
    return metadata


def export_structured(view: FilteredView, export_date: str) -> dict:
    """Render a FilteredView as the JSON export package."""
    return {
        "metadata": export_metadata(view, export_date),
        "summary": build_summary(view),
        "details": build_details(view),
    }
