"""Delimited-text (CSV) export: one row per component plus a key,value summary block."""

from __future__ import annotations

import csv
import io

from ..models import FilteredView


def _flag(value: bool) -> str:
    return "true" if value else "false"


def render_csv(view: FilteredView, export_date: str) -> str:
    """Render the CSV report text.

    Rows are re-sorted by count descending. Fields containing a comma, quote or
    newline are quoted with embedded quotes doubled.
    """
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    entries = view.sorted_entries()

    if view.include_hidden:
        writer.writerow(["Count", "Instance Name", "Hidden Count"])
        for e in entries:
            writer.writerow([e.count, e.name, e.hidden_count])
    else:
        writer.writerow(["Count", "Instance Name"])
        for e in entries:
            writer.writerow([e.count, e.name])

    writer.writerow([])
    writer.writerow(["Total Instances", view.total_instances])
    if view.include_hidden:
        writer.writerow(["Total Hidden", view.total_hidden])
    writer.writerow(["Unique Components", len(entries)])
    writer.writerow(["Page Name", view.page_name])
    writer.writerow(["Export Date", export_date])
    writer.writerow(["Include Hidden", _flag(view.include_hidden)])
    writer.writerow(["Ignore Dotted", _flag(view.ignore_dotted)])
    return buf.getvalue()


def export_delimited_text(view: FilteredView, export_date: str) -> dict:
    """Render a FilteredView as the CSV export package (text plus metadata)."""
    metadata = {"totalInstances": view.total_instances}
    if view.include_hidden:
        metadata["totalHidden"] = view.total_hidden
    metadata.update({
        "uniqueComponents": view.unique_components,
        "pageName": view.page_name,
        "includeHidden": view.include_hidden,
        "ignoreDotted": view.ignore_dotted,
    })
    return {
        "csv": render_csv(view, export_date),
        "metadata": metadata,
    }
