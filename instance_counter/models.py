"""Scan result types and their wire renderings.

Python attributes are snake_case; to_dict() produces the camelCase payloads
the UI side of the message channel expects.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ComponentUsageEntry:
    """Usage counts for one display name. count == hidden_count + visible_count."""
    name: str
    count: int
    hidden_count: int
    visible_count: int

    @property
    def is_dotted(self) -> bool:
        """Leading '.' marks an internal/private component by convention."""
        return self.name.startswith(".")

    def visible_only(self) -> "ComponentUsageEntry":
        return ComponentUsageEntry(
            name=self.name,
            count=self.visible_count,
            hidden_count=0,
            visible_count=self.visible_count,
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "count": self.count,
            "hiddenCount": self.hidden_count,
            "visibleCount": self.visible_count,
            "isDotted": self.is_dotted,
        }


@dataclass(frozen=True)
class ScanSnapshot:
    """Result of one scan. Replaced wholesale by the next scan, never edited."""
    entries: tuple[ComponentUsageEntry, ...]
    total_instances: int
    total_hidden: int
    page_name: str
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "instances": [e.to_dict() for e in self.entries],
            "totalInstances": self.total_instances,
            "totalHidden": self.total_hidden,
            "pageName": self.page_name,
            "timestamp": self.timestamp,
        }


@dataclass(frozen=True)
class ViewConfig:
    include_hidden: bool = False
    ignore_dotted: bool = True

    @classmethod
    def from_message(cls, message: dict) -> "ViewConfig":
        """Wire defaults: includeHidden is falsy unless set; only an explicit false keeps dotted names."""
        return cls(
            include_hidden=bool(message.get("includeHidden")),
            ignore_dotted=message.get("ignoreDotted") is not False,
        )


@dataclass(frozen=True)
class FilteredView:
    """A snapshot projected through a ViewConfig. Totals always match entries."""
    entries: tuple[ComponentUsageEntry, ...]
    total_instances: int
    total_hidden: int
    page_name: str
    timestamp: str
    config: ViewConfig = field(default_factory=ViewConfig)

    @property
    def include_hidden(self) -> bool:
        return self.config.include_hidden

    @property
    def ignore_dotted(self) -> bool:
        return self.config.ignore_dotted

    @property
    def unique_components(self) -> int:
        return len(self.entries)

    def sorted_entries(self) -> list[ComponentUsageEntry]:
        """Entries by count descending; ties keep their current order."""
        return sorted(self.entries, key=lambda e: e.count, reverse=True)

    def to_dict(self) -> dict:
        return {
            "instances": [e.to_dict() for e in self.entries],
            "totalInstances": self.total_instances,
            "totalHidden": self.total_hidden,
            "pageName": self.page_name,
            "timestamp": self.timestamp,
            "includeHidden": self.include_hidden,
            "ignoreDotted": self.ignore_dotted,
        }
