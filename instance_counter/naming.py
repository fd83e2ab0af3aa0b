"""Display-name derivation for main components.

Naming conventions in the wild disagree on how a base name is separated from
variant properties ("Button/Size=Large", "Button - State=Hover", "Size=Large,
Button", ...). The rule is an ordered list of extractors; each returns a name
or None, and the first hit wins.
"""

from __future__ import annotations

from typing import Callable, Optional

from .page_parser import DocNode

Extractor = Callable[[DocNode], Optional[str]]


def component_set_name(component: DocNode) -> str | None:
    """Variants collapse to their component set's name."""
    parent = component.parent
    if parent is not None and parent.is_component_set:
        return parent.name
    return None


def plain_name(component: DocNode) -> str | None:
    """Names without property assignments are used verbatim."""
    if "=" not in component.name:
        return component.name
    return None


def clean_segment(component: DocNode) -> str | None:
    """First comma-separated segment that is not itself a property assignment."""
    for part in component.name.split(","):
        trimmed = part.strip()
        if "=" not in trimmed:
            return trimmed
    return None


def _before(delimiter: str, label: str) -> Extractor:
    def extract(component: DocNode) -> str | None:
        if delimiter in component.name:
            return component.name.split(delimiter, 1)[0].strip()
        return None
    extract.__name__ = f"before_{label}"
    return extract


before_slash = _before("/", "slash")
before_dash = _before(" - ", "dash")
before_pipe = _before("|", "pipe")
before_equals = _before("=", "equals")

EXTRACTORS: list[Extractor] = [
    component_set_name,
    plain_name,
    clean_segment,
    before_slash,
    before_dash,
    before_pipe,
    before_equals,
]


def display_name(component: DocNode, extractors: list[Extractor] | None = None) -> str:
    """Derive the grouping name for a main component."""
    for extract in extractors or EXTRACTORS:
        name = extract(component)
        if name is not None:
            return name
    return component.name
