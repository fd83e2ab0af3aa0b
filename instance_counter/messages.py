"""Request/response messages exchanged with the UI.

Inbound messages carry a `type` discriminator and become one of four request
kinds. Every request gets exactly one response dict; failures come back as
{"type": "error", "message": ...} instead of propagating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Union

from .models import ViewConfig
from .page_parser import DocPage
from .session import ScanSession
from .utils import log


@dataclass(frozen=True)
class ScanInstances:
    type = "scan-instances"


@dataclass(frozen=True)
class ApplyFilter:
    config: ViewConfig = field(default_factory=ViewConfig)
    type = "apply-filter"


@dataclass(frozen=True)
class ExportJson:
    config: ViewConfig = field(default_factory=ViewConfig)
    type = "export-json"


@dataclass(frozen=True)
class ExportCsv:
    config: ViewConfig = field(default_factory=ViewConfig)
    type = "export-csv"


Request = Union[ScanInstances, ApplyFilter, ExportJson, ExportCsv]

_CONFIGURED = {cls.type: cls for cls in (ApplyFilter, ExportJson, ExportCsv)}


def parse_request(message: dict) -> Request:
    """Turn a raw inbound message into a typed request. Unknown types raise ValueError."""
    if not isinstance(message, dict):
        raise ValueError("Message must be a JSON object")
    kind = message.get("type")
    if kind == ScanInstances.type:
        return ScanInstances()
    if kind in _CONFIGURED:
        return _CONFIGURED[kind](config=ViewConfig.from_message(message))
    raise ValueError(f"Unknown message type: {kind!r}")


def error_response(message: str) -> dict:
    return {"type": "error", "message": message}


def handle_request(
    session: ScanSession,
    request: Request,
    page_source: Callable[[], DocPage],
) -> dict:
    """Run one request against the session and build its response.

    page_source is only called for scans, so the page is read as it is now.
    """
    try:
        match request:
            case ScanInstances():
                view = session.scan(page_source())
                log(f"  Scanned '{view.page_name}': {session.snapshot.total_instances} instances")
                return {"type": "scan-results", "data": view.to_dict()}
            case ApplyFilter(config=config):
                return {"type": "scan-results", "data": session.view(config).to_dict()}
            case ExportJson(config=config):
                return {"type": "export-json", "data": session.export_structured(config)}
            case ExportCsv(config=config):
                return {"type": "export-csv", "data": session.export_delimited(config)}
            case _:
                raise ValueError(f"Unsupported request: {request!r}")
    except Exception as e:
        log(f"  {getattr(request, 'type', 'request')} failed: {e}")
        return error_response(str(e) or type(e).__name__)


def handle_message(
    session: ScanSession,
    message: dict,
    page_source: Callable[[], DocPage],
) -> dict:
    """Parse and handle a raw inbound message."""
    try:
        request = parse_request(message)
    except ValueError as e:
        log(f"  Rejected message: {e}")
        return error_response(str(e))
    return handle_request(session, request, page_source)
