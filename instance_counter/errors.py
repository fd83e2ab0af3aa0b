"""Errors surfaced to the UI as `error` messages."""


class PreconditionError(Exception):
    """A view or export was requested before any scan."""

    def __init__(self, message: str = "Please scan the page first"):
        super().__init__(message)
