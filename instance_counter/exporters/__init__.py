"""Export formats for a filtered view."""

from .structured import export_structured
from .delimited import export_delimited_text
