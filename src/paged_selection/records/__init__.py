"""Record, page and provider types."""

from .models import FetchResult, Page, Record, display_value
from .provider import RecordProvider

__all__ = [
    "FetchResult",
    "Page",
    "Record",
    "RecordProvider",
    "display_value",
]
