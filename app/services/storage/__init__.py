"""
Store adapters for report submission.

Reports, locations and media each live in their own backend. There are no
cross-store transactions; callers decide the write order.
"""

from app.services.storage.base import BlobStore, LocationStore, ReportStore
from app.services.storage.memory_provider import (
    InMemoryBlobStore,
    InMemoryLocationStore,
    InMemoryReportStore,
)
from app.services.storage.resolver import (
    get_blob_store,
    get_location_store,
    get_report_store,
    reset_stores,
)

__all__ = [
    "BlobStore",
    "LocationStore",
    "ReportStore",
    "InMemoryBlobStore",
    "InMemoryLocationStore",
    "InMemoryReportStore",
    "get_blob_store",
    "get_location_store",
    "get_report_store",
    "reset_stores",
]
