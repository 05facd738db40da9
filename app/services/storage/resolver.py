import logging
from typing import Optional

from app.core.settings import settings
from .base import BlobStore, LocationStore, ReportStore
from .memory_provider import InMemoryBlobStore, InMemoryLocationStore, InMemoryReportStore

logger = logging.getLogger(__name__)

_report_store: Optional[ReportStore] = None
_location_store: Optional[LocationStore] = None
_blob_store: Optional[BlobStore] = None


def get_report_store() -> ReportStore:
    """
    Resolve the report store based on settings.

    Rules:
    - USE_MOCK_DB=true: in-memory store.
    - Otherwise: Firestore. Initialization errors propagate.
    """
    global _report_store
    if _report_store is not None:
        return _report_store

    if settings.USE_MOCK_DB:
        _report_store = InMemoryReportStore()
    else:
        from .firestore_provider import FirestoreReportStore
        _report_store = FirestoreReportStore()

    logger.info(f"Report store initialized: {_report_store.backend}")
    return _report_store


def get_location_store() -> LocationStore:
    global _location_store
    if _location_store is not None:
        return _location_store

    if settings.USE_MOCK_DB:
        _location_store = InMemoryLocationStore()
    else:
        from .firestore_provider import FirestoreLocationStore
        _location_store = FirestoreLocationStore()

    logger.info(f"Location store initialized: {_location_store.backend}")
    return _location_store


def get_blob_store() -> BlobStore:
    global _blob_store
    if _blob_store is not None:
        return _blob_store

    if settings.USE_MOCK_DB:
        _blob_store = InMemoryBlobStore()
    else:
        from .cloud_storage_provider import CloudStorageBlobStore
        _blob_store = CloudStorageBlobStore()

    logger.info(f"Blob store initialized: {_blob_store.backend}")
    return _blob_store


def reset_stores() -> None:
    """Drop cached store instances (used when settings change, e.g. in tests)."""
    global _report_store, _location_store, _blob_store
    _report_store = None
    _location_store = None
    _blob_store = None
