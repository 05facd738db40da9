"""
In-memory stores.

Used when USE_MOCK_DB is set (local development without Firebase
credentials) and by the test suite. Process-local, nothing is persisted.
"""

import copy
import threading
from typing import Any, Dict, List, Optional, Tuple

from app.models.report import LocationRecord, ReportKey, ReportRecord
from .base import BlobStore, LocationStore, ReportStore


class InMemoryReportStore(ReportStore):
    backend = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self.items: Dict[Tuple[str, str], Dict[str, Any]] = {}

    def put(self, record: ReportRecord) -> None:
        with self._lock:
            self.items[(record.id, record.timestamp)] = record.to_document()

    def update(self, key: ReportKey, fields: Dict[str, Any]) -> None:
        with self._lock:
            item = self.items.setdefault((key.id, key.timestamp), {"id": key.id, "timestamp": key.timestamp})
            item.update(copy.deepcopy(fields))

    def get(self, report_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            for (item_id, _), item in self.items.items():
                if item_id == report_id:
                    return copy.deepcopy(item)
        return None


class InMemoryLocationStore(LocationStore):
    backend = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self.items: Dict[str, Dict[str, Any]] = {}

    def put(self, record: LocationRecord) -> None:
        with self._lock:
            self.items[record.report_id] = record.to_document()

    def get(self, report_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            item = self.items.get(report_id)
            return copy.deepcopy(item) if item is not None else None


class InMemoryBlobStore(BlobStore):
    backend = "memory"

    def __init__(self):
        self._lock = threading.Lock()
        self.objects: Dict[str, Tuple[bytes, str]] = {}

    def put(self, key: str, content: bytes, content_type: str) -> None:
        with self._lock:
            self.objects[key] = (content, content_type)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self.objects)
