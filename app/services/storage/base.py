from abc import ABC, abstractmethod
from typing import Any, Dict
import logging

from app.models.report import LocationRecord, ReportKey, ReportRecord

logger = logging.getLogger(__name__)


class ReportStore(ABC):
    """
    Store for report documents, keyed by (id, timestamp).

    Contract:
    - put() creates or overwrites the whole report.
    - update() sets the given fields on the report identified by key and
      MUST NOT require the report to already exist in any particular shape.
    - Failures are raised as StoreFailure.
    """

    backend = "abstract"

    @abstractmethod
    def put(self, record: ReportRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def update(self, key: ReportKey, fields: Dict[str, Any]) -> None:
        raise NotImplementedError


class LocationStore(ABC):
    """
    Store for location documents, keyed by reportId.
    Kept apart from ReportStore so location data can be access-controlled separately.
    """

    backend = "abstract"

    @abstractmethod
    def put(self, record: LocationRecord) -> None:
        raise NotImplementedError


class BlobStore(ABC):
    """
    Object store for media bytes.
    put() raises StoreFailure when the object could not be written.
    """

    backend = "abstract"

    @abstractmethod
    def put(self, key: str, content: bytes, content_type: str) -> None:
        raise NotImplementedError
