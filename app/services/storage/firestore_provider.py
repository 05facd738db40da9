import logging
from typing import Any, Dict, Optional

from firebase_admin import firestore

from app.config.firebase import get_db
from app.core.exceptions import StoreFailure
from app.core.settings import settings
from app.models.report import LocationRecord, ReportKey, ReportRecord
from .base import LocationStore, ReportStore

logger = logging.getLogger(__name__)


class FirestoreReportStore(ReportStore):
    """
    Reports collection in Firestore.

    - Document id is the report id; the timestamp half of the key is stored as a field.
    - update() uses set(merge=True) so it behaves as an upsert, like a
      key-addressed update on a wide-column table.
    """

    backend = "firestore"

    def __init__(self, db: Optional[firestore.Client] = None, collection: Optional[str] = None):
        self.db = db or get_db()
        self.collection = collection or settings.REPORTS_COLLECTION

    def put(self, record: ReportRecord) -> None:
        try:
            self.db.collection(self.collection).document(record.id).set(record.to_document())
        except Exception as e:
            logger.error(f"Firestore put failed for report {record.id}: {e}", exc_info=True)
            raise StoreFailure(str(e), operation="put", target=self.collection) from e

    def update(self, key: ReportKey, fields: Dict[str, Any]) -> None:
        document = dict(fields)
        document["id"] = key.id
        document["timestamp"] = key.timestamp
        try:
            self.db.collection(self.collection).document(key.id).set(document, merge=True)
        except Exception as e:
            logger.error(f"Firestore update failed for report {key.id}: {e}", exc_info=True)
            raise StoreFailure(str(e), operation="update", target=self.collection) from e


class FirestoreLocationStore(LocationStore):
    """Location collection in Firestore, document id = reportId."""

    backend = "firestore"

    def __init__(self, db: Optional[firestore.Client] = None, collection: Optional[str] = None):
        self.db = db or get_db()
        self.collection = collection or settings.LOCATIONS_COLLECTION

    def put(self, record: LocationRecord) -> None:
        try:
            self.db.collection(self.collection).document(record.report_id).set(record.to_document())
        except Exception as e:
            logger.error(f"Firestore put failed for location of report {record.report_id}: {e}", exc_info=True)
            raise StoreFailure(str(e), operation="put", target=self.collection) from e
