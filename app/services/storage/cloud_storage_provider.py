import logging

from app.config.firebase import get_bucket
from app.core.exceptions import StoreFailure
from .base import BlobStore

logger = logging.getLogger(__name__)


class CloudStorageBlobStore(BlobStore):
    """
    Media objects in the Firebase Cloud Storage bucket.
    Objects are encrypted at rest by the platform; nothing to configure per upload.
    """

    backend = "cloud_storage"

    def __init__(self, bucket=None):
        self.bucket = bucket or get_bucket()

    def put(self, key: str, content: bytes, content_type: str) -> None:
        try:
            blob = self.bucket.blob(key)
            blob.upload_from_string(content, content_type=content_type)
        except Exception as e:
            logger.error(f"Cloud Storage upload failed for {key}: {e}", exc_info=True)
            raise StoreFailure(str(e), operation="put", target=self.bucket.name) from e
