"""
Report service - orchestrates a single report submission.

Flow:
1. Assign identity (report id + timestamp, captured once)
2. Write the report (MUST succeed, otherwise the submission fails)
3. Write the location record, only if an incident location was supplied
4. Decode and store every media item concurrently, tolerating per-item failures
5. Attach the keys of stored media to the report, only if at least one succeeded

DESIGN NOTE:
- Reports and locations go to different stores for privacy isolation
- There are no cross-store transactions; the order above is the only guarantee
- A failed location write fails the submission like a failed report write,
  even though the report is already stored
- A failed media patch is recorded on the result and logged, not raised;
  the stored media objects are left unreferenced
- No idempotency key: a retried request creates a second report
"""

import asyncio
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from app.core.exceptions import (
    DecodeError,
    LocationWriteFailed,
    MediaPatchFailed,
    ReportWriteFailed,
    StoreFailure,
)
from app.core.settings import settings
from app.models.report import (
    LocationRecord,
    MediaAsset,
    ReportRecord,
    ReportStatus,
    ReportSubmission,
)
from app.services.storage.base import BlobStore, LocationStore, ReportStore
from app.utils.media_codec import decode_inline_media

logger = logging.getLogger(__name__)


def generate_report_id() -> str:
    # uuid4 draws from os.urandom
    return str(uuid.uuid4())


def submission_timestamp() -> str:
    """Current UTC instant as ISO-8601 with millisecond precision, e.g. 2024-01-15T10:30:00.123Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class MediaOutcome:
    """Result of ingesting one media item: a storage key, or the reason it failed."""

    def __init__(self, index: int, storage_key: Optional[str] = None, error: Optional[str] = None):
        self.index = index
        self.storage_key = storage_key
        self.error = error

    @property
    def succeeded(self) -> bool:
        return self.storage_key is not None


class SubmissionResult:
    """
    Outcome of a submission whose report write succeeded.

    failures holds the tagged step failures that did not fail the request
    (MediaPatchFailed), and media_errors the reason each failed media item
    was dropped, so a partially-succeeded submission can be told apart from
    a clean one.
    """

    def __init__(self, report_id: str, timestamp: str):
        self.report_id = report_id
        self.timestamp = timestamp
        self.location_stored = False
        self.media_keys: List[str] = []
        self.media_errors: Dict[int, str] = {}
        self.media_patched = False
        self.failures: List[StoreFailure] = []

    @property
    def is_partial(self) -> bool:
        return bool(self.failures) or bool(self.media_errors)

    def summary(self) -> str:
        steps = ",".join(f.step for f in self.failures) or "none"
        return (
            f"report={self.report_id} location_stored={self.location_stored} "
            f"media_stored={len(self.media_keys)} media_failed={len(self.media_errors)} "
            f"media_patched={self.media_patched} failed_steps={steps}"
        )


class ReportSubmissionService:
    """Writes one submission across the report, location and blob stores."""

    def __init__(
        self,
        report_store: ReportStore,
        location_store: LocationStore,
        blob_store: BlobStore,
        default_content_type: Optional[str] = None,
    ):
        self.report_store = report_store
        self.location_store = location_store
        self.blob_store = blob_store
        self.default_content_type = default_content_type or settings.MEDIA_DEFAULT_CONTENT_TYPE

    async def submit(self, submission: ReportSubmission) -> SubmissionResult:
        """
        Persist a validated submission.

        Args:
            submission: Payload that already passed the request validator

        Returns:
            SubmissionResult for the created report

        Raises:
            ReportWriteFailed: the mandatory report write failed; nothing else was attempted
            LocationWriteFailed: the location write failed after the report was stored
        """
        report_id = generate_report_id()
        timestamp = submission_timestamp()

        report = ReportRecord(
            id=report_id,
            timestamp=timestamp,
            incident_type=submission.incident_type,
            description=submission.description,
            status=ReportStatus.RECEIVED,
        )

        # STEP 1: Report write (MUST succeed)
        try:
            await self._run_blocking(self.report_store.put, report)
        except Exception as e:
            logger.error(f"Failed to save report {report_id}: {e}", exc_info=True)
            raise ReportWriteFailed.from_error(e) from e
        logger.info(f"Report saved: {report_id}")

        result = SubmissionResult(report_id, timestamp)

        # STEP 2: Location write (only when a location was supplied)
        if submission.incident_location is not None:
            location = LocationRecord(
                report_id=report_id,
                incident_location=submission.incident_location,
                reporter_location=submission.reporter_location,
                timestamp=timestamp,
            )
            try:
                await self._run_blocking(self.location_store.put, location)
                result.location_stored = True
            except Exception as e:
                logger.error(f"Location write failed for report {report_id} (report already stored): {e}", exc_info=True)
                raise LocationWriteFailed.from_error(e) from e

        # STEP 3: Media fan-out / fan-in
        if submission.media_urls:
            outcomes = await self.ingest_media(report_id, submission.media_urls)
            result.media_keys = [o.storage_key for o in outcomes if o.succeeded]
            result.media_errors = {o.index: o.error for o in outcomes if not o.succeeded}

            # STEP 4: Attach stored media to the report
            if result.media_keys:
                try:
                    await self._run_blocking(
                        self.report_store.update,
                        report.key,
                        {"mediaKeys": list(result.media_keys)},
                    )
                    result.media_patched = True
                except Exception as e:
                    logger.warning(
                        f"Media patch failed for report {report_id}, "
                        f"{len(result.media_keys)} stored object(s) left unreferenced: {e}",
                        exc_info=True,
                    )
                    result.failures.append(MediaPatchFailed.from_error(e))

        if result.is_partial:
            logger.warning(f"Submission partially succeeded: {result.summary()}")
            for index, reason in result.media_errors.items():
                logger.warning(f"Report {result.report_id} dropped media item {index}: {reason}")
        else:
            logger.info(f"Submission complete: {result.summary()}")
        return result

    async def ingest_media(self, report_id: str, media_urls: List) -> List[MediaOutcome]:
        """
        Decode and store all media items in parallel.

        Waits for every item; a failed item never cancels its siblings.
        Outcomes are returned in request order.
        """
        tasks = [
            self._run_blocking(self._ingest_one, report_id, index, payload)
            for index, payload in enumerate(media_urls)
        ]
        return list(await asyncio.gather(*tasks))

    def _ingest_one(self, report_id: str, index: int, payload) -> MediaOutcome:
        try:
            decoded = decode_inline_media(payload)
        except DecodeError as e:
            return MediaOutcome(index, error=f"decode failed: {e}")

        asset = MediaAsset(
            storage_key=f"{report_id}/{uuid.uuid4()}",
            content=decoded.content,
            content_type=decoded.content_type or self.default_content_type,
        )
        try:
            self.blob_store.put(asset.storage_key, asset.content, asset.content_type)
        except Exception as e:
            return MediaOutcome(index, error=f"store failed: {e}")

        logger.debug(f"Stored media {asset.storage_key} ({len(asset.content)} bytes, {asset.content_type})")
        return MediaOutcome(index, storage_key=asset.storage_key)

    @staticmethod
    async def _run_blocking(func, *args):
        # Firebase SDK calls block; keep them off the event loop
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)
