"""
Exception types for report submission.

InvalidRequest is a client error raised before any state is touched.
DecodeError is scoped to a single media item.
StoreFailure is raised by store adapters; the orchestrator re-raises it as
the subclass that names the step that failed.
"""

from typing import List, Optional


class InvalidRequest(Exception):
    """Inbound payload is missing, unparsable, or lacks required fields."""

    def __init__(self, message: str, fields: Optional[List[str]] = None):
        super().__init__(message)
        self.message = message
        self.fields = fields or []


class DecodeError(ValueError):
    """Inline media payload could not be decoded."""


class StoreFailure(Exception):
    """A write to one of the backing stores failed."""

    step = "store"

    def __init__(self, message: str, operation: Optional[str] = None, target: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.target = target

    @classmethod
    def from_error(cls, error: Exception) -> "StoreFailure":
        """Re-tag an adapter failure with the step it happened in."""
        if isinstance(error, StoreFailure):
            return cls(str(error), operation=error.operation, target=error.target)
        return cls(str(error))


class ReportWriteFailed(StoreFailure):
    step = "report_write"


class LocationWriteFailed(StoreFailure):
    step = "location_write"


class MediaPatchFailed(StoreFailure):
    step = "media_patch"
