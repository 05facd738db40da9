"""
Pydantic models for safety incident reports.
These models describe the validated submission, the records written to each
store, and the response envelopes.

Wire names are camelCase; attributes are snake_case with aliases.
"""

from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Any, Dict, List, Optional
from enum import Enum


def is_present(value: Any) -> bool:
    """
    Whether an optional field counts as supplied.
    null, false, "" and 0 are treated as absent; empty objects are present.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    return True


class ReportStatus(str, Enum):
    """
    Lifecycle status of a report.
    Submission only ever sets RECEIVED.
    """
    RECEIVED = "received"


class ReportSubmission(BaseModel):
    """
    Inbound payload for POST /reports.
    Only the camelCase wire names are accepted.
    """
    incident_type: StrictStr = Field(..., alias="incidentType", min_length=1, description="Kind of incident")
    description: StrictStr = Field(..., min_length=1, description="What the citizen observed")
    incident_location: Optional[Any] = Field(None, alias="incidentLocation", description="Where it happened")
    reporter_location: Optional[Any] = Field(None, alias="reporterLocation", description="Where the reporter was")
    media_urls: List[Any] = Field(default_factory=list, alias="mediaUrls", description="Inline base64 media payloads")

    class Config:
        json_schema_extra = {
            "example": {
                "incidentType": "noise",
                "description": "Loud party past midnight",
                "incidentLocation": {"lat": 51.5072, "lng": -0.1276},
                "reporterLocation": None,
                "mediaUrls": ["data:image/png;base64,iVBORw0KGgo="],
            }
        }

    @field_validator("incident_location", "reporter_location")
    @classmethod
    def absent_when_empty(cls, value):
        return value if is_present(value) else None

    @field_validator("media_urls", mode="before")
    @classmethod
    def ignore_non_list_media(cls, value):
        # Anything but a JSON array is treated as "no media"
        return value if isinstance(value, list) else []


class ReportKey(BaseModel):
    """Composite key of a report: partition id plus sort timestamp."""
    id: str
    timestamp: str

    class Config:
        frozen = True


class ReportRecord(BaseModel):
    """
    Report document as written to the reports collection.
    Contains no location data.
    """
    id: str = Field(..., description="Server-generated report id")
    timestamp: str = Field(..., description="ISO-8601 submission instant")
    incident_type: str = Field(..., alias="incidentType")
    description: str
    status: ReportStatus = Field(default=ReportStatus.RECEIVED)
    media_keys: Optional[List[str]] = Field(None, alias="mediaKeys", description="Set after media ingestion")

    class Config:
        populate_by_name = True

    @property
    def key(self) -> ReportKey:
        return ReportKey(id=self.id, timestamp=self.timestamp)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class LocationRecord(BaseModel):
    """
    Location document, stored apart from the report it belongs to.
    reporterLocation is kept as an explicit null when not supplied.
    """
    report_id: str = Field(..., alias="reportId")
    incident_location: Any = Field(..., alias="incidentLocation")
    reporter_location: Optional[Any] = Field(None, alias="reporterLocation")
    timestamp: str

    class Config:
        populate_by_name = True

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class MediaAsset(BaseModel):
    """One decoded media item ready for the blob store."""
    storage_key: str
    content: bytes
    content_type: str


class ReportSubmittedResponse(BaseModel):
    message: str = "Report submitted successfully"
    report_id: str = Field(..., alias="reportId")

    class Config:
        populate_by_name = True


class ErrorResponse(BaseModel):
    message: str
    error: Optional[str] = None
