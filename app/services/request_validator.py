"""
Request validation for report submission.

This is the only gate in front of the stores: nothing is written for a
payload that fails here. Field rules live on ReportSubmission; this module
turns pydantic errors into the client-facing messages.
"""

import logging
from typing import Optional, Union

from pydantic import ValidationError

from app.core.exceptions import InvalidRequest
from app.models.report import ReportSubmission

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("incidentType", "description")

# Errors reported against the body as a whole rather than a field
BODY_ERROR_TYPES = {"json_invalid", "json_type", "model_type", "model_attributes_type"}


def validate_submission(raw_body: Optional[Union[bytes, str]]) -> ReportSubmission:
    """
    Parse and validate a raw request body.

    Args:
        raw_body: Request body as received (bytes or str), or None

    Returns:
        ReportSubmission: typed payload with optional fields normalized

    Raises:
        InvalidRequest: body absent, not a JSON object, or required fields missing/empty
    """
    if raw_body is None or not raw_body.strip():
        raise InvalidRequest("Request body is required")

    try:
        return ReportSubmission.model_validate_json(raw_body)
    except ValidationError as e:
        errors = e.errors()
    except RecursionError:
        logger.info("Rejected request body nested too deeply to parse")
        raise InvalidRequest("Request body must be a JSON object")

    if any(error["type"] in BODY_ERROR_TYPES or not error["loc"] for error in errors):
        logger.info(f"Rejected unparsable request body: {errors[0]['msg']}")
        raise InvalidRequest("Request body must be a JSON object")

    missing = [field for field in REQUIRED_FIELDS if any(error["loc"][0] == field for error in errors)]
    logger.info(f"Rejected submission, missing required fields: {missing}")
    raise InvalidRequest("Missing required fields", fields=missing)
