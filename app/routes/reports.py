"""
Report endpoints - API route for citizen safety report submission.
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from app.core.exceptions import StoreFailure
from app.core.settings import settings
from app.models.report import ErrorResponse, ReportSubmission, ReportSubmittedResponse
from app.services.report_service import ReportSubmissionService
from app.services.request_validator import validate_submission
from app.services.storage import get_blob_store, get_location_store, get_report_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


async def parse_submission(request: Request) -> ReportSubmission:
    """Validate the raw body; raises InvalidRequest (400) before any store is touched."""
    return validate_submission(await request.body())


def get_submission_service() -> ReportSubmissionService:
    """
    Resolve the stores. Declared after parse_submission on the route, so it
    only runs for valid requests.
    """
    try:
        return ReportSubmissionService(
            report_store=get_report_store(),
            location_store=get_location_store(),
            blob_store=get_blob_store(),
        )
    except Exception as e:
        logger.error(f"Store initialization failed: {e}", exc_info=True)
        raise StoreFailure(str(e), operation="init") from e


def error_response(exc: Exception) -> JSONResponse:
    body = ErrorResponse(
        message="Error processing report",
        error=str(exc) if settings.EXPOSE_ERROR_DETAILS else None,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(exclude_none=True),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ReportSubmittedResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ReportSubmission.model_json_schema(by_alias=True)}},
        }
    },
)
async def submit_report(
    submission: ReportSubmission = Depends(parse_submission),
    service: ReportSubmissionService = Depends(get_submission_service),
):
    """
    Submit a new safety incident report.

    This endpoint:
    1. Validates the body (400 on failure, nothing stored)
    2. Stores the report, then the location (if supplied) in its own collection
    3. Stores inline media concurrently and links the stored keys to the report

    Returns the generated report id.
    """
    # Location values and media payloads are never logged
    logger.info(
        f"POST /reports - incident_type={submission.incident_type}, "
        f"has_location={submission.incident_location is not None}, "
        f"media_items={len(submission.media_urls)}"
    )

    try:
        result = await service.submit(submission)
    except Exception as e:
        step = getattr(e, "step", "unexpected")
        logger.error(f"POST /reports - Report submission failed at {step}: {e}", exc_info=True)
        return error_response(e)

    logger.info(f"Report submitted successfully: {result.report_id}")
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=ReportSubmittedResponse(report_id=result.report_id).model_dump(by_alias=True),
    )
