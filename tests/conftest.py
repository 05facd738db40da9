import base64
import os

# Settings are read at import time; keep the suite off real Firebase
os.environ.setdefault("USE_MOCK_DB", "true")

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import StoreFailure
from app.main import app
from app.routes.reports import get_submission_service
from app.services.report_service import ReportSubmissionService
from app.services.storage import (
    InMemoryBlobStore,
    InMemoryLocationStore,
    InMemoryReportStore,
)


class FlakyReportStore(InMemoryReportStore):
    def __init__(self, fail_put=False, fail_update=False):
        super().__init__()
        self.fail_put = fail_put
        self.fail_update = fail_update

    def put(self, record):
        if self.fail_put:
            raise StoreFailure("simulated reports outage", operation="put", target="reports")
        super().put(record)

    def update(self, key, fields):
        if self.fail_update:
            raise StoreFailure("simulated reports outage", operation="update", target="reports")
        super().update(key, fields)


class FlakyLocationStore(InMemoryLocationStore):
    def put(self, record):
        raise StoreFailure("simulated locations outage", operation="put", target="report_locations")


class SelectiveBlobStore(InMemoryBlobStore):
    """Fails any object whose content equals one of reject_contents."""

    def __init__(self, reject_contents=()):
        super().__init__()
        self.reject_contents = set(reject_contents)

    def put(self, key, content, content_type):
        if content in self.reject_contents:
            raise StoreFailure("simulated media outage", operation="put", target="media")
        super().put(key, content, content_type)


def encode_image(content: bytes, image_type: str = "png") -> str:
    return f"data:image/{image_type};base64," + base64.b64encode(content).decode()


@pytest.fixture
def report_store():
    return InMemoryReportStore()


@pytest.fixture
def location_store():
    return InMemoryLocationStore()


@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def service(report_store, location_store, blob_store):
    return ReportSubmissionService(report_store, location_store, blob_store)


@pytest.fixture
def make_client():
    """Build a TestClient whose submissions go to the given service."""
    def _make(submission_service):
        app.dependency_overrides[get_submission_service] = lambda: submission_service
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client, service):
    return make_client(service)
