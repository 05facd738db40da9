import json

import pytest

from app.core.exceptions import InvalidRequest
from app.models.report import is_present
from app.services.request_validator import validate_submission


def body(**fields) -> bytes:
    return json.dumps(fields).encode()


def test_minimal_valid_payload():
    submission = validate_submission(body(incidentType="noise", description="loud party"))

    assert submission.incident_type == "noise"
    assert submission.description == "loud party"
    assert submission.incident_location is None
    assert submission.reporter_location is None
    assert submission.media_urls == []


def test_accepts_str_body_and_keeps_optional_fields():
    raw = json.dumps({
        "incidentType": "theft",
        "description": "bike stolen",
        "incidentLocation": {"lat": 1, "lng": 2},
        "reporterLocation": {"lat": 3, "lng": 4},
        "mediaUrls": ["abc=", "def="],
        "somethingElse": True,
    })

    submission = validate_submission(raw)

    assert submission.incident_location == {"lat": 1, "lng": 2}
    assert submission.reporter_location == {"lat": 3, "lng": 4}
    assert submission.media_urls == ["abc=", "def="]


@pytest.mark.parametrize("raw", [None, b"", "", "   \n"])
def test_missing_body(raw):
    with pytest.raises(InvalidRequest) as excinfo:
        validate_submission(raw)

    assert excinfo.value.message == "Request body is required"


@pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", b'"text"', b"\xff\xfe"])
def test_body_must_be_json_object(raw):
    with pytest.raises(InvalidRequest) as excinfo:
        validate_submission(raw)

    assert excinfo.value.message == "Request body must be a JSON object"


@pytest.mark.parametrize(
    "fields, missing",
    [
        ({"description": "x"}, ["incidentType"]),
        ({"incidentType": "x"}, ["description"]),
        ({"incidentType": "", "description": "x"}, ["incidentType"]),
        ({"incidentType": "x", "description": ""}, ["description"]),
        ({"incidentType": 5, "description": None}, ["incidentType", "description"]),
        ({}, ["incidentType", "description"]),
    ],
)
def test_required_fields(fields, missing):
    with pytest.raises(InvalidRequest) as excinfo:
        validate_submission(body(**fields))

    assert excinfo.value.message == "Missing required fields"
    assert excinfo.value.fields == missing


def test_non_list_media_is_ignored():
    submission = validate_submission(body(incidentType="x", description="y", mediaUrls="abc="))

    assert submission.media_urls == []


@pytest.mark.parametrize("location", [None, False, "", 0])
def test_empty_location_values_count_as_absent(location):
    submission = validate_submission(body(incidentType="x", description="y", incidentLocation=location))

    assert submission.incident_location is None


@pytest.mark.parametrize("value, expected", [
    ({}, True),
    ([], True),
    ("Main St", True),
    (1.5, True),
    (True, True),
    (0.0, False),
    (None, False),
])
def test_is_present(value, expected):
    assert is_present(value) is expected


@pytest.mark.parametrize("nested", ["[" * 100000 + "]" * 100000, '{"a":' * 100000 + "1" + "}" * 100000])
def test_deeply_nested_body_is_rejected(nested):
    with pytest.raises(InvalidRequest) as excinfo:
        validate_submission(nested)

    assert excinfo.value.message == "Request body must be a JSON object"


def test_deeply_nested_location_is_rejected():
    raw = '{"incidentType": "noise", "description": "x", "incidentLocation": ' + "[" * 100000 + "]" * 100000 + "}"

    with pytest.raises(InvalidRequest) as excinfo:
        validate_submission(raw)

    assert excinfo.value.message == "Request body must be a JSON object"
