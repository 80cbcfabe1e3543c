from datetime import date
from pathlib import Path

import httpx
import pytest
import reportlab
from fastapi.testclient import TestClient

from coverie.core.config import Settings, get_settings
from coverie.db.database import get_db
from coverie.main import app
from coverie.schemas.ai_schemas.validate_inputs_schemas import ValidateInputsOutput
from coverie.services.dependencies import get_input_validator


OUTPUT = {
    "validatedUniversityName": "Chandpur Science and Technology",
    "validatedDepartment": "CSE",
    "validatedSession": "Fall 2024",
    "validatedCourseCode": "CSE-101",
    "validatedTeacherName": "Dr. Alan Turing",
    "validatedDesignation": "Professor",
    "validatedStudentName": "Ada Lovelace",
    "validatedStudentId": "20240001",
    "validatedSubmissionDate": "2024-03-15",
    "validatedTopic": "Data Structures",
    "suggestions": [],
}


class StubValidator:
    def __init__(self, error=None):
        self.error = error

    async def validate(self, request):
        if self.error is not None:
            raise self.error
        return ValidateInputsOutput.model_validate(OUTPUT)


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_input_validator] = lambda: StubValidator()
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def payload(make_values):
    values = make_values()
    values["submissionDate"] = "2024-03-15"
    return values


def test_root(client):
    assert client.get("/").json() == {"message": "Welcome to Coverie!"}


def test_defaults(client):
    body = client.get("/api/v1/cover/defaults").json()

    assert body["department"] == "CSE"
    assert body["documentType"] == "assignment"
    assert body["submissionDate"] == date.today().isoformat()


def test_validate_reports_field_errors(client, payload):
    payload["courseCode"] = "C"

    r = client.post("/api/v1/cover/validate", json=payload)

    assert r.status_code == 200
    assert r.json()["valid"] is False
    assert r.json()["errors"] == {"courseCode": "Course code is required."}


def test_validate_returns_record(client, payload):
    body = client.post("/api/v1/cover/validate", json=payload).json()

    assert body["valid"] is True
    assert body["data"]["courseCode"] == "CSE-101"
    assert body["data"]["submissionDate"] == "2024-03-15"


def test_preview(client, payload):
    body = client.post("/api/v1/cover/preview", json=payload).json()

    assert body["title"] == 'Assignment on "Data Structures"'
    assert body["department_line"] == "Department of CSE"
    assert body["submission_date_line"] == "15th March, 2024"


def test_preview_of_partial_form(client):
    body = client.post("/api/v1/cover/preview", json={"documentType": "general note"}).json()

    assert body["title"] == "General note"
    assert body["teacher_name"] == "Teacher Name"


def test_pdf_export(client, payload):
    r = client.post("/api/v1/cover/pdf", json=payload)

    assert r.status_code == 200
    assert r.headers["content-type"] == "application/pdf"
    assert r.content.startswith(b"%PDF")


def test_pdf_export_uses_configured_font(client, payload):
    fonts_dir = Path(reportlab.__file__).resolve().parent / "fonts"
    app.dependency_overrides[get_settings] = lambda: Settings(cover_font_path=str(fonts_dir / "Vera.ttf"))

    r = client.post("/api/v1/cover/pdf", json=payload)

    assert r.status_code == 200
    assert b"FontFile2" in r.content


def test_ai_validate_success(client, payload):
    body = client.post("/api/v1/cover/ai-validate", json=payload).json()

    assert body["success"] is True
    assert body["suggestions"] == ["All inputs look good!"]
    assert body["correctedFields"]["validatedTopic"] == "Data Structures"


def test_ai_validate_failure(client, payload):
    app.dependency_overrides[get_input_validator] = lambda: StubValidator(error=httpx.ConnectError("network down"))

    r = client.post("/api/v1/cover/ai-validate", json=payload)

    assert r.status_code == 200
    assert r.json() == {"success": False, "message": "network down"}


def test_ai_validate_rejects_invalid_record(client, payload):
    payload["studentId"] = ""

    r = client.post("/api/v1/cover/ai-validate", json=payload)

    assert r.status_code == 422
    assert r.json()["detail"]["errors"] == {"studentId": "Your ID is required."}


def test_topics_round_trip(client):
    assert client.get("/api/v1/topics/").json() == []

    first = client.post("/api/v1/topics/", json={"topic": "Trees"}).json()
    again = client.post("/api/v1/topics/", json={"topic": "Trees"}).json()

    assert first == {"added": True, "topics": ["Trees"]}
    assert again == {"added": False, "topics": ["Trees"]}
