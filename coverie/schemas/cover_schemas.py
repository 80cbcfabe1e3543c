from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)


class Department(str, Enum):
    CSE = "CSE"
    ICT = "ICT"
    BBA = "BBA"


class DocumentType(str, Enum):
    assignment = "assignment"
    lab_report = "lab report"
    general_note = "general note"


# documentType -> requiresTopic
TOPIC_RULES: Dict[DocumentType, bool] = {
    DocumentType.assignment: True,
    DocumentType.lab_report: True,
    DocumentType.general_note: False,
}

MIN_SUBMISSION_DATE = date(1900, 1, 1)

# field -> (min length, message)
TEXT_FIELD_RULES: Dict[str, tuple[int, str]] = {
    "session": (3, "Session is required."),
    "course_code": (3, "Course code is required."),
    "teacher_name": (3, "Teacher's name is required."),
    "designation": (3, "Designation is required."),
    "student_name": (3, "Your name is required."),
    "student_id": (3, "Your ID is required."),
}

REQUIRED_MESSAGES: Dict[str, str] = {
    "department": "Department is required.",
    **{name: message for name, (_, message) in TEXT_FIELD_RULES.items()},
    "submission_date": "Submission date is required.",
    "document_type": "Document type is required.",
}

TOPIC_REQUIRED_MESSAGE = "Topic is required for this document type."


def requires_topic(document_type: Any) -> bool:
    try:
        return TOPIC_RULES[DocumentType(document_type)]
    except ValueError:
        return False


def _coerce_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        # accept full ISO datetimes too; only the calendar day matters
        return date.fromisoformat(value.strip()[:10])
    raise ValueError("Submission date must be a valid date.")


class CoverPageData(BaseModel):
    """A fully validated cover page record.

    Python attribute names are snake_case; the camelCase names used by the
    form and the generative-text service are accepted and emitted as aliases.
    """

    model_config = ConfigDict(populate_by_name=True)

    department: Department
    session: str
    course_code: str = Field(..., alias="courseCode")
    teacher_name: str = Field(..., alias="teacherName")
    designation: str
    student_name: str = Field(..., alias="studentName")
    student_id: str = Field(..., alias="studentId")
    submission_date: date = Field(..., alias="submissionDate")
    # declared before topic so the topic rule can read it
    document_type: DocumentType = Field(..., alias="documentType")
    topic: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("department", mode="before")
    @classmethod
    def validate_department(cls, value):
        if isinstance(value, Enum):
            value = value.value
        text = str(value or "").strip().upper()
        if not text:
            raise ValueError(REQUIRED_MESSAGES["department"])
        allowed = [d.value for d in Department]
        if text not in allowed:
            raise ValueError(f"Department must be one of {', '.join(allowed)}.")
        return text

    @field_validator(*TEXT_FIELD_RULES.keys(), mode="before")
    @classmethod
    def validate_min_length(cls, value, info: ValidationInfo):
        min_length, message = TEXT_FIELD_RULES[info.field_name]
        text = value.strip() if isinstance(value, str) else ""
        if len(text) < min_length:
            raise ValueError(message)
        return text

    @field_validator("submission_date", mode="before")
    @classmethod
    def validate_submission_date(cls, value, info: ValidationInfo):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(REQUIRED_MESSAGES["submission_date"])
        try:
            day = _coerce_date(value)
        except ValueError:
            raise ValueError("Submission date must be a valid date.")

        today = (info.context or {}).get("today") or date.today()
        if day < MIN_SUBMISSION_DATE or day > today:
            raise ValueError("Submission date must be between 1900-01-01 and today.")
        return day

    @field_validator("document_type", mode="before")
    @classmethod
    def validate_document_type(cls, value):
        if isinstance(value, Enum):
            value = value.value
        text = str(value or "").strip().lower()
        if not text:
            raise ValueError(REQUIRED_MESSAGES["document_type"])
        allowed = [d.value for d in DocumentType]
        if text not in allowed:
            raise ValueError(f"Document type must be one of {', '.join(allowed)}.")
        return text

    @field_validator("topic", mode="before")
    @classmethod
    def validate_topic(cls, value, info: ValidationInfo):
        document_type = info.data.get("document_type")
        # unknown/invalid type already reported on its own field
        if document_type is None or not requires_topic(document_type):
            return None
        text = value.strip() if isinstance(value, str) else ""
        if not text:
            raise ValueError(TOPIC_REQUIRED_MESSAGE)
        return text


# python name -> form (camelCase) name
FORM_FIELD_NAMES: Dict[str, str] = {
    name: field.alias or name for name, field in CoverPageData.model_fields.items()
}
# form name or python name -> python name
FIELD_NAME_LOOKUP: Dict[str, str] = {
    **{name: name for name in FORM_FIELD_NAMES},
    **{form_name: name for name, form_name in FORM_FIELD_NAMES.items()},
}


class FormValidation(BaseModel):
    valid: bool
    data: Optional[CoverPageData] = None
    errors: Dict[str, str] = Field(default_factory=dict)


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    errors: Dict[str, str] = {}
    for err in exc.errors():
        loc = err.get("loc") or ("__root__",)
        key = str(loc[0])
        python_name = FIELD_NAME_LOOKUP.get(key, key)

        if err.get("type") == "missing":
            message = REQUIRED_MESSAGES.get(python_name, err["msg"])
        elif "error" in (err.get("ctx") or {}):
            message = str(err["ctx"]["error"])
        else:
            message = err["msg"]

        # first rule failure per field wins
        errors.setdefault(FORM_FIELD_NAMES.get(python_name, key), message)
    return errors


def validate_cover_page(candidate: Mapping[str, Any], today: Optional[date] = None) -> FormValidation:
    """Run the per-field rules over a candidate record.

    `today` is the upper bound for the submission date (defaults to date.today()).

    Never raises for bad input: returns either the validated record or the
    field-level error messages keyed by form field name.
    """
    if isinstance(candidate, CoverPageData):
        candidate = candidate.model_dump(by_alias=True, mode="json")

    try:
        data = CoverPageData.model_validate(dict(candidate), context={"today": today})
    except ValidationError as e:
        return FormValidation(valid=False, errors=_field_errors(e))
    return FormValidation(valid=True, data=data)


def default_form_values(today: Optional[date] = None) -> Dict[str, Any]:
    """Values a fresh form starts with."""
    return {
        "department": Department.CSE.value,
        "session": "",
        "courseCode": "",
        "teacherName": "",
        "designation": "",
        "studentName": "",
        "studentId": "",
        "submissionDate": today or date.today(),
        "topic": "",
        "documentType": DocumentType.assignment.value,
    }
