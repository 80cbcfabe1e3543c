"""
Cover page preview: a pure projection of the current form values to the
text shown on the printed page.

Missing or malformed values never raise; they render as placeholders.
"""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from coverie.core.config import DEFAULT_INSTITUTION_NAME
from coverie.schemas.cover_schemas import FORM_FIELD_NAMES, requires_topic

PLACEHOLDER = "..."

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class CoverPreview:
    university_name: str
    department_line: str
    title: str
    course_code_line: str
    session_line: str
    teacher_name: str
    designation: str
    student_name: str
    student_id_line: str
    submission_date_line: str

    @property
    def submitted_to(self) -> tuple[str, str]:
        return self.teacher_name, self.designation

    @property
    def submitted_by(self) -> tuple[str, str]:
        return self.student_name, self.student_id_line

    def to_dict(self) -> dict:
        return asdict(self)


# -----------------------------
# Date formatting
# -----------------------------
def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_display_date(value: date) -> str:
    """15th March, 2024"""
    return f"{value.day}{_ordinal_suffix(value.day)} {MONTH_NAMES[value.month - 1]}, {value.year}"


def format_transmission_date(value: date) -> str:
    """Locale-stable calendar string sent to the generative-text service."""
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()


def parse_transmission_date(value: str) -> date:
    return date.fromisoformat(value)


def _as_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


# -----------------------------
# Text helpers
# -----------------------------
def _text(value: Any) -> str:
    if isinstance(value, Enum):
        value = value.value
    if value is None:
        return ""
    return str(value).strip()


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def build_title(document_type: Any, topic: Any) -> str:
    doc_type = _text(document_type) or "document"
    title = _capitalize(doc_type)
    topic_text = _text(topic)
    if requires_topic(doc_type) and topic_text:
        return f'{title} on "{topic_text}"'
    return title


def _read(values: Mapping[str, Any], name: str) -> Any:
    # accept both form (camelCase) and python names
    form_name = FORM_FIELD_NAMES.get(name, name)
    if form_name in values:
        return values[form_name]
    return values.get(name)


def render_cover_preview(
    values: Mapping[str, Any],
    institution_name: str = DEFAULT_INSTITUTION_NAME,
) -> CoverPreview:
    if hasattr(values, "model_dump"):
        values = values.model_dump(by_alias=True)

    department = _text(_read(values, "department"))
    course_code = _text(_read(values, "course_code"))
    session = _text(_read(values, "session"))
    student_id = _text(_read(values, "student_id"))
    submission_date = _as_date(_read(values, "submission_date"))

    return CoverPreview(
        university_name=institution_name,
        department_line=f"Department of {department or PLACEHOLDER}",
        title=build_title(_read(values, "document_type"), _read(values, "topic")),
        course_code_line=f"Course Code: {course_code or PLACEHOLDER}",
        session_line=f"Session: {session or PLACEHOLDER}",
        teacher_name=_text(_read(values, "teacher_name")) or "Teacher Name",
        designation=_text(_read(values, "designation")) or "Designation",
        student_name=_text(_read(values, "student_name")) or "Student Name",
        student_id_line=f"ID: {student_id or 'Student ID'}",
        submission_date_line=format_display_date(submission_date) if submission_date else PLACEHOLDER,
    )
