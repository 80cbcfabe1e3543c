from datetime import date

import pytest

from coverie.schemas.cover_schemas import validate_cover_page
from coverie.services.cover_preview import (
    build_title,
    format_display_date,
    format_transmission_date,
    parse_transmission_date,
    render_cover_preview,
)


def test_assignment_preview(make_values):
    preview = render_cover_preview(make_values())

    assert preview.title == 'Assignment on "Data Structures"'
    assert preview.department_line == "Department of CSE"
    assert preview.submission_date_line == "15th March, 2024"
    assert preview.university_name == "Chandpur Science and Technology"
    assert preview.course_code_line == "Course Code: CSE-101"
    assert preview.session_line == "Session: Fall 2024"
    assert preview.submitted_to == ("Dr. Alan Turing", "Professor")
    assert preview.submitted_by == ("Ada Lovelace", "ID: 20240001")


def test_general_note_suppresses_topic(make_values):
    preview = render_cover_preview(make_values(documentType="general note", topic="ignored text"))
    assert preview.title == "General note"


@pytest.mark.parametrize(
    "document_type, topic, expected",
    [
        ("lab report", "Ohm's Law", 'Lab report on "Ohm\'s Law"'),
        ("assignment", "", "Assignment"),
        ("assignment", "   ", "Assignment"),
        ("assignment", None, "Assignment"),
        ("general note", "", "General note"),
        (None, "Data Structures", "Document"),
    ],
)
def test_build_title(document_type, topic, expected):
    assert build_title(document_type, topic) == expected


def test_empty_values_render_placeholders():
    preview = render_cover_preview({})

    assert preview.department_line == "Department of ..."
    assert preview.title == "Document"
    assert preview.course_code_line == "Course Code: ..."
    assert preview.session_line == "Session: ..."
    assert preview.submitted_to == ("Teacher Name", "Designation")
    assert preview.submitted_by == ("Student Name", "ID: Student ID")
    assert preview.submission_date_line == "..."


def test_invalid_values_never_raise(make_values):
    preview = render_cover_preview(make_values(submissionDate="31/02/2024", department="EEE", studentId=42))

    assert preview.submission_date_line == "..."
    assert preview.department_line == "Department of EEE"
    assert preview.student_id_line == "ID: 42"


def test_every_call_reflects_current_values(make_values):
    values = make_values()
    first = render_cover_preview(values)
    values["topic"] = "Graphs"
    second = render_cover_preview(values)

    assert first.title == 'Assignment on "Data Structures"'
    assert second.title == 'Assignment on "Graphs"'


def test_accepts_validated_record_and_custom_institution(make_values):
    data = validate_cover_page(make_values()).data
    preview = render_cover_preview(data, institution_name="Example University")

    assert preview.university_name == "Example University"
    assert preview.title == 'Assignment on "Data Structures"'
    assert preview.submission_date_line == "15th March, 2024"


@pytest.mark.parametrize(
    "day, expected",
    [
        (1, "1st January, 2024"),
        (2, "2nd January, 2024"),
        (3, "3rd January, 2024"),
        (4, "4th January, 2024"),
        (11, "11th January, 2024"),
        (12, "12th January, 2024"),
        (13, "13th January, 2024"),
        (21, "21st January, 2024"),
        (22, "22nd January, 2024"),
        (23, "23rd January, 2024"),
        (31, "31st January, 2024"),
    ],
)
def test_display_date_ordinals(day, expected):
    assert format_display_date(date(2024, 1, day)) == expected


def test_transmission_format_is_iso():
    assert format_transmission_date(date(2024, 3, 5)) == "2024-03-05"


@pytest.mark.parametrize("value", [date(1900, 1, 1), date(2000, 2, 29), date(2024, 12, 31)])
def test_transmission_and_display_agree_on_day(value):
    sent = format_transmission_date(value)
    assert format_display_date(parse_transmission_date(sent)) == format_display_date(value)
