from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from coverie.schemas.cover_schemas import DocumentType


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ValidateInputsInput(_CamelModel):
    """What the generative-text service receives."""

    university_name: str = Field(..., description="The name of the university.")
    department: str = Field(..., description="The department name.")
    session: str = Field(..., description="The session information (e.g., Fall 2024).")
    course_code: str = Field(..., description="The course code (e.g., CS101).")
    teacher_name: str = Field(..., description="The name of the teacher or professor.")
    designation: str = Field(..., description="The designation of the teacher (e.g., Professor, Instructor).")
    student_name: str = Field(..., description="The name of the student.")
    student_id: str = Field(..., description="The student ID number.")
    submission_date: str = Field(..., description="The submission date, YYYY-MM-DD.")
    topic: Optional[str] = Field(default=None, description="The topic of the assignment or lab report, if applicable.")
    document_type: DocumentType = Field(..., description="The type of document being created.")


class CorrectedFields(_CamelModel):
    validated_university_name: str
    validated_department: str
    validated_session: str
    validated_course_code: str
    validated_teacher_name: str
    validated_designation: str
    validated_student_name: str
    validated_student_id: str
    validated_submission_date: str
    validated_topic: Optional[str] = None


class ValidateInputsOutput(CorrectedFields):
    """STRICT output JSON the model must return."""

    suggestions: List[str]

    def corrected_fields(self) -> CorrectedFields:
        return CorrectedFields.model_validate(self.model_dump(exclude={"suggestions"}))
