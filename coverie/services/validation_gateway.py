import json
import logging
import re
from typing import List, Literal, Optional, Protocol, Union

from pydantic import BaseModel, ConfigDict, Field

from coverie.ai.sys_prompts import VALIDATE_INPUTS_PROMPT, build_validate_inputs_message
from coverie.schemas.ai_schemas.validate_inputs_schemas import (
    CorrectedFields,
    ValidateInputsInput,
    ValidateInputsOutput,
)
from coverie.schemas.cover_schemas import CoverPageData, requires_topic
from coverie.services.cover_preview import format_transmission_date

logger = logging.getLogger(__name__)

ALL_GOOD_SUGGESTION = "All inputs look good!"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred."


class InputValidator(Protocol):
    """Anything that can review a cover page request and return corrections."""

    async def validate(self, request: ValidateInputsInput) -> ValidateInputsOutput:
        ...


class GatewaySuccess(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    corrected_fields: CorrectedFields = Field(..., alias="correctedFields")
    suggestions: List[str]


class GatewayFailure(BaseModel):
    success: Literal[False] = False
    message: str


GatewayResult = Union[GatewaySuccess, GatewayFailure]


def build_validation_request(data: CoverPageData, institution_name: str) -> ValidateInputsInput:
    # no re-validation here: field-level correctness is the caller's job
    topic = data.topic if requires_topic(data.document_type) else None
    return ValidateInputsInput(
        university_name=institution_name,
        department=data.department.value,
        session=data.session,
        course_code=data.course_code,
        teacher_name=data.teacher_name,
        designation=data.designation,
        student_name=data.student_name,
        student_id=data.student_id,
        submission_date=format_transmission_date(data.submission_date),
        topic=topic or None,
        document_type=data.document_type,
    )


def _safe_parse_json(raw: Optional[str]) -> dict:
    if raw is None:
        raise ValueError("Validation model returned empty output")

    text = str(raw).strip()
    if not text:
        raise ValueError("Validation model returned empty output")

    # Common LLM formatting: fenced blocks like ```json { ... } ```
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\s*", "", text, flags=re.IGNORECASE)
        text = re.sub(r"\s*```\s*$", "", text)

    try:
        return json.loads(text)
    except json.JSONDecodeError:
        # Fallback: extract the first JSON object from surrounding text.
        s = text.find("{")
        e = text.rfind("}")
        if s == -1 or e == -1 or e <= s:
            raise ValueError("Validation model did not return JSON")
        return json.loads(text[s : e + 1])


def _normalize_topic(value: Optional[str]) -> Optional[str]:
    # the prompt asks for 'Topic: N/A' when no topic applies
    if value is None:
        return None
    text = value.strip()
    if not text or text.upper() in {"N/A", "TOPIC: N/A", "NONE", "NULL"}:
        return None
    return text


class LLMInputValidator:
    """InputValidator backed by a chat-completion client (see coverie.ai.llm_client)."""

    def __init__(self, llm, temperature: float = 0.0, max_tokens: int = 600):
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens

    async def validate(self, request: ValidateInputsInput) -> ValidateInputsOutput:
        fields = request.model_dump(by_alias=True, mode="json")
        raw = await self.llm.complete(
            system_prompt=VALIDATE_INPUTS_PROMPT,
            messages=[{"role": "user", "content": build_validate_inputs_message(fields)}],
            json_mode=True,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        logger.debug("raw validation output: %s", raw)

        output = ValidateInputsOutput.model_validate(_safe_parse_json(raw))
        return output.model_copy(update={"validated_topic": _normalize_topic(output.validated_topic)})


async def validate_inputs_action(request: ValidateInputsInput, validator: InputValidator) -> GatewayResult:
    """Single request / single response. Never raises."""
    try:
        output = await validator.validate(request)
    except Exception as e:
        logger.error("Input validation failed: %s", e, exc_info=True)
        return GatewayFailure(message=str(e) or UNKNOWN_ERROR_MESSAGE)

    suggestions = [s for s in output.suggestions if s and s.strip()]
    if not suggestions:
        suggestions = [ALL_GOOD_SUGGESTION]

    return GatewaySuccess(corrected_fields=output.corrected_fields(), suggestions=suggestions)
