import logging
from typing import List, Optional

from coverie.core.config import DEFAULT_INSTITUTION_NAME
from coverie.schemas.cover_schemas import requires_topic
from coverie.services.cover_preview import CoverPreview, render_cover_preview
from coverie.services.form_state import CoverFormState
from coverie.services.topic_service import TopicService
from coverie.services.validation_gateway import (
    GatewayFailure,
    GatewayResult,
    GatewaySuccess,
    InputValidator,
    build_validation_request,
    validate_inputs_action,
)

logger = logging.getLogger(__name__)


class ValidationInFlightError(RuntimeError):
    pass


class CoverPageSession:
    """
    One editing session: the form record, its live preview, the AI
    suggestions and the saved topics.

    The preview is recomputed on every form change. Only one gateway
    call may be outstanding at a time.
    """

    def __init__(
        self,
        validator: InputValidator,
        *,
        topics: Optional[TopicService] = None,
        form: Optional[CoverFormState] = None,
        institution_name: str = DEFAULT_INSTITUTION_NAME,
    ):
        self.validator = validator
        self.topics = topics
        self.form = form or CoverFormState()
        self.institution_name = institution_name

        self.suggestions: List[str] = []
        self.last_result: Optional[GatewayResult] = None
        self.last_error: Optional[str] = None
        self._in_flight = False

        # read once at session start
        self.saved_topics: List[str] = topics.list_topics() if topics else []

        self.preview: CoverPreview = self._render()
        self.form.subscribe(self._on_form_change)

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def _render(self) -> CoverPreview:
        return render_cover_preview(self.form.values, self.institution_name)

    def _on_form_change(self, _form: CoverFormState) -> None:
        self.preview = self._render()

    def commit_topic(self) -> bool:
        """Topic field lost focus: remember a new non-empty topic."""
        if not requires_topic(self.form.get("documentType")):
            return False
        topic = str(self.form.get("topic") or "").strip()
        if not topic or topic in self.saved_topics:
            return False

        # persisted before it joins the in-memory list
        if self.topics is not None:
            self.topics.add_topic(topic)
        self.saved_topics.append(topic)
        return True

    async def submit_validation(self) -> GatewayResult:
        if self._in_flight:
            raise ValidationInFlightError("A validation request is already in progress.")

        # raises FormInvalidError: field errors block the action
        data = self.form.validated()

        self._in_flight = True
        self.suggestions = []
        self.last_error = None
        try:
            request = build_validation_request(data, self.institution_name)
            result = await validate_inputs_action(request, self.validator)
        finally:
            self._in_flight = False

        self.last_result = result
        if isinstance(result, GatewaySuccess):
            self.suggestions = list(result.suggestions)
        elif isinstance(result, GatewayFailure):
            self.last_error = result.message
            logger.info("Validation failed: %s", result.message)
        return result
