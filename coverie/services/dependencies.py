from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from coverie.ai.llm_client import LLMClient, LLMConfigError
from coverie.core.config import Settings, get_settings
from coverie.db.database import get_db
from coverie.services.topic_service import TopicService
from coverie.services.validation_gateway import InputValidator, LLMInputValidator


def get_input_validator(settings: Settings = Depends(get_settings)) -> InputValidator:
    try:
        llm = LLMClient(settings)
    except LLMConfigError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))
    return LLMInputValidator(llm)


def get_topic_service(db: Session = Depends(get_db)) -> TopicService:
    return TopicService(db)
