from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from coverie.services.dependencies import get_topic_service
from coverie.services.topic_service import TopicService


router = APIRouter(prefix="/topics", tags=["Saved Topics"])


class TopicCreate(BaseModel):
    topic: str = Field(..., max_length=300)


class TopicAddResponse(BaseModel):
    added: bool
    topics: List[str]


@router.get("/", response_model=List[str])
def list_topics(topics: TopicService = Depends(get_topic_service)):
    return topics.list_topics()


@router.post("/", response_model=TopicAddResponse, status_code=status.HTTP_200_OK)
def add_topic(payload: TopicCreate, topics: TopicService = Depends(get_topic_service)):
    added = topics.add_topic(payload.topic)
    return TopicAddResponse(added=added, topics=topics.list_topics())
