# Router aggregator
from fastapi import APIRouter
from coverie.api.v1.endpoints import cover_router
from coverie.api.v1.endpoints import topic_router


api_router = APIRouter()

api_router.include_router(cover_router.router)
api_router.include_router(topic_router.router)
