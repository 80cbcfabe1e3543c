import logging

from fastapi import FastAPI

from coverie.api.v1.api import api_router
from coverie.core.config import configure_logging, get_settings
from coverie.db.database import Base, engine
from coverie.models.saved_topic_models import SavedTopic  # noqa: F401  (registers the table)

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Create all tables
Base.metadata.create_all(bind=engine)
logger.info("Tables ready on %s", engine.url.render_as_string(hide_password=True))

app = FastAPI(title=settings.app_name)
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"message": f"Welcome to {settings.app_name}!"}
