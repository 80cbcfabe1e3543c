import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from coverie.models.saved_topic_models import SavedTopic

logger = logging.getLogger(__name__)


class TopicService:
    """Append-only, ordered set of previously entered topics (input assistance only)."""

    def __init__(self, db: Session):
        self.db = db

    def list_topics(self) -> List[str]:
        rows = self.db.query(SavedTopic.text).order_by(SavedTopic.id.asc()).all()
        return [row.text for row in rows]

    def add_topic(self, text: str) -> bool:
        topic = (text or "").strip()
        if not topic:
            return False

        exists = self.db.query(SavedTopic.id).filter(SavedTopic.text == topic).first()
        if exists:
            return False

        self.db.add(SavedTopic(text=topic))
        try:
            self.db.commit()
        except IntegrityError:
            # saved concurrently by another session
            self.db.rollback()
            return False
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Could not save topic %r: %s", topic, e)
            raise

        logger.info("Saved topic %r", topic)
        return True
