from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime

from coverie.db.database import Base


class SavedTopic(Base):
    __tablename__ = "saved_topics"

    # insertion order is the display order
    id = Column(Integer, primary_key=True, autoincrement=True)

    text = Column(String(300), nullable=False, unique=True, index=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
