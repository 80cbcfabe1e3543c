import os
from datetime import date

# keep the app's engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coverie.db.database import Base
from coverie.models.saved_topic_models import SavedTopic  # noqa: F401


@pytest.fixture
def make_values():
    def _make(**overrides):
        values = {
            "department": "CSE",
            "session": "Fall 2024",
            "courseCode": "CSE-101",
            "teacherName": "Dr. Alan Turing",
            "designation": "Professor",
            "studentName": "Ada Lovelace",
            "studentId": "20240001",
            "submissionDate": date(2024, 3, 15),
            "topic": "Data Structures",
            "documentType": "assignment",
        }
        values.update(overrides)
        return values

    return _make


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
