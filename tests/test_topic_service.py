import pytest
from sqlalchemy.exc import OperationalError

from coverie.services.topic_service import TopicService


def test_topics_keep_insertion_order(db_session):
    service = TopicService(db_session)

    assert service.add_topic("Trees") is True
    assert service.add_topic("Graphs") is True
    assert service.add_topic("Arrays") is True

    assert service.list_topics() == ["Trees", "Graphs", "Arrays"]


def test_blank_and_duplicate_topics_are_ignored(db_session):
    service = TopicService(db_session)
    service.add_topic("Trees")

    assert service.add_topic("") is False
    assert service.add_topic("   ") is False
    assert service.add_topic(" Trees ") is False

    assert service.list_topics() == ["Trees"]


def test_topics_are_trimmed(db_session):
    service = TopicService(db_session)
    service.add_topic("  Linked Lists  ")
    assert service.list_topics() == ["Linked Lists"]


def test_failed_write_is_rolled_back_and_raised(db_session, monkeypatch):
    service = TopicService(db_session)

    def failing_commit():
        raise OperationalError("INSERT INTO saved_topics", {}, Exception("disk I/O error"))

    monkeypatch.setattr(db_session, "commit", failing_commit)
    with pytest.raises(OperationalError):
        service.add_topic("Heaps")

    assert list(db_session.new) == []

    monkeypatch.undo()
    assert service.add_topic("Heaps") is True
    assert service.list_topics() == ["Heaps"]
