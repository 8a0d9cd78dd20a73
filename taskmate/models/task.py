from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, String, Text

from taskmate.database import Base, new_object_id, OBJECT_ID_LENGTH

DEFAULT_CATEGORY = "To-Do"


def _utcnow():
    return datetime.now(UTC)


class Task(Base):
    __tablename__ = "tasks"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    title = Column(String(50), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String, nullable=False, default=DEFAULT_CATEGORY)
    user_email = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
