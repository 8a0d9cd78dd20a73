from sqlalchemy import Column, JSON, String

from taskmate.database import Base, new_object_id, OBJECT_ID_LENGTH


class User(Base):
    __tablename__ = "users"

    id = Column(String(OBJECT_ID_LENGTH), primary_key=True, default=new_object_id)
    email = Column(String, unique=True, nullable=False, index=True)
    # whatever else the client sent on registration (name, photo, ...)
    profile = Column(JSON, nullable=False, default=dict)
