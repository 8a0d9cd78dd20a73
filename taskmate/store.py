"""SQLAlchemy-backed task and user stores.

Every mutating call is a single filtered statement committed on its own, so
concurrent requests only ever race at the row level (last writer wins).
"""

import logging
import re
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from taskmate.errors import InvalidIdentifier, StoreError
from taskmate.models.task import Task
from taskmate.models.user import User

logger = logging.getLogger(__name__)

_OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def is_valid_object_id(value) -> bool:
    return isinstance(value, str) and bool(_OBJECT_ID_RE.match(value))


def to_object_id(value: str) -> str:
    """Normalise a client supplied id, raising InvalidIdentifier if malformed."""
    if not is_valid_object_id(value):
        raise InvalidIdentifier("Invalid task ID format")
    return value.lower()


class TaskStore:
    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str, exc: SQLAlchemyError):
        self.db.rollback()
        logger.error("Task store %s failed", action, exc_info=exc)
        raise StoreError() from exc

    def find_by_owner(self, user_email: str) -> list[Task]:
        try:
            return self.db.query(Task).filter(Task.user_email == user_email).all()
        except SQLAlchemyError as e:
            self._fail("find", e)

    def insert(self, task: Task) -> Task:
        try:
            self.db.add(task)
            self.db.commit()
            self.db.refresh(task)
            return task
        except SQLAlchemyError as e:
            self._fail("insert", e)

    def update_one(self, task_id: str, user_email: str, fields: dict) -> int:
        """Apply ``fields`` to the task matching (id, owner); return the matched count."""
        query = self.db.query(Task).filter(Task.id == to_object_id(task_id), Task.user_email == user_email)
        try:
            if not fields:
                return query.count()
            matched = query.update(fields, synchronize_session=False)
            self.db.commit()
            return matched
        except SQLAlchemyError as e:
            self._fail("update", e)

    def delete_one(self, task_id: str, user_email: str) -> int:
        """Delete the task matching (id, owner); return the deleted count."""
        if not is_valid_object_id(task_id):
            return 0
        try:
            deleted = (
                self.db.query(Task)
                .filter(Task.id == task_id.lower(), Task.user_email == user_email)
                .delete(synchronize_session=False)
            )
            self.db.commit()
            return deleted
        except SQLAlchemyError as e:
            self._fail("delete", e)


class UserStore:
    def __init__(self, db: Session):
        self.db = db

    def insert_if_absent(self, email: str, profile: dict) -> Optional[str]:
        """Insert a user unless one with ``email`` exists; return the new id or None."""
        try:
            if self.db.query(User).filter(User.email == email).first():
                return None
            user = User(email=email, profile=profile)
            self.db.add(user)
            self.db.commit()
            self.db.refresh(user)
            return user.id
        except IntegrityError:
            # lost a race with a concurrent registration of the same email
            self.db.rollback()
            return None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("User store insert failed", exc_info=e)
            raise StoreError() from e
