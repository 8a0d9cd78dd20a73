import logging
from typing import Optional

from fastapi import Cookie, Depends
from sqlalchemy.orm import Session

from taskmate.database import get_db
from taskmate.errors import InvalidIdentifier, Unauthenticated
from taskmate.realtime import ChangeNotifier, get_notifier
from taskmate.services.task_service import TaskService
from taskmate.store import TaskStore, UserStore, is_valid_object_id
from taskmate.utils.auth import decode_token

logger = logging.getLogger(__name__)


def get_current_user(token: Optional[str] = Cookie(None)) -> str:
    """Return the email of the caller from the ``token`` session cookie."""
    if not token:
        raise Unauthenticated("Unauthorized access")
    try:
        return decode_token(token)
    except Unauthenticated as e:
        logger.info("Rejected session token: %s", e.details)
        raise


def valid_task_id(task_id: str) -> str:
    if not is_valid_object_id(task_id):
        raise InvalidIdentifier("Invalid task ID", details="Task ID must be a valid 24-character hex identifier")
    return task_id


def get_task_service(db: Session = Depends(get_db), notifier: ChangeNotifier = Depends(get_notifier)) -> TaskService:
    return TaskService(TaskStore(db), notifier)


def get_user_store(db: Session = Depends(get_db)) -> UserStore:
    return UserStore(db)
