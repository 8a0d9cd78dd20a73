import logging
from datetime import datetime, UTC
from typing import Optional

from taskmate.errors import Forbidden, NotFound, ValidationError
from taskmate.models.task import Task, DEFAULT_CATEGORY
from taskmate.store import TaskStore

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


def _valid_title(title) -> bool:
    return bool(title) and len(title) <= TITLE_MAX_LENGTH


def _valid_description(description) -> bool:
    return bool(description) and len(description) <= DESCRIPTION_MAX_LENGTH


class TaskService:
    """Ownership-scoped task operations.

    Every successful mutation tells the notifier that the owner's task list
    changed; reads never do.
    """

    def __init__(self, store: TaskStore, notifier):
        self.store = store
        self.notifier = notifier

    def list_tasks(self, user_email: str, requested_email: str) -> list[Task]:
        if requested_email != user_email:
            raise Forbidden("You can only access your own tasks")
        return self.store.find_by_owner(user_email)

    def create_task(self, user_email: str, title: Optional[str], description: Optional[str] = None,
                    category: Optional[str] = None) -> Task:
        if not _valid_title(title):
            raise ValidationError("Invalid title")
        if description and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError("Description too long")

        task = self.store.insert(Task(
            user_email=user_email,
            title=title,
            description=description,
            category=category or DEFAULT_CATEGORY,
            created_at=datetime.now(UTC),
        ))
        logger.info("Task %s created by %s", task.id, user_email)
        self.notifier.notify_changed(user_email)
        return task

    def update_task(self, task_id: str, user_email: str, title: Optional[str] = None,
                    description: Optional[str] = None, category: Optional[str] = None) -> dict:
        """Apply the acceptable subset of the given fields and return it.

        Fields that are empty or too long are left out rather than rejected.
        A task that is missing or belongs to someone else is reported the
        same way, as NotFound.
        """
        fields = {}
        if _valid_title(title):
            fields["title"] = title
        if _valid_description(description):
            fields["description"] = description
        if category:
            fields["category"] = category

        if self.store.update_one(task_id, user_email, fields) == 0:
            raise NotFound("Task not found", details=f"No task found with ID: {task_id} for user: {user_email}")

        logger.info("Task %s updated by %s (%s)", task_id, user_email, ", ".join(fields) or "no fields")
        self.notifier.notify_changed(user_email)
        return fields

    def delete_task(self, task_id: str, user_email: str) -> None:
        # Success whether or not anything matched, so a foreign id looks
        # exactly like a missing one.
        deleted = self.store.delete_one(task_id, user_email)
        logger.info("Delete of task %s by %s matched %d", task_id, user_email, deleted)
        self.notifier.notify_changed(user_email)
