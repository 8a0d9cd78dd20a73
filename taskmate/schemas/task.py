from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Length rules live in TaskService: creation rejects bad values while
# updates drop them, so the schemas only check types.


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def drop_non_strings(cls, v):
        # a wrongly typed field is left out of the update, not a 400
        return v if isinstance(v, str) else None


class TaskOut(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    category: str
    user_email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskUpdated(BaseModel):
    message: str = "Task updated"
    taskId: str


class TaskPatched(TaskUpdated):
    updatedFields: dict
