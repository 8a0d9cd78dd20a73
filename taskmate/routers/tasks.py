from fastapi import APIRouter, Depends

from taskmate.dependencies import get_current_user, get_task_service, valid_task_id
from taskmate.schemas.task import TaskCreate, TaskOut, TaskPatched, TaskUpdate, TaskUpdated
from taskmate.services.task_service import TaskService

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/{email}", response_model=list[TaskOut])
def list_tasks(email: str, user: str = Depends(get_current_user), service: TaskService = Depends(get_task_service)):
    return service.list_tasks(user, email)


@router.post("", response_model=TaskOut)
def create_task(task: TaskCreate, user: str = Depends(get_current_user),
                service: TaskService = Depends(get_task_service)):
    return service.create_task(user, task.title, task.description, task.category)


@router.put("/{task_id}", response_model=TaskUpdated)
def replace_task(task_id: str, task: TaskUpdate, user: str = Depends(get_current_user),
                 service: TaskService = Depends(get_task_service)):
    # a malformed id surfaces from the store as InvalidIdentifier
    service.update_task(task_id, user, task.title, task.description, task.category)
    return TaskUpdated(taskId=task_id)


@router.patch("/{task_id}", response_model=TaskPatched)
def update_task(task: TaskUpdate, user: str = Depends(get_current_user), task_id: str = Depends(valid_task_id),
                service: TaskService = Depends(get_task_service)):
    fields = service.update_task(task_id, user, task.title, task.description, task.category)
    return TaskPatched(taskId=task_id, updatedFields=fields)


@router.delete("/{task_id}")
def delete_task(task_id: str, user: str = Depends(get_current_user), service: TaskService = Depends(get_task_service)):
    service.delete_task(task_id, user)
    return {"message": "Task deleted"}
