import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from task_api.dependencies import get_db, get_current_claims
from task_api.errors import Forbidden, TaskNotFound
from task_api.schemas.task import Task as TaskSchema, TaskCreate, TaskMessage, TaskUpdate
from task_api.schemas.user import MessageResponse
from task_api.services import tasks as task_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tasks"])

_errors = {404: {"model": MessageResponse}, 500: {"model": MessageResponse}}


def _check_owner(claims: dict | None, owner_id: str):
    # claims is None when ownership enforcement is switched off
    if claims is not None and claims["userId"] != owner_id:
        raise Forbidden()


@router.post("/createTask", response_model=TaskMessage, status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    claims: dict | None = Depends(get_current_claims),
):
    _check_owner(claims, task_data.created_by)
    task = await task_service.create_task(db, task_data.model_dump())
    logger.info("Task created successfully with ID '%s'", task.task_id)
    return {"message": "Task created successfully", "task": TaskSchema.model_validate(task)}


@router.put("/updateTask/{task_id}", response_model=TaskMessage, responses=_errors)
async def update_task(
    task_id: str,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    claims: dict | None = Depends(get_current_claims),
):
    try:
        if claims is not None:
            existing = await task_service.get_task_by_id(db, task_id)
            _check_owner(claims, existing.created_by)
        task = await task_service.update_task(db, task_id, update_data.model_dump(exclude_unset=True))
    except TaskNotFound:
        logger.warning("Task not found with ID '%s'", task_id)
        raise

    logger.info("Task with ID '%s' updated successfully", task_id)
    return {"message": "Task updated successfully", "task": TaskSchema.model_validate(task)}


@router.delete("/deleteTask/{task_id}", response_model=MessageResponse, responses=_errors)
async def delete_task(
    task_id: str,
    db: AsyncSession = Depends(get_db),
    claims: dict | None = Depends(get_current_claims),
):
    try:
        if claims is not None:
            existing = await task_service.get_task_by_id(db, task_id)
            _check_owner(claims, existing.created_by)
        deleted = await task_service.delete_task(db, task_id)
        if deleted == 0:
            raise TaskNotFound()
    except TaskNotFound:
        logger.warning("Task not found with ID '%s'", task_id)
        raise

    logger.info("Task with ID '%s' deleted successfully", task_id)
    return {"message": "Task deleted successfully"}


@router.get("/tasks/{owner_id}", response_model=list[TaskSchema])
async def list_tasks_by_owner(
    owner_id: str,
    db: AsyncSession = Depends(get_db),
    claims: dict | None = Depends(get_current_claims),
):
    _check_owner(claims, owner_id)
    tasks = [TaskSchema.model_validate(t) async for t in task_service.iter_tasks_by_owner(db, owner_id)]

    if not tasks:
        logger.warning("No tasks found for user with ID '%s'", owner_id)
    else:
        logger.info("Retrieved %d tasks for user with ID '%s'", len(tasks), owner_id)
    return tasks
