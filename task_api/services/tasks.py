import logging
import uuid
from collections.abc import AsyncIterator, Mapping
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from task_api.errors import StoreUnavailable, TaskNotFound, ValidationError
from task_api.models.tasks import Task

logger = logging.getLogger(__name__)

REQUIRED_TASK_FIELDS = ("task", "due_date", "status", "priority", "created_by")
# Fields a partial update may overwrite. The owner is not among them.
MUTABLE_TASK_FIELDS = frozenset({"task", "due_date", "status", "priority"})


def _parse_task_id(task_id: str) -> str | None:
    try:
        return str(uuid.UUID(str(task_id)))
    except ValueError:
        return None


async def _commit(db: AsyncSession, action: str):
    try:
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to %s: %s", action, e.__class__.__name__)
        raise StoreUnavailable() from e


async def create_task(db: AsyncSession, fields: Mapping[str, Any]) -> Task:
    missing = [name for name in REQUIRED_TASK_FIELDS if fields.get(name) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    new_task = Task(**{name: fields[name] for name in REQUIRED_TASK_FIELDS})
    db.add(new_task)
    await _commit(db, "create task")
    await db.refresh(new_task)
    return new_task


async def iter_tasks_by_owner(db: AsyncSession, owner_id: str) -> AsyncIterator[Task]:
    """Stream the owner's tasks; rows are fetched as the caller iterates."""
    stmt = select(Task).filter(Task.created_by == owner_id).order_by(Task.created_at, Task.task_id)
    try:
        result = await db.stream_scalars(stmt)
    except SQLAlchemyError as e:
        logger.error("Task lookup for owner failed: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    try:
        async for task in result:
            yield task
    except SQLAlchemyError as e:
        logger.error("Task lookup for owner failed: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    finally:
        await result.close()


async def get_task_by_id(db: AsyncSession, task_id: str) -> Task:
    parsed = _parse_task_id(task_id)
    if parsed is None:
        raise TaskNotFound()
    try:
        result = await db.execute(select(Task).filter(Task.task_id == parsed))
    except SQLAlchemyError as e:
        logger.error("Task lookup failed: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    task = result.scalars().first()
    if not task:
        raise TaskNotFound()
    return task


async def update_task(db: AsyncSession, task_id: str, fields: Mapping[str, Any]) -> Task:
    unknown = sorted(set(fields) - MUTABLE_TASK_FIELDS)
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(unknown)}")
    nulls = sorted(name for name, value in fields.items() if value is None)
    if nulls:
        raise ValidationError(f"Fields cannot be null: {', '.join(nulls)}")

    task = await get_task_by_id(db, task_id)
    for key, value in fields.items():
        setattr(task, key, value)

    await _commit(db, "update task")
    await db.refresh(task)
    return task


async def delete_task(db: AsyncSession, task_id: str) -> int:
    parsed = _parse_task_id(task_id)
    if parsed is None:
        return 0
    try:
        result = await db.execute(delete(Task).where(Task.task_id == parsed))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error("Failed to delete task: %s", e.__class__.__name__)
        raise StoreUnavailable() from e
    await _commit(db, "delete task")
    return result.rowcount
