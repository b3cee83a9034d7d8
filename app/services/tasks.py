import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    AlreadyComplete,
    NoFieldsProvided,
    NotFound,
    ValidationError,
)
from app.models.tasks import OrderBy, Task, TaskFilter, TaskState
from app.services import store
from app.services.store import storage_errors

logger = logging.getLogger(__name__)


async def create_task(db: AsyncSession, owner_id: int, description: str) -> Task:
    async with storage_errors(db, "create a task"):
        task_id = await store.insert_task(
            db,
            description=description,
            state=TaskState.INCOMPLETE,
            created_at=datetime.now(timezone.utc),
            completed_at=None,
            owner_id=owner_id,
        )
        await db.commit()
        task = await store.find_task(db, task_id)

    logger.info("Task %s created by user %s", task_id, owner_id)
    return task


async def get_owned_task(db: AsyncSession, owner_id: int, task_id: int) -> Task:
    """Fetch a task, treating someone else's task exactly like a missing one."""
    async with storage_errors(db, "read a task"):
        task = await store.find_task(db, task_id)
    if task is None or task.owner_id != owner_id:
        raise NotFound()
    return task


async def _missed_update_error(db: AsyncSession, owner_id: int, task_id: int):
    # The guarded UPDATE matched nothing: work out why from the current row
    task = await store.find_task(db, task_id)
    if task is None or task.owner_id != owner_id:
        return NotFound()
    return AlreadyComplete()


async def edit_task(
    db: AsyncSession,
    owner_id: int,
    task_id: int,
    description: str | None = None,
    state: TaskState | None = None,
) -> Task:
    task = await get_owned_task(db, owner_id, task_id)

    if description is None and state is None:
        raise NoFieldsProvided("Description or state must be provided")

    # Completed tasks are frozen
    if task.state == TaskState.COMPLETE:
        raise AlreadyComplete()

    fields = {}
    if description is not None:
        fields["description"] = description
    if state is not None:
        if state != TaskState.COMPLETE:
            raise ValidationError("A task can only be moved to COMPLETE")
        fields["state"] = TaskState.COMPLETE
        fields["completed_at"] = datetime.now(timezone.utc)

    async with storage_errors(db, "update a task"):
        updated = await store.update_task(
            db,
            task_id,
            owner_id=owner_id,
            expected_state=TaskState.INCOMPLETE,
            **fields,
        )
        if not updated:
            error = await _missed_update_error(db, owner_id, task_id)
            await db.rollback()
            raise error
        await db.commit()
        task = await store.find_task(db, task_id)

    # deleted by a concurrent request right after our commit
    if task is None:
        raise NotFound()

    logger.info("Task %s updated by user %s: %s", task_id, owner_id, ", ".join(fields))
    return task


async def delete_task(db: AsyncSession, owner_id: int, task_id: int) -> None:
    async with storage_errors(db, "delete a task"):
        deleted = await store.delete_task(db, task_id, owner_id=owner_id)
        if not deleted:
            await db.rollback()
            raise NotFound()
        await db.commit()
    logger.info("Task %s deleted by user %s", task_id, owner_id)


async def list_tasks(
    db: AsyncSession,
    owner_id: int,
    task_filter: TaskFilter = TaskFilter.ALL,
    order_by: OrderBy = OrderBy.CREATED_AT,
) -> list[Task]:
    state = None if task_filter == TaskFilter.ALL else TaskState(task_filter.value)
    async with storage_errors(db, "list tasks"):
        return await store.find_tasks_by_owner(db, owner_id, state=state, order_by=order_by)
