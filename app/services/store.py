"""
Persistence primitives for users and tasks.

No business rules live here: callers own validation, ownership checks and
transaction boundaries (commit/rollback).
"""
import logging
from contextlib import asynccontextmanager

from sqlalchemy import update, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.exceptions import InternalFailure
from app.models.user import User
from app.models.tasks import OrderBy, Task, TaskState

logger = logging.getLogger(__name__)

_ORDER_COLUMNS = {
    OrderBy.DESCRIPTION: Task.description,
    OrderBy.CREATED_AT: Task.created_at,
    OrderBy.COMPLETED_AT: Task.completed_at,
}


@asynccontextmanager
async def storage_errors(db: AsyncSession, action: str):
    """Roll back and report any database fault inside the block as InternalFailure."""
    try:
        yield
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Storage failure while trying to %s", action)
        raise InternalFailure()


# ── Users ───────────────────────────────────────────────

async def find_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).filter(User.email == email))
    return result.scalars().first()


async def find_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id, populate_existing=True)


async def find_user_by_token(db: AsyncSession, token: str) -> User | None:
    if not token:
        return None
    result = await db.execute(
        select(User).filter(User.token == token).execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def insert_user(db: AsyncSession, **fields) -> int:
    user = User(**fields)
    db.add(user)
    await db.flush()
    return user.user_id


async def update_user(db: AsyncSession, user_id: int, **fields) -> int:
    result = await db.execute(
        update(User).where(User.user_id == user_id).values(**fields)
    )
    return result.rowcount


# ── Tasks ───────────────────────────────────────────────

async def insert_task(db: AsyncSession, **fields) -> int:
    task = Task(**fields)
    db.add(task)
    await db.flush()
    return task.task_id


async def find_task(db: AsyncSession, task_id: int) -> Task | None:
    return await db.get(Task, task_id, populate_existing=True)


async def find_tasks_by_owner(
    db: AsyncSession,
    owner_id: int,
    state: TaskState | None = None,
    order_by: OrderBy = OrderBy.CREATED_AT,
) -> list[Task]:
    query = select(Task).filter(Task.owner_id == owner_id)
    if state is not None:
        query = query.filter(Task.state == state)

    column = _ORDER_COLUMNS[order_by]
    if order_by == OrderBy.COMPLETED_AT:
        query = query.order_by(column.asc().nulls_last(), Task.task_id)
    else:
        query = query.order_by(column.asc(), Task.task_id)

    result = await db.execute(query.execution_options(populate_existing=True))
    return list(result.scalars().all())


async def update_task(
    db: AsyncSession,
    task_id: int,
    *,
    owner_id: int | None = None,
    expected_state: TaskState | None = None,
    **fields,
) -> int:
    """
    Update one task. ``owner_id`` and ``expected_state`` narrow the WHERE
    clause, so a row that changed hands or state since it was read is left
    alone and the returned count is 0.
    """
    query = update(Task).where(Task.task_id == task_id)
    if owner_id is not None:
        query = query.where(Task.owner_id == owner_id)
    if expected_state is not None:
        query = query.where(Task.state == expected_state)
    result = await db.execute(query.values(**fields))
    return result.rowcount


async def delete_task(db: AsyncSession, task_id: int, *, owner_id: int | None = None) -> int:
    query = delete(Task).where(Task.task_id == task_id)
    if owner_id is not None:
        query = query.where(Task.owner_id == owner_id)
    result = await db.execute(query)
    return result.rowcount
