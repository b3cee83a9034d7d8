from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db, get_current_user
from app.exceptions import ValidationError
from app.models.user import User as UserModel
from app.models.tasks import OrderBy, TaskFilter
from app.schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from app.services import tasks as task_service
from app.utils.case import camel_to_snake, to_camel_case

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _serialize(task) -> dict:
    return to_camel_case(TaskSchema.model_validate(task).model_dump(mode="json"))


def _parse_order_by(value: str) -> OrderBy:
    # Accept both CREATED_AT and the field name createdAt
    key = value if value.isupper() else camel_to_snake(value).upper()
    try:
        return OrderBy(key)
    except ValueError:
        allowed = ", ".join(o.value for o in OrderBy)
        raise ValidationError(f"orderBy must be one of: {allowed}")


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(
    task_data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.create_task(db, current_user.user_id, task_data.description)
    return _serialize(task)

@router.get("")
async def list_tasks(
    task_filter: TaskFilter = Query(TaskFilter.ALL, alias="filter"),
    order_by: str = Query(OrderBy.CREATED_AT.value, alias="orderBy"),
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    tasks = await task_service.list_tasks(
        db, current_user.user_id, task_filter, _parse_order_by(order_by)
    )
    return [_serialize(t) for t in tasks]

@router.get("/{task_id}")
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.get_owned_task(db, current_user.user_id, task_id)
    return _serialize(task)

@router.patch("/{task_id}")
async def update_task(
    task_id: int,
    update_data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    task = await task_service.edit_task(
        db,
        current_user.user_id,
        task_id,
        description=update_data.description,
        state=update_data.state,
    )
    return _serialize(task)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: UserModel = Depends(get_current_user)
):
    await task_service.delete_task(db, current_user.user_id, task_id)
    return None
