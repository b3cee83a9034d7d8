from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from app.models.tasks import TaskState
from app.utils.sanitization import sanitize_string


class TaskBase(BaseModel):
    description: str = Field(..., min_length=2)

    @field_validator("description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    description: str | None = Field(None, min_length=2)
    state: TaskState | None = None

    @field_validator("description", mode="before")
    @classmethod
    def sanitize(cls, v):
        return sanitize_string(v)


class Task(TaskBase):
    task_id: int
    state: TaskState
    created_at: datetime
    completed_at: datetime | None = None
    owner_id: int

    class Config:
        from_attributes = True
