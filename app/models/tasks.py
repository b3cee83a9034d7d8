import enum

from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.user import User


class TaskState(str, enum.Enum):
    INCOMPLETE = "INCOMPLETE"
    COMPLETE = "COMPLETE"


class TaskFilter(str, enum.Enum):
    ALL = "ALL"
    INCOMPLETE = "INCOMPLETE"
    COMPLETE = "COMPLETE"


class OrderBy(str, enum.Enum):
    DESCRIPTION = "DESCRIPTION"
    CREATED_AT = "CREATED_AT"
    COMPLETED_AT = "COMPLETED_AT"


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(Integer, primary_key=True, index=True)
    description = Column(Text, nullable=False)
    state = Column(
        Enum(TaskState, name="task_state", native_enum=False, length=16),
        nullable=False,
        default=TaskState.INCOMPLETE,
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    owner_id = Column(Integer, ForeignKey("users.user_id"), index=True, nullable=False)

    owner = relationship(User, back_populates="tasks", foreign_keys=[owner_id])
