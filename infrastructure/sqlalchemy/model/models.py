from sqlalchemy import CheckConstraint, Column, DateTime, Index, Integer, String, Text

from core.domain.models.task import (
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
    utcnow,
)
from infrastructure.sqlalchemy.session.db import Base


def _in(column: str, enum_cls) -> str:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return f"{column} IN ({values})"


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX_LENGTH), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        String, nullable=False, default=TaskStatus.PENDING.value,
        server_default=TaskStatus.PENDING.value,
    )
    priority = Column(
        String, nullable=False, default=TaskPriority.MEDIUM.value,
        server_default=TaskPriority.MEDIUM.value,
    )
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_tasks_title_not_empty"),
        CheckConstraint(_in("status", TaskStatus), name="ck_tasks_status"),
        CheckConstraint(_in("priority", TaskPriority), name="ck_tasks_priority"),
        Index("idx_tasks_status", "status"),
        Index("idx_tasks_priority", "priority"),
        Index("idx_tasks_created_at", created_at.desc()),
    )
