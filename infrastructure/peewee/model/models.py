from peewee import SQL, AutoField, CharField, Check, DateTimeField, Model, TextField

from core.domain.models.task import (
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
    utcnow,
)


def _in(column: str, enum_cls) -> Check:
    values = ", ".join(f"'{member.value}'" for member in enum_cls)
    return Check(f"{column} IN ({values})")


class TaskModel(Model):
    id = AutoField()
    title = CharField(
        max_length=TITLE_MAX_LENGTH, constraints=[Check("length(title) > 0")]
    )
    description = TextField(null=True)
    status = CharField(
        default=TaskStatus.PENDING.value,
        constraints=[SQL(f"DEFAULT '{TaskStatus.PENDING.value}'"), _in("status", TaskStatus)],
    )
    priority = CharField(
        default=TaskPriority.MEDIUM.value,
        constraints=[
            SQL(f"DEFAULT '{TaskPriority.MEDIUM.value}'"),
            _in("priority", TaskPriority),
        ],
    )
    created_at = DateTimeField(default=utcnow)
    updated_at = DateTimeField(default=utcnow)

    class Meta:
        table_name = "tasks"


TaskModel.add_index(TaskModel.status, name="idx_tasks_status")
TaskModel.add_index(TaskModel.priority, name="idx_tasks_priority")
TaskModel.add_index(TaskModel.created_at.desc(), name="idx_tasks_created_at")

MODELS = [TaskModel]
