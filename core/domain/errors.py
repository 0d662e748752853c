from enum import Enum


class ErrorKind(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class TaskError(Exception):
    """
    Single error type raised by the task domain.

    `kind` tells the HTTP boundary how to answer. Repositories raise INTERNAL
    for store failures, use cases raise VALIDATION and NOT_FOUND.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @classmethod
    def validation(cls, message: str) -> "TaskError":
        return cls(ErrorKind.VALIDATION, message)

    @classmethod
    def not_found(cls, message: str) -> "TaskError":
        return cls(ErrorKind.NOT_FOUND, message)

    @classmethod
    def internal(cls, message: str) -> "TaskError":
        return cls(ErrorKind.INTERNAL, message)

    def __repr__(self) -> str:
        return f"TaskError({self.kind.value}, {self.message!r})"
