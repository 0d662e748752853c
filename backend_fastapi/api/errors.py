import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend_fastapi.api.schemas import RULE_ERROR_TYPE
from core.domain.errors import ErrorKind, TaskError

logger = logging.getLogger(__name__)

INTERNAL_MESSAGE = "Internal server error"


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == RULE_ERROR_TYPE:
        return first["msg"]
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(loc) or "body"
    return f"Invalid value for {field}: {first['msg']}"


def register_error_handlers(app: FastAPI, production: bool) -> None:
    def error_response(
        request: Request,
        status_code: int,
        message: str,
        detail: str | None = None,
        exc: BaseException | None = None,
    ) -> JSONResponse:
        if status_code >= 500:
            logger.error(
                "%s %s -> %s: %s",
                request.method,
                request.url.path,
                status_code,
                detail or message,
                exc_info=exc,
            )
        else:
            logger.warning(
                "%s %s -> %s: %s", request.method, request.url.path, status_code, message
            )

        content: dict = {"success": False, "message": message}
        if not production:
            content["error"] = detail or message
            if status_code >= 500 and exc is not None:
                content["stack"] = "".join(
                    traceback.format_exception(type(exc), exc, exc.__traceback__)
                )
        return JSONResponse(status_code=status_code, content=content)

    @app.exception_handler(TaskError)
    async def task_error_handler(request: Request, exc: TaskError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            return error_response(
                request, exc.status_code, INTERNAL_MESSAGE, exc.message, exc
            )
        return error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(
            request, status.HTTP_400_BAD_REQUEST, _describe_validation_error(exc)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = f"Route {request.method} {request.url.path} not found"
        else:
            message = str(exc.detail)
        return error_response(request, exc.status_code, message)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_MESSAGE,
            str(exc),
            exc,
        )
