"""
Error taxonomy for the taskboard core.

Route handlers and core functions raise these; `register_error_handlers`
turns them into JSON responses carrying a `message` (plus `error` for
upstream failures).
"""
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskboard.logger import get_logger

logger = get_logger(__name__)


class TaskboardError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_body(self) -> dict:
        return {"message": self.message}


class NotFoundError(TaskboardError):
    status_code = 404


class ValidationError(TaskboardError):
    status_code = 400


class AuthenticationError(TaskboardError):
    status_code = 401


class AuthorizationError(TaskboardError):
    status_code = 403


class UpstreamError(TaskboardError):
    """Persistence or export encoding failed."""
    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail

    def to_body(self) -> dict:
        return {"message": self.message, "error": self.detail}


async def _taskboard_error_handler(request: Request, exc: TaskboardError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_body(), headers=headers)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"message": "Invalid request", "errors": errors})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TaskboardError, _taskboard_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
