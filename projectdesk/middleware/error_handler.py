from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from projectdesk.api.envelope import fail

logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    """Turn Pydantic validation errors into a readable message."""
    parts = []
    for err_entry in exc.errors():
        loc = err_entry.get("loc", ())
        loc_str = ".".join(str(x) for x in loc if x not in ("body", "query"))
        msg = err_entry.get("msg", "Validation error")
        parts.append(f"{loc_str}: {msg}" if loc_str else msg)
    return "; ".join(parts) or "Request validation failed"


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, message)
    return fail(422, message)


class ServiceError(Exception):
    """Raise from the service layer for known user-facing errors."""

    status_code = 400


class ProjectNotFoundError(ServiceError):
    status_code = 404

    def __init__(self, project_id: str) -> None:
        super().__init__(f"Project not found: {project_id}")
        self.project_id = project_id


class PermissionDeniedError(ServiceError):
    status_code = 403

    def __init__(self, action: str) -> None:
        super().__init__(f"Not allowed to {action}")
        self.action = action


def full_error_message(exc: Exception) -> str:
    """Return full exception details including traceback."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code == 403:
        logger.warning("Denied %s %s: %s", request.method, request.url.path, exc)
    return fail(exc.status_code, str(exc))


async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return fail(500, full_error_message(exc))
