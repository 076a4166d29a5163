from fastapi import Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from fastapi.responses import JSONResponse

from core.logger import app_logger
from model.dto.base import BaseResponseDTO


class SyncBridgeServiceException(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DAOException(SyncBridgeServiceException): ...


class SourceException(SyncBridgeServiceException):
    """An ODBC source could not be reached or rejected a statement."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source


class BadRequestException(HTTPException):
    def __init__(self, message: str = "Bad Request"):
        super().__init__(400, message)


class NotFoundException(HTTPException):
    def __init__(self, message: str = "Not Found"):
        super().__init__(404, message)


class InternalServerException(HTTPException):
    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(500, message)


def classify_exception(exc: Exception) -> HTTPException:
    """Map any exception raised while serving a request onto an HTTP error.

    HTTP exceptions are already classified. Everything else (driver errors,
    lost connections, malformed queries) is a server error that carries the
    raw message back to the caller.
    """
    if isinstance(exc, HTTPException):
        return exc

    if isinstance(exc, SyncBridgeServiceException):
        return InternalServerException(exc.message)

    return InternalServerException(str(exc) or exc.__class__.__name__)


# Exception Handlers
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    app_logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail}")

    response_dto = BaseResponseDTO(message="An error occurred")

    if isinstance(exc.detail, str):
        response_dto.message = exc.detail
    elif isinstance(exc.detail, list):
        response_dto.errors = exc.detail
    else:
        response_dto.errors = [exc.detail]

    return JSONResponse(
        status_code=exc.status_code,
        content=response_dto.model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []

    for error in exc.errors():
        location = ".".join([str(loc) for loc in error.get("loc", [])])
        message = error.get("msg", "")

        errors.append({"location": location, "error": message})

    response_dto = BaseResponseDTO(message="Validation Error")

    if errors:
        response_dto.errors = errors

    app_logger.error(f"Validation Error: {errors}")

    return JSONResponse(
        status_code=400,
        content=response_dto.model_dump(),
    )


async def service_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    app_logger.error(
        f"Unhandled error on {request.method} {request.url.path}", exc_info=exc
    )
    return await http_exception_handler(request, classify_exception(exc))
