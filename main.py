import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
import uvicorn

from api.router import root_router
from core.environment import settings
from core.exceptions import (
    SyncBridgeServiceException,
    http_exception_handler,
    service_exception_handler,
    validation_exception_handler,
)
from core.lifespan import lifespan_manager
from core.logger import app_logger


app = FastAPI(
    lifespan=lifespan_manager,
    title="SyncBridge API",
    summary="ODBC to document store synchronization service",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.PARSED_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    app_logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)"
    )
    return response


app.include_router(root_router)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SyncBridgeServiceException, service_exception_handler)
app.add_exception_handler(SQLAlchemyError, service_exception_handler)
app.add_exception_handler(Exception, service_exception_handler)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT)
