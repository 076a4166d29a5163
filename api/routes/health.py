from fastapi import APIRouter, status
from pydantic import BaseModel


health_router = APIRouter(tags=["Health"])


class HealthCheck(BaseModel):
    name: str = "SyncBridge"
    version: str
    description: str = "ODBC to document store synchronization service"
    status: str


@health_router.get("/status", status_code=status.HTTP_200_OK)
async def health_check() -> HealthCheck:
    return HealthCheck(version="0.1.0", status="ok")
