from fastapi import APIRouter, Depends, Query, status

from core.di_container import DependencyContainer
from core.environment import SourceMode
from dependency_injector.wiring import Provide, inject

from model.dto.base import BaseResponseDTO, CountedResponseDTO
from model.dto.sync import SortOrder
from service.sync import SyncService


sync_router = APIRouter(tags=["Sync"])

SyncServiceDependency = Depends(Provide[DependencyContainer.sync_service_factory])


@sync_router.get("/fetch-sql/{table}/{mode}", status_code=status.HTTP_200_OK)
@inject
async def fetch_sql(
    table: str, mode: SourceMode, service: SyncService = SyncServiceDependency
) -> BaseResponseDTO:
    result = await service.sync(table, mode)

    return BaseResponseDTO(
        data=result,
        message=f"Data fetched from {mode} database for table {table}",
    )


@sync_router.get("/data/{table}", status_code=status.HTTP_200_OK)
@inject
async def get_data(
    table: str,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=1000),
    field: str | None = None,
    value: str | None = None,
    sort: SortOrder = SortOrder.ASC,
    service: SyncService = SyncServiceDependency,
) -> CountedResponseDTO:
    records = await service.query(
        table, page=page, limit=limit, field=field, value=value, sort=sort
    )

    return CountedResponseDTO(
        count=len(records),
        data=records,
        message=f"Records retrieved for table {table}",
    )


@sync_router.post("/push-sql/{table}", status_code=status.HTTP_200_OK)
@inject
async def push_sql(
    table: str,
    mode: SourceMode = SourceMode.OFFLINE,
    service: SyncService = SyncServiceDependency,
) -> BaseResponseDTO:
    result = await service.push(table, mode)

    return BaseResponseDTO(
        data=result,
        message=f"Data pushed back to {mode} database for table {table}",
    )


@sync_router.delete("/data/{table}", status_code=status.HTTP_200_OK)
@inject
async def delete_data(
    table: str,
    id: str | None = None,
    delete_all: bool = Query(False, alias="deleteAll"),
    service: SyncService = SyncServiceDependency,
) -> BaseResponseDTO:
    result = await service.delete(table, id=id, delete_all=delete_all)

    if delete_all:
        message = f"All records from table '{table}' deleted."
    else:
        message = f"Record with id {id} deleted from table '{table}'."

    return BaseResponseDTO(data=result, message=message)


@sync_router.delete("/schema/{table}", status_code=status.HTTP_200_OK)
@inject
async def drop_schema(
    table: str, service: SyncService = SyncServiceDependency
) -> BaseResponseDTO:
    result = await service.drop(table)

    return BaseResponseDTO(
        data=result,
        message=f"Collection '{table}' deleted successfully.",
    )
