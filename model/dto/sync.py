from datetime import datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, Field, JsonValue

from core.environment import SourceMode


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SyncRecordDTO(BaseModel):
    table: str = Field(validation_alias=AliasChoices("table", "table_name"))
    key: str = Field(validation_alias=AliasChoices("key", "record_key"))
    data: dict[str, JsonValue]
    created_at: datetime
    updated_at: datetime


class SyncResultDTO(BaseModel):
    table: str
    source: SourceMode
    count: int
    skipped: int = 0


class PushResultDTO(BaseModel):
    table: str
    source: SourceMode
    count: int


class DeleteResultDTO(BaseModel):
    table: str
    deleted: int
