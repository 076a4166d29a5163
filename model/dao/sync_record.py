from typing import Any, Self
from uuid import uuid4

from sqlalchemy import JSON, ScalarResult, String, UniqueConstraint, cast, delete, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Column, Field, select

from core.database import SQLDatabase
from core.utils import utc_now
from model.dao.base import TimestampDAO, UuidDAO
from model.dto.sync import SyncRecordDTO


class SyncRecordDAO(UuidDAO, TimestampDAO, table=True):
    # model config
    __tablename__ = "sync_records"
    __table_args__ = (
        UniqueConstraint("table_name", "record_key", name="uq_sync_records_table_key"),
    )
    __dto_class__ = SyncRecordDTO

    table_name: str = Field(index=True, nullable=False)
    record_key: str = Field(nullable=False)
    data: dict = Field(
        sa_column=Column(JSON().with_variant(JSONB(), "postgresql"), nullable=False)
    )

    @classmethod
    async def filter(
        cls,
        *,
        db_resource: SQLDatabase,
        table_name: str | None = None,
        record_key: str | None = None,
    ) -> ScalarResult[Self]:
        """Filter sync records by table and key, ordered by key."""
        async with db_resource.session() as session:
            query = select(SyncRecordDAO)
            if table_name is not None:
                query = query.where(SyncRecordDAO.table_name == table_name)
            if record_key is not None:
                query = query.where(SyncRecordDAO.record_key == record_key)

            query = query.order_by(SyncRecordDAO.record_key)

            return await session.scalars(query)

    @classmethod
    async def page(
        cls,
        *,
        db_resource: SQLDatabase,
        table_name: str,
        offset: int,
        limit: int,
        field: str | None = None,
        value: str | None = None,
        descending: bool = False,
    ) -> list[Self]:
        """One page of a table's records, optionally filtered and sorted on a data field.

        The filter compares the field's text rendering with `value`. Without a
        field, records are sorted by key.
        """
        async with db_resource.session() as session:
            query = select(SyncRecordDAO).where(SyncRecordDAO.table_name == table_name)

            if field is not None and value is not None:
                query = query.where(
                    cast(SyncRecordDAO.data[field].as_string(), String) == value
                )

            if field is None:
                sort_column = SyncRecordDAO.record_key
            elif db_resource.dialect_name == "sqlite":
                # JSON_EXTRACT keeps SQL types, so numbers sort numerically
                sort_column = func.json_extract(SyncRecordDAO.data, f'$."{field}"')
            else:
                sort_column = SyncRecordDAO.data[field]

            if descending:
                query = query.order_by(sort_column.desc(), SyncRecordDAO.record_key.desc())
            else:
                query = query.order_by(sort_column.asc(), SyncRecordDAO.record_key.asc())

            query = query.offset(offset).limit(limit)

            return list(await session.scalars(query))

    @classmethod
    async def upsert_many(
        cls,
        *,
        db_resource: SQLDatabase,
        table_name: str,
        records: dict[str, dict[str, Any]],
        batch_size: int,
    ) -> int:
        """Insert or overwrite the records of a table, keyed by record key.

        All batches are committed together. Existing records whose data did not
        change are left untouched.
        """
        now = utc_now()
        values = [
            {
                "id": uuid4(),
                "table_name": table_name,
                "record_key": record_key,
                "data": data,
                "created_at": now,
                "updated_at": now,
            }
            for record_key, data in records.items()
        ]
        table = cls.__table__

        async with db_resource.session() as session:
            for start in range(0, len(values), batch_size):
                statement = db_resource.insert(table).values(values[start : start + batch_size])
                statement = statement.on_conflict_do_update(
                    index_elements=[table.c.table_name, table.c.record_key],
                    set_={
                        "data": statement.excluded.data,
                        "updated_at": statement.excluded.updated_at,
                    },
                    where=table.c.data != statement.excluded.data,
                )
                await session.execute(statement)

            await session.commit()

        return len(values)

    @classmethod
    async def delete_where(
        cls,
        *,
        db_resource: SQLDatabase,
        table_name: str,
        record_key: str | None = None,
    ) -> int:
        """Delete a table's records, or only the one with `record_key`. Returns the count."""
        async with db_resource.session() as session:
            statement = delete(SyncRecordDAO).where(SyncRecordDAO.table_name == table_name)
            if record_key is not None:
                statement = statement.where(SyncRecordDAO.record_key == record_key)

            result = await session.execute(statement)
            await session.commit()

            return result.rowcount
