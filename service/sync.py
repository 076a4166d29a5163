import json
from logging import Logger
from typing import Any, Mapping

from core.database import SQLDatabase
from core.environment import SourceMode
from core.exceptions import BadRequestException, NotFoundException
from core.logger import app_logger
from core.odbc import ODBCSource
from core.utils import is_sql_identifier, to_json_value
from model.dao.sync_record import SyncRecordDAO
from model.dto.sync import (
    DeleteResultDTO,
    PushResultDTO,
    SortOrder,
    SyncRecordDTO,
    SyncResultDTO,
)


class SyncService:
    """Moves rows between the ODBC sources and the document store."""

    def __init__(
        self,
        pg_database: SQLDatabase,
        sources: Mapping[SourceMode, ODBCSource],
        key_column: str = "id",
        batch_size: int = 500,
        logger: Logger = app_logger,
    ):
        self._db = pg_database
        self._sources = sources
        self._key_column = key_column
        self._batch_size = batch_size
        self._logger = logger

    def _get_source(self, mode: SourceMode) -> ODBCSource:
        try:
            return self._sources[SourceMode(mode)]
        except (KeyError, ValueError):
            raise BadRequestException("Invalid mode. Use 'offline' or 'online'.")

    @staticmethod
    def _validate_table(table: str) -> str:
        if not is_sql_identifier(table):
            raise BadRequestException(f"Invalid table name `{table}`")
        return table

    def build_records(self, rows: list[dict[str, Any]]) -> tuple[dict[str, dict], int]:
        """Key source rows by their key column; returns the records and the skip count.

        Rows without a key are skipped. When several rows share a key the last
        one wins.
        """
        records: dict[str, dict] = {}
        skipped = 0

        for row in rows:
            key = row.get(self._key_column)
            if key is None:
                skipped += 1
                continue

            data = {str(column): to_json_value(value) for column, value in row.items()}
            records[str(to_json_value(key))] = data

        return records, skipped

    async def sync(self, table: str, mode: SourceMode) -> SyncResultDTO:
        self._validate_table(table)
        source = self._get_source(mode)

        try:
            rows = await source.fetch_rows(table)

            if not rows:
                self._logger.warning(f"No data found in table: {table}")
                return SyncResultDTO(table=table, source=source.name, count=0)

            records, skipped = self.build_records(rows)
            if skipped:
                self._logger.warning(
                    f"Skipped {skipped} rows without `{self._key_column}` in table: {table}"
                )

            count = 0
            if records:
                count = await SyncRecordDAO.upsert_many(
                    db_resource=self._db,
                    table_name=table,
                    records=records,
                    batch_size=self._batch_size,
                )
        except Exception as exc:
            self._logger.error(f"Error fetching data from table: {table}: {exc}")
            raise

        self._logger.info(f"Data updated for table: {table} from {source.name} database")
        return SyncResultDTO(table=table, source=source.name, count=count, skipped=skipped)

    async def push(self, table: str, mode: SourceMode = SourceMode.OFFLINE) -> PushResultDTO:
        self._validate_table(table)
        source = self._get_source(mode)

        records = list(
            await SyncRecordDAO.filter(table_name=table, db_resource=self._db)
        )
        if not records:
            raise NotFoundException("No data found in the document store for this table.")

        statements = [self.build_insert(table, record.data) for record in records]
        count = await source.insert_rows(table, statements)

        self._logger.info(f"Data pushed back to {source.name} database for table {table}")
        return PushResultDTO(table=table, source=source.name, count=count)

    @staticmethod
    def build_insert(table: str, data: dict[str, Any]) -> tuple[str, list[Any]]:
        """Parameterized INSERT for one stored record; nested values are sent as JSON text."""
        columns = list(data)
        for column in columns:
            if not is_sql_identifier(column):
                raise BadRequestException(f"Invalid column name `{column}` in table `{table}`")

        params = [
            json.dumps(value) if isinstance(value, (dict, list)) else value
            for value in data.values()
        ]
        placeholders = ", ".join("?" for _ in columns)

        return f"INSERT INTO {table} ({', '.join(columns)}) VALUES ({placeholders})", params

    async def query(
        self,
        table: str,
        page: int = 1,
        limit: int = 10,
        field: str | None = None,
        value: str | None = None,
        sort: SortOrder = SortOrder.ASC,
    ) -> list[SyncRecordDTO]:
        records = await SyncRecordDAO.page(
            db_resource=self._db,
            table_name=table,
            offset=(page - 1) * limit,
            limit=limit,
            field=field,
            value=value,
            descending=sort == SortOrder.DESC,
        )
        return [record.to_dto() for record in records]

    async def delete(
        self, table: str, id: str | None = None, delete_all: bool = False
    ) -> DeleteResultDTO:
        if delete_all:
            deleted = await SyncRecordDAO.delete_where(db_resource=self._db, table_name=table)
            self._logger.info(f"Deleted {deleted} records from table '{table}'")
            return DeleteResultDTO(table=table, deleted=deleted)

        if not id:
            raise BadRequestException(
                "Please provide an 'id' to delete a specific record or set "
                "'deleteAll=true' to remove all data."
            )

        deleted = await SyncRecordDAO.delete_where(
            db_resource=self._db, table_name=table, record_key=id
        )
        if not deleted:
            raise NotFoundException(f"No record found with id: {id} in table '{table}'.")

        self._logger.info(f"Record with id {id} deleted from table '{table}'")
        return DeleteResultDTO(table=table, deleted=deleted)

    async def drop(self, table: str) -> DeleteResultDTO:
        deleted = await SyncRecordDAO.delete_where(db_resource=self._db, table_name=table)
        if not deleted:
            raise NotFoundException(f"Collection '{table}' does not exist.")

        self._logger.info(f"Collection '{table}' dropped ({deleted} records)")
        return DeleteResultDTO(table=table, deleted=deleted)
