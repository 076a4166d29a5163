import asyncio
from contextlib import closing
import logging
from typing import Any, Callable, Iterable, TypeVar

from core.environment import ODBCConfig
from core.exceptions import SourceException
from core.logger import app_logger


T = TypeVar("T")


class ODBCSource:
    """A configured ODBC data source.

    The driver is a blocking DB-API module, so every operation opens its own
    connection inside a worker thread and closes it before returning, on the
    error path as well.
    """

    def __init__(self, config: ODBCConfig, logger: logging.Logger = app_logger):
        self._config = config
        self._logger = logger

    @property
    def name(self) -> str:
        return self._config.name

    def _run(self, work: Callable[[Any], T]) -> T:
        # pyodbc loads the unixODBC driver manager on import
        import pyodbc

        try:
            connection = pyodbc.connect(
                self._config.connection_string,
                autocommit=True,
                timeout=self._config.timeout,
            )
        except pyodbc.Error as exc:
            raise SourceException(self.name, f"Connection to {self.name} failed: {exc}") from exc

        with closing(connection):
            try:
                return work(connection)
            except pyodbc.Error as exc:
                raise SourceException(self.name, str(exc)) from exc

    async def fetch_rows(self, table: str) -> list[dict[str, Any]]:
        """Return every row of `table` as a column name -> value mapping.

        `table` must already be a validated identifier.
        """

        def _fetch(connection) -> list[dict[str, Any]]:
            with closing(connection.cursor()) as cursor:
                cursor.execute(f"SELECT * FROM {table}")
                columns = [column[0] for column in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]

        rows = await asyncio.to_thread(self._run, _fetch)
        self._logger.debug(f"Fetched {len(rows)} rows from `{table}` ({self.name})")
        return rows

    async def insert_rows(
        self, table: str, statements: Iterable[tuple[str, list[Any]]]
    ) -> int:
        """Execute parameterized INSERT statements one at a time, in order.

        Rows are committed as they go; a failure leaves earlier rows in place.
        """

        def _insert(connection) -> int:
            inserted = 0
            with closing(connection.cursor()) as cursor:
                for sql, params in statements:
                    cursor.execute(sql, params)
                    inserted += 1
            return inserted

        inserted = await asyncio.to_thread(self._run, _insert)
        self._logger.debug(f"Inserted {inserted} rows into `{table}` ({self.name})")
        return inserted

    async def check_connection(self) -> bool:
        try:
            await asyncio.to_thread(self._run, lambda connection: None)
        except SourceException as exc:
            self._logger.error(
                f"Failed to connect to {self.name.upper()} ODBC source: {exc.message}"
            )
            return False

        self._logger.info(f"Successfully connected to {self.name.upper()} ODBC source")
        return True
