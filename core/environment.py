from enum import StrEnum

from pydantic import BaseModel
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceMode(StrEnum):
    OFFLINE = "offline"
    ONLINE = "online"


class SQLConfig(BaseModel):
    driver: str
    username: str | None = None
    password: str | None = None
    host: str | None = None
    port: int | None = None
    database: str
    additional_config: dict[str, str] | None = {}


class ODBCConfig(BaseModel):
    name: str
    dsn: str
    username: str
    password: str
    timeout: int = 0

    @property
    def connection_string(self) -> str:
        return f"DSN={self.dsn};UID={self.username};PWD={self.password}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    ALLOWED_ORIGINS: str = "http://localhost"

    ENVIRONMENT: str = "development"

    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # Offline ODBC source
    DSN: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""

    # Online ODBC source
    ONLINE_DSN: str = ""
    ONLINE_DB_USER: str = ""
    ONLINE_DB_PASSWORD: str = ""

    ODBC_TIMEOUT: int = 0

    # Database config
    PG_DB_HOST: str = ""
    PG_DB_NAME: str = ""
    PG_DB_PASSWORD: str = ""
    PG_DB_USER: str = ""
    PG_DB_PORT: int = 5432

    CREATE_TABLES: bool = True

    SYNC_KEY_COLUMN: str = "id"
    SYNC_BATCH_SIZE: int = 500

    @property
    def PG_DB_CONFIG(self) -> SQLConfig:
        sql_driver: str = "postgresql+asyncpg"
        additional_config: dict = {}

        return SQLConfig(
            driver=sql_driver,
            host=self.PG_DB_HOST,
            port=self.PG_DB_PORT,
            database=self.PG_DB_NAME,
            username=self.PG_DB_USER,
            password=self.PG_DB_PASSWORD,
            additional_config=additional_config,
        )

    @property
    def OFFLINE_ODBC_CONFIG(self) -> ODBCConfig:
        return ODBCConfig(
            name=SourceMode.OFFLINE,
            dsn=self.DSN,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            timeout=self.ODBC_TIMEOUT,
        )

    @property
    def ONLINE_ODBC_CONFIG(self) -> ODBCConfig:
        return ODBCConfig(
            name=SourceMode.ONLINE,
            dsn=self.ONLINE_DSN,
            username=self.ONLINE_DB_USER,
            password=self.ONLINE_DB_PASSWORD,
            timeout=self.ODBC_TIMEOUT,
        )

    @property
    def PARSED_ALLOWED_ORIGINS(self):
        return [x.strip() for x in self.ALLOWED_ORIGINS.split(",")]


settings = Settings()

__all__ = ["settings"]
