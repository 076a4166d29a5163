from logging import Logger

from dependency_injector import containers, providers

from core.environment import SourceMode, settings
from core.database import SQLDatabase
from core.logger import app_logger
from core.odbc import ODBCSource
from service.customers import CustomerService
from service.sync import SyncService
from service.users import UserService


class DependencyContainer(containers.DeclarativeContainer):
    # Dependency wiring
    wiring_config = containers.WiringConfiguration(packages=["api"])

    # Resources/Singletons
    logger: Logger = providers.Object(app_logger)
    pg_database = providers.Resource(
        SQLDatabase,
        db_config=settings.PG_DB_CONFIG,
        logger=logger,
        create_tables=settings.CREATE_TABLES,
    )

    offline_source = providers.Singleton(
        ODBCSource,
        config=settings.OFFLINE_ODBC_CONFIG,
        logger=logger,
    )
    online_source = providers.Singleton(
        ODBCSource,
        config=settings.ONLINE_ODBC_CONFIG,
        logger=logger,
    )
    sources = providers.Dict(
        {
            SourceMode.OFFLINE: offline_source,
            SourceMode.ONLINE: online_source,
        }
    )

    # Factories
    sync_service_factory = providers.Factory(
        SyncService,
        pg_database=pg_database,
        sources=sources,
        key_column=settings.SYNC_KEY_COLUMN,
        batch_size=settings.SYNC_BATCH_SIZE,
        logger=logger,
    )

    user_service_factory = providers.Factory(
        UserService,
        pg_database=pg_database,
        logger=logger,
    )

    customer_service_factory = providers.Factory(
        CustomerService,
        pg_database=pg_database,
        logger=logger,
    )
