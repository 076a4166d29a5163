from logging import Logger

from sqlalchemy.exc import IntegrityError

from core.database import SQLDatabase
from core.logger import app_logger
from model.dao.users import CustomerDAO
from model.dto.users import CustomerCreateDTO, CustomerDTO, CustomerSummaryDTO


class CustomerService:
    def __init__(self, pg_database: SQLDatabase, logger: Logger = app_logger):
        self._db = pg_database
        self._logger = logger

    async def add_customer(self, dto: CustomerCreateDTO) -> CustomerDTO | None:
        """Register a customer; None when the customer already exists."""
        existing = (
            await CustomerDAO.filter(db_id=dto.db_id, name=dto.name, db_resource=self._db)
        ).first()

        if existing is not None:
            self._logger.warning(f"Customer {dto.name} already exists in db_id {dto.db_id}.")
            return None

        customer = CustomerDAO(**dto.model_dump())

        try:
            await customer.save(self._db)
        except IntegrityError:
            self._logger.warning(f"Customer {dto.name} already exists in db_id {dto.db_id}.")
            return None

        self._logger.info(f"Customer {dto.name} added to db_id {dto.db_id}")
        return customer.to_dto()

    async def get_customers(self, db_id: str) -> list[CustomerSummaryDTO]:
        customers = await CustomerDAO.filter(db_id=db_id, db_resource=self._db)
        return [
            CustomerSummaryDTO.model_validate(customer.model_dump()) for customer in customers
        ]
