from typing import Self

from sqlalchemy import ScalarResult, UniqueConstraint
from sqlmodel import Column, Enum, Field, select
from core.database import SQLDatabase
from model.dao.base import IntegerIdDAO, TimestampDAO
from model.dao.enums import LicenseStatus
from model.dto.users import CustomerDTO, UserDTO


class UserDAO(IntegerIdDAO, TimestampDAO, table=True):
    # model config
    __tablename__ = "users"
    __table_args__ = (UniqueConstraint("username", "db_id", name="uq_users_username_db"),)
    __dto_class__ = UserDTO

    db_id: str = Field(index=True, nullable=False)
    username: str = Field(nullable=False)
    password: str = Field(nullable=False)
    license_status: LicenseStatus = Field(
        sa_column=Column(Enum(LicenseStatus), nullable=False),
        default=LicenseStatus.PENDING,
    )

    @classmethod
    async def filter(
        cls,
        *,
        db_resource: SQLDatabase,
        id: int | None = None,
        db_id: str | None = None,
        username: str | None = None,
        license_status: LicenseStatus | None = None,
    ) -> ScalarResult[Self]:
        """Filter user entries by id, db_id, username and license status."""

        async with db_resource.session() as session:
            query = select(UserDAO)

            if id is not None:
                query = query.where(UserDAO.id == id)
            if db_id is not None:
                query = query.where(UserDAO.db_id == db_id)
            if username is not None:
                query = query.where(UserDAO.username == username)
            if license_status is not None:
                query = query.where(UserDAO.license_status == license_status)

            query = query.order_by(UserDAO.id)

            return await session.scalars(query)


class CustomerDAO(IntegerIdDAO, TimestampDAO, table=True):
    # model config
    __tablename__ = "customers"
    __table_args__ = (UniqueConstraint("db_id", "name", name="uq_customers_db_name"),)
    __dto_class__ = CustomerDTO

    db_id: str = Field(index=True, nullable=False)
    name: str = Field(nullable=False)
    address: str
    place: str
    phone: str

    @classmethod
    async def filter(
        cls,
        *,
        db_resource: SQLDatabase,
        id: int | None = None,
        db_id: str | None = None,
        name: str | None = None,
    ) -> ScalarResult[Self]:
        """Filter customer entries by id, db_id and name."""
        async with db_resource.session() as session:
            query = select(CustomerDAO)
            if id is not None:
                query = query.where(CustomerDAO.id == id)
            if db_id is not None:
                query = query.where(CustomerDAO.db_id == db_id)
            if name is not None:
                query = query.where(CustomerDAO.name == name)

            query = query.order_by(CustomerDAO.id)

            return await session.scalars(query)
