from __future__ import annotations

import pytest

from core.utils import CryptographyHelper
from model.dao.enums import LicenseStatus
from model.dao.users import CustomerDAO, UserDAO
from model.dto.users import CustomerCreateDTO, UserCreateDTO
from service.customers import CustomerService
from service.users import UserService


@pytest.mark.asyncio
async def test_add_user_hashes_password(database) -> None:
    service = UserService(database)

    user = await service.add_user(
        UserCreateDTO(db_id="db-1", username="alice", password="s3cret")
    )

    assert user is not None
    assert user.license_status == LicenseStatus.PENDING
    stored = await UserDAO.get(user.id, db_resource=database)
    assert stored.password != "s3cret"
    assert CryptographyHelper.verify_password("s3cret", stored.password)


@pytest.mark.asyncio
async def test_same_username_is_allowed_in_another_db(database) -> None:
    service = UserService(database)
    dto = UserCreateDTO(db_id="db-1", username="alice", password="pw")

    assert await service.add_user(dto) is not None
    assert await service.add_user(dto) is None
    assert await service.add_user(dto.model_copy(update={"db_id": "db-2"})) is not None

    assert [user.username for user in await service.get_users("db-1")] == ["alice"]
    assert len(list(await UserDAO.filter(username="alice", db_resource=database))) == 2


@pytest.mark.asyncio
async def test_duplicate_customer_is_not_inserted(database) -> None:
    service = CustomerService(database)
    dto = CustomerCreateDTO(
        db_id="db-1", name="Acme", address="1 Main St", place="Springfield", phone="555"
    )

    first = await service.add_customer(dto)
    second = await service.add_customer(dto.model_copy(update={"phone": "999"}))

    assert first is not None
    assert second is None
    customers = list(await CustomerDAO.filter(db_id="db-1", db_resource=database))
    assert len(customers) == 1
    assert customers[0].phone == "555"


@pytest.mark.asyncio
async def test_saved_users_carry_timestamps(database) -> None:
    service = UserService(database)

    user = await service.add_user(UserCreateDTO(db_id="db-1", username="carol", password="pw"))
    stored = await UserDAO.get(user.id, db_resource=database)

    assert stored.created_at is not None
    assert stored.updated_at is not None
    assert UserDAO.__table__.c.created_at.type.timezone is True


@pytest.mark.asyncio
async def test_listings_leave_out_db_id(database) -> None:
    await UserService(database).add_user(
        UserCreateDTO(db_id="db-1", username="dave", password="pw")
    )
    await CustomerService(database).add_customer(
        CustomerCreateDTO(db_id="db-1", name="Acme", address="a", place="p", phone="1")
    )

    [user] = await UserService(database).get_users("db-1")
    [customer] = await CustomerService(database).get_customers("db-1")

    assert "db_id" not in user.model_dump()
    assert "db_id" not in customer.model_dump()
    assert user.username == "dave"
    assert customer.name == "Acme"
