from fastapi import APIRouter, Depends, Response, status

from core.di_container import DependencyContainer
from dependency_injector.wiring import Provide, inject

from model.dto.base import BaseResponseDTO, CountedResponseDTO
from model.dto.users import UserCreateDTO
from service.users import UserService

users_router = APIRouter(prefix="/users", tags=["Users"])

UserServiceDependency = Depends(Provide[DependencyContainer.user_service_factory])


@users_router.post("", status_code=status.HTTP_201_CREATED)
@inject
async def add_user(
    dto: UserCreateDTO,
    response: Response,
    service: UserService = UserServiceDependency,
) -> BaseResponseDTO:
    user = await service.add_user(dto)

    if user is None:
        response.status_code = status.HTTP_200_OK
        return BaseResponseDTO(message="User already exists")

    return BaseResponseDTO(data=user, message="User added with pending license.")


@users_router.get("/{db_id}", status_code=status.HTTP_200_OK)
@inject
async def get_users(
    db_id: str, service: UserService = UserServiceDependency
) -> CountedResponseDTO:
    users = await service.get_users(db_id)

    return CountedResponseDTO(count=len(users), data=users, message="Users retrieved.")
