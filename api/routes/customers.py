from fastapi import APIRouter, Depends, Response, status

from core.di_container import DependencyContainer
from dependency_injector.wiring import Provide, inject

from model.dto.base import BaseResponseDTO, CountedResponseDTO
from model.dto.users import CustomerCreateDTO
from service.customers import CustomerService

customers_router = APIRouter(prefix="/customers", tags=["Customers"])

CustomerServiceDependency = Depends(Provide[DependencyContainer.customer_service_factory])


@customers_router.post("", status_code=status.HTTP_201_CREATED)
@inject
async def add_customer(
    dto: CustomerCreateDTO,
    response: Response,
    service: CustomerService = CustomerServiceDependency,
) -> BaseResponseDTO:
    customer = await service.add_customer(dto)

    if customer is None:
        response.status_code = status.HTTP_200_OK
        return BaseResponseDTO(message="Customer already exists")

    return BaseResponseDTO(data=customer, message="Customer added.")


@customers_router.get("/{db_id}", status_code=status.HTTP_200_OK)
@inject
async def get_customers(
    db_id: str, service: CustomerService = CustomerServiceDependency
) -> CountedResponseDTO:
    customers = await service.get_customers(db_id)

    return CountedResponseDTO(
        count=len(customers), data=customers, message="Customers retrieved."
    )
