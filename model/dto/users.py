from pydantic import BaseModel, Field

from model.dao.enums import LicenseStatus


class UserCreateDTO(BaseModel):
    db_id: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserDTO(BaseModel):
    id: int
    db_id: str
    username: str
    license_status: LicenseStatus


class CustomerCreateDTO(BaseModel):
    db_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    place: str = Field(min_length=1)
    phone: str = Field(min_length=1)


class CustomerDTO(BaseModel):
    id: int
    db_id: str
    name: str
    address: str
    place: str
    phone: str


class UserSummaryDTO(BaseModel):
    id: int
    username: str
    license_status: LicenseStatus


class CustomerSummaryDTO(BaseModel):
    id: int
    name: str
    address: str
    place: str
    phone: str
