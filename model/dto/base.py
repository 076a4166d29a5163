from typing import Any
from pydantic import BaseModel


class BaseResponseDTO(BaseModel):
    data: Any | None = None
    errors: list[Any] | None = None
    message: str


class CountedResponseDTO(BaseResponseDTO):
    """Response envelope for list endpoints; `count` is the size of `data`."""

    count: int = 0
