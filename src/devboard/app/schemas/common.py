"""Response envelope and the camelCase base model used on the wire."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

SUCCESS_CODE = 0


class CamelModel(BaseModel):
    """Serialises fields as camelCase while accepting either spelling on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every JSON response; ``code == 0`` means success."""

    code: int = Field(default=SUCCESS_CODE, description="0 on success, an application error code otherwise")
    message: str = Field(default="success")
    data: DataT | None = None


class MessageResponse(BaseModel):
    message: str


__all__ = ["ApiResponse", "CamelModel", "MessageResponse", "SUCCESS_CODE"]
