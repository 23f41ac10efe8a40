# coursefinder/common/schemas.py

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")

class CamelModel(BaseModel):
    """
    Base for every API-facing model: snake_case in Python, camelCase on the wire.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class ApiResponse(BaseModel, Generic[T]):
    """
    Envelope returned by every endpoint.

    A failed response always carries both `error` and `message` and never `data`.
    """
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @model_validator(mode="after")
    def check_failure_shape(self):
        if not self.success:
            if self.data is not None:
                raise ValueError("A failed response cannot carry data")
            if not self.error or not self.message:
                raise ValueError("A failed response requires both error and message")
        return self
