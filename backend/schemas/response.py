from datetime import datetime
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.utils.timeutils import ensure_aware

# Define a generic type for the data payload
DataType = TypeVar("DataType")

# Timestamps read back from SQLite come without tzinfo
AwareDatetime = Annotated[datetime, AfterValidator(ensure_aware)]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class APIResponse(CamelModel, Generic[DataType]):
    success: bool
    message: str
    data: Optional[DataType] = None
