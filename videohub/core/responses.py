from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from videohub.core.errors import ApiError


class CamelModel(BaseModel):
    """Базовая схема: snake_case в Python, camelCase на проводе"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(CamelModel):
    """Конверт успешного ответа"""
    status_code: int = 200
    data: Any = None
    message: str = "Success"
    success: bool = True

    @classmethod
    def ok(cls, data: Any = None, message: str = "Success", status_code: int = 200) -> "ApiResponse":
        if isinstance(data, BaseModel):
            data = data.model_dump(mode="json", by_alias=True, exclude_none=True)
        elif isinstance(data, list):
            data = [
                item.model_dump(mode="json", by_alias=True, exclude_none=True) if isinstance(item, BaseModel) else item
                for item in data
            ]
        return cls(status_code=status_code, data=data, message=message)


class ApiErrorResponse(CamelModel):
    """Конверт ответа с ошибкой"""
    status_code: int
    message: str
    errors: List[Any] = Field(default_factory=list)
    success: bool = False

    @classmethod
    def from_error(cls, error: ApiError) -> "ApiErrorResponse":
        return cls(status_code=error.status_code, message=error.message, errors=error.errors)
