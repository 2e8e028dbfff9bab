"""
Success envelope shared by every JSON endpoint: {success, data, message}
"""
from typing import Any, Iterable
from fastapi.responses import JSONResponse
from fastapi import status
from pydantic import BaseModel
from uuid import UUID
from datetime import datetime, date
from decimal import Decimal


def to_jsonable(data: Any) -> Any:
    """Pydantic models go out under their camelCase aliases"""
    if isinstance(data, BaseModel):
        return data.model_dump(mode='json', by_alias=True)
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    if isinstance(data, UUID):
        return str(data)
    if isinstance(data, (datetime, date)):
        return data.isoformat()
    if isinstance(data, Decimal):
        return float(data)
    return data


class Response(JSONResponse):
    """
    Returned directly from route handlers. Errors never use this class;
    they are raised as APIException and rendered by the exception handlers.
    """

    def __init__(
        self,
        data: Any = None,
        message: str = "Success",
        status_code: int = status.HTTP_200_OK,
        **kwargs
    ):
        super().__init__(
            content={
                "success": True,
                "data": to_jsonable(data),
                "message": message,
            },
            status_code=status_code,
            **kwargs
        )

    @staticmethod
    def success(
        data: Any = None,
        message: str = "Success",
        status_code: int = status.HTTP_200_OK,
        **kwargs
    ) -> "Response":
        return Response(data=data, message=message, status_code=status_code, **kwargs)

    @staticmethod
    def collection(key: str, items: Iterable[Any], message: str = "Success") -> "Response":
        """List payload: ``{key: [...], "total": n}``"""
        items = list(items)
        return Response(data={key: items, "total": len(items)}, message=message)
