from typing import Any

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def ok(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Success envelope: {success, message, data} with camelCase keys."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data, by_alias=True),
        },
    )


def created(message: str, data: Any = None) -> JSONResponse:
    return ok(message, data, status_code=status.HTTP_201_CREATED)
