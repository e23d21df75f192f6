from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    *,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[dict] = None,
    **fields: Any,
) -> JSONResponse:
    """
    Single source of truth for successful API payloads.
    Fields are passed through as top-level keys.
    """
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(fields),
        headers=headers,
    )


def error_response(
    *,
    error: str,
    message: Optional[str] = None,
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    details: Optional[Any] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """
    Single source of truth for error payloads: always carries `error`,
    plus `message` and/or `details` when given.
    """
    content = {"error": error}
    if message is not None:
        content["message"] = message
    if details is not None:
        content["details"] = jsonable_encoder(details)

    return JSONResponse(status_code=status_code, content=content, headers=headers)
