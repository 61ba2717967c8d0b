# barbershop/errors.py
# Each error carries its HTTP status; main.py renders them like HTTPException.

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class ShopError(Exception):
    status_code = 400
    detail = "Request failed"
    headers: dict[str, str] | None = None

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class Unauthenticated(ShopError):
    status_code = 401
    detail = "You must be logged in"
    headers = {"WWW-Authenticate": "Bearer"}


class InvalidCredentials(ShopError):
    status_code = 401
    detail = "Invalid email or password"
    headers = {"WWW-Authenticate": "Bearer"}


class Forbidden(ShopError):
    status_code = 403
    detail = "Forbidden"


class NotFound(ShopError):
    status_code = 404
    detail = "Not found"


class SlotUnavailable(ShopError):
    status_code = 409
    detail = "This time slot is no longer available"


class EmailTaken(ShopError):
    status_code = 409
    detail = "Email already in use"


async def shop_error_handler(request: Request, exc: ShopError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )
