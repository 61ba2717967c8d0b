# barbershop/deps.py

from fastapi import Depends, Request

from barbershop.db import session_scope
from barbershop.errors import Forbidden
from barbershop.schemas import UserPublic


def get_shop(request: Request):
    return request.app.state.shop


# Dependency: one session per request
def get_session(shop=Depends(get_shop)):
    yield from session_scope(shop.engine)


def require_admin(user: UserPublic):
    if not user.is_admin:
        raise Forbidden()
