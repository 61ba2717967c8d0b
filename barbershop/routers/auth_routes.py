# barbershop/routers/auth_routes.py

from typing import Optional

from fastapi import APIRouter, Depends, Response
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session

from barbershop.auth import create_access_token, get_session_id
from barbershop.deps import get_session, get_shop
from barbershop.schemas import Token, UserCreate

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/register", response_model=Token, status_code=201)
def register(
    user: UserCreate,
    session: Session = Depends(get_session),
    shop=Depends(get_shop),
):
    identity, session_id = shop.identity.register(
        session, user.name, user.email, user.password, user.phone
    )
    token = create_access_token(shop.settings, identity.id, session_id)
    return {"access_token": token, "token_type": "bearer", "user": identity}


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
    shop=Depends(get_shop),
):
    identity, session_id = shop.identity.login(session, form_data.username, form_data.password)
    token = create_access_token(shop.settings, identity.id, session_id)
    return {"access_token": token, "token_type": "bearer", "user": identity}


@router.post("/logout", status_code=204)
def logout(
    session_id: Optional[str] = Depends(get_session_id),
    shop=Depends(get_shop),
):
    if session_id is not None:
        shop.identity.logout(session_id)
    return Response(status_code=204)
