# barbershop/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barbershop.catalog import get_service, list_services
from barbershop.deps import get_session
from barbershop.schemas import ServicePublic

router = APIRouter(
    prefix="/services",
    tags=["services"],
)


@router.get("", response_model=List[ServicePublic])
def services(session: Session = Depends(get_session)):
    return list_services(session)


@router.get("/{service_id}", response_model=ServicePublic)
def service(service_id: int, session: Session = Depends(get_session)):
    return get_service(session, service_id)
