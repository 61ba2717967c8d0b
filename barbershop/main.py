# barbershop/main.py

import logging
from datetime import datetime
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI

from barbershop.availability import AvailabilitySource
from barbershop.config import Settings, get_settings
from barbershop.errors import ShopError, shop_error_handler
from barbershop.identity import SnapshotSlots
from barbershop.routers import (
    admin_routes,
    appointments_routes,
    auth_routes,
    barbers_routes,
    services_routes,
    users_routes,
)
from barbershop.shop import Shop


def create_app(
    settings: Optional[Settings] = None,
    *,
    availability: Optional[AvailabilitySource] = None,
    clock: Optional[Callable[[], datetime]] = None,
    slots: Optional[SnapshotSlots] = None,
) -> FastAPI:
    settings = settings or get_settings()
    logging.getLogger("barbershop").setLevel(settings.LOG_LEVEL.upper())

    shop = Shop(settings, availability=availability, clock=clock, slots=slots)
    shop.start()

    app = FastAPI(title="Studio 316 Barbershop")
    app.state.shop = shop
    app.add_exception_handler(ShopError, shop_error_handler)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    app.include_router(auth_routes.router)
    app.include_router(users_routes.router)
    app.include_router(services_routes.router)
    app.include_router(barbers_routes.router)
    app.include_router(appointments_routes.router)
    app.include_router(admin_routes.router)
    return app


def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(
        "barbershop.main:create_app",
        factory=True,
        host="127.0.0.1",
        port=8000,
    )


if __name__ == "__main__":
    run()
