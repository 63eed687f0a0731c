"""Web routes package."""

from fastapi import APIRouter

from roombill.web.routes import calculator, home, laundry, readings

web_router = APIRouter()

web_router.include_router(home.router, tags=["web-home"])
web_router.include_router(readings.router, prefix="/readings", tags=["web-readings"])
web_router.include_router(calculator.router, prefix="/calculator", tags=["web-calculator"])
web_router.include_router(laundry.router, prefix="/laundry", tags=["web-laundry"])
