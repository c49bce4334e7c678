from fastapi import APIRouter

from app.crudkit.routers.health import router as health_router
from app.crudkit.routers.records import router as records_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(records_router, tags=["records"])
