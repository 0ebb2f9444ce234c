from fastapi import APIRouter

from parkit.api.routes import health, parking

api_router = APIRouter()
api_router.include_router(health.router, prefix="/health", tags=["health"])  # GET /
api_router.include_router(parking.router, prefix="/parking", tags=["parking"])  # POST /incoming, /exiting, GET /spots, /tickets/{reg}
