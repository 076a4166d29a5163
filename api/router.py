from fastapi import APIRouter
from api.routes.customers import customers_router
from api.routes.health import health_router
from api.routes.sync import sync_router
from api.routes.users import users_router

root_router = APIRouter()

# Registration API
api_router = APIRouter(prefix="/api")
api_router.include_router(users_router)
api_router.include_router(customers_router)


root_router.include_router(sync_router)
root_router.include_router(api_router)
root_router.include_router(health_router)

__all__ = ["root_router"]
