from fastapi import APIRouter
from .endpoints import (
    auth,
    rewards,
    admin,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(
    rewards.router,
    prefix="/rewards",
    tags=["Rewards"],
)
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
