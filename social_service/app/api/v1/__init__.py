from fastapi import APIRouter

from .agencies import router as agencies_router
from .analytics import router as analytics_router
from .groups import router as groups_router
from .profile import router as profile_router
from .store import router as store_router
from .users import router as users_router

api_router = APIRouter()
api_router.include_router(users_router, prefix="/users", tags=["users"])
api_router.include_router(profile_router, prefix="/profile", tags=["profile"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
api_router.include_router(agencies_router, prefix="/agencies", tags=["agencies"])
api_router.include_router(groups_router, prefix="/groups", tags=["groups"])
api_router.include_router(store_router, prefix="/store", tags=["store"])
