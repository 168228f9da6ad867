from fastapi import APIRouter

from app.api.v1.routes_analytics import router as analytics_router
from app.api.v1.routes_auth import router as auth_router
from app.api.v1.routes_health import router as health_router
from app.api.v1.routes_preferences import router as preferences_router
from app.api.v1.routes_sessions import router as sessions_router


api_router = APIRouter()

api_router.include_router(health_router)
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
api_router.include_router(sessions_router, prefix="/sessions", tags=["sessions"])
api_router.include_router(preferences_router, prefix="/preferences", tags=["preferences"])
api_router.include_router(analytics_router, prefix="/analytics", tags=["analytics"])
