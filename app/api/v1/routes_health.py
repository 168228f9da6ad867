# File: app/api/v1/routes_health.py

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_database
from app.db.session import Database

router = APIRouter(tags=["health"])


@router.get("/health-check")
def health_check():
    return {
        "status": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/db-test")
def db_test(database: Database = Depends(get_database)):
    # Store failures propagate to the StoreUnavailable handler
    now = database.ping()
    return {"status": "Database connected", "time": str(now)}
