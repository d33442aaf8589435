import logging
from fastapi import APIRouter, Depends, HTTPException
from app.core.deps import get_store
from app.db.models.user import User
from app.db.store import MemStore
from app.middlewares.auth import current_user
from app.services.dashboard import dashboard_stats

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

@router.get("/stats")
async def dashboard_stats_route(
    user: User = Depends(current_user),
    store: MemStore = Depends(get_store),
):
    try:
        return dashboard_stats(store, owner_id=user.id)
    except Exception:
        log.exception("[DASHBOARD] Error fetching dashboard stats")
        raise HTTPException(status_code=500, detail="Failed to fetch dashboard stats")
