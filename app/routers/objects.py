import logging
from fastapi import APIRouter, Depends, HTTPException
from app.core.deps import get_storage
from app.services.storage import ObjectStorageService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/objects", tags=["objects"])

@router.post("/upload")
async def get_upload_url_route(storage: ObjectStorageService = Depends(get_storage)):
    try:
        upload_url = await storage.get_upload_url()
        return {"uploadURL": upload_url}
    except Exception:
        log.exception("[STORAGE] Error getting upload URL")
        raise HTTPException(status_code=500, detail="Failed to get upload URL")
