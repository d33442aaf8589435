import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from app.core.deps import get_store
from app.db.models.integration import Integration
from app.db.store import MemStore
from app.schemas.integration import IntegrationCreate, IntegrationUpdate

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["integrations"])

@router.get("/bots/{bot_id}/integrations", response_model=List[Integration])
async def list_integrations_route(bot_id: str, store: MemStore = Depends(get_store)):
    try:
        return store.list_integrations_by_bot(bot_id)
    except Exception:
        log.exception("[INTEGRATIONS] Error fetching integrations")
        raise HTTPException(status_code=500, detail="Failed to fetch integrations")

@router.post(
    "/bots/{bot_id}/integrations",
    response_model=Integration,
    status_code=status.HTTP_201_CREATED,
)
async def create_integration_route(bot_id: str, payload: IntegrationCreate, store: MemStore = Depends(get_store)):
    try:
        return store.create_integration(
            bot_id=bot_id,
            platform=payload.platform,
            config=payload.config,
            enabled=payload.enabled,
        )
    except Exception:
        log.exception("[INTEGRATIONS] Error creating integration")
        raise HTTPException(status_code=500, detail="Failed to create integration")

@router.put("/integrations/{integration_id}", response_model=Integration)
async def update_integration_route(
    integration_id: str,
    payload: IntegrationUpdate,
    store: MemStore = Depends(get_store),
):
    try:
        integration = store.update_integration(integration_id, payload.model_dump(exclude_unset=True))
        if not integration:
            raise HTTPException(status_code=404, detail="Integration not found")
        return integration
    except HTTPException:
        raise
    except Exception:
        log.exception("[INTEGRATIONS] Error updating integration")
        raise HTTPException(status_code=500, detail="Failed to update integration")

@router.delete("/integrations/{integration_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_integration_route(integration_id: str, store: MemStore = Depends(get_store)):
    try:
        if not store.delete_integration(integration_id):
            raise HTTPException(status_code=404, detail="Integration not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception:
        log.exception("[INTEGRATIONS] Error deleting integration")
        raise HTTPException(status_code=500, detail="Failed to delete integration")
