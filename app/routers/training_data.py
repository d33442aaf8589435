import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from app.core.deps import get_pipeline, get_storage, get_store
from app.db.models.training_data import TrainingData
from app.db.store import MemStore
from app.schemas.training_data import ReprocessOut, TrainingDataCreate
from app.services.ingest import IngestionPipeline
from app.services.sources import register_training_data, reprocess_training_data
from app.services.storage import ObjectStorageService

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["training-data"])

@router.get("/bots/{bot_id}/training-data", response_model=List[TrainingData])
async def list_training_data_route(bot_id: str, store: MemStore = Depends(get_store)):
    try:
        return store.list_training_data_by_bot(bot_id)
    except Exception:
        log.exception("[SOURCES] Error fetching training data")
        raise HTTPException(status_code=500, detail="Failed to fetch training data")

@router.post(
    "/bots/{bot_id}/training-data",
    response_model=TrainingData,
    status_code=status.HTTP_201_CREATED,
)
async def create_training_data_route(
    bot_id: str,
    payload: TrainingDataCreate,
    store: MemStore = Depends(get_store),
    storage: ObjectStorageService = Depends(get_storage),
    pipeline: IngestionPipeline = Depends(get_pipeline),
):
    if not payload.file_url or not payload.file_name:
        raise HTTPException(status_code=400, detail="fileUrl and fileName are required")
    try:
        # registra y dispara la ingesta en background (no bloquea la respuesta)
        return register_training_data(store, storage, pipeline, bot_id=bot_id, payload=payload)
    except Exception:
        log.exception("[SOURCES] Error creating training data")
        raise HTTPException(status_code=500, detail="Failed to create training data")

@router.delete("/training-data/{training_data_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_training_data_route(training_data_id: str, store: MemStore = Depends(get_store)):
    try:
        if not store.delete_training_data(training_data_id):
            raise HTTPException(status_code=404, detail="Training data not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except HTTPException:
        raise
    except Exception:
        log.exception("[SOURCES] Error deleting training data")
        raise HTTPException(status_code=500, detail="Failed to delete training data")

@router.post(
    "/training-data/{training_data_id}/reprocess",
    response_model=ReprocessOut,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reprocess_training_data_route(
    training_data_id: str,
    force: bool = Query(False, description="Reprocess even if already processed"),
    store: MemStore = Depends(get_store),
    pipeline: IngestionPipeline = Depends(get_pipeline),
):
    try:
        row = store.get_training_data(training_data_id)
        if not row:
            raise HTTPException(status_code=404, detail="Training data not found")
        if row.processed and not force:
            raise HTTPException(status_code=409, detail="Training data already processed")
        reset = reprocess_training_data(store, pipeline, row)
        return {"id": reset.id, "status": "queued"}
    except HTTPException:
        raise
    except Exception:
        log.exception("[SOURCES] Error reprocessing training data")
        raise HTTPException(status_code=500, detail="Failed to reprocess training data")
