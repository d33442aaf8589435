from fastapi import APIRouter, Depends
from app.core.deps import get_pipeline
from app.services.ingest import IngestionPipeline

router = APIRouter(prefix="/api", tags=["health"])

@router.get("/health")
async def health(pipeline: IngestionPipeline = Depends(get_pipeline)):
    return {"ok": True, "ingest_pending": pipeline.pending}
