import logging
from app.db.models.training_data import TrainingData
from app.db.store import MemStore
from app.schemas.training_data import TrainingDataCreate
from app.services.ingest import IngestionPipeline
from app.services.storage import ObjectStorageService

log = logging.getLogger(__name__)

def register_training_data(
    store: MemStore,
    storage: ObjectStorageService,
    pipeline: IngestionPipeline,
    *,
    bot_id: str,
    payload: TrainingDataCreate,
) -> TrainingData:
    """Store the metadata of an uploaded file and queue its extraction."""
    file_url = storage.normalize_path(payload.file_url)
    row = store.create_training_data(
        bot_id=bot_id,
        file_name=payload.file_name,
        file_url=file_url,
        file_size=payload.file_size,
        file_type=payload.file_type,
    )
    pipeline.ingest(row.id, row.file_url, row.file_name)
    return row

def reprocess_training_data(store: MemStore, pipeline: IngestionPipeline, row: TrainingData) -> TrainingData:
    # vuelve a "registrado": nunca dejamos processed=True sin content
    reset = store.update_training_data(row.id, {"processed": False, "content": None, "error": None})
    log.info(f"[INGEST] reprocesando {row.id} ({row.file_name})")
    pipeline.ingest(reset.id, reset.file_url, reset.file_name)
    return reset
