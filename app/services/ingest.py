# app/services/ingest.py
"""
Background ingestion of uploaded training files.

`ingest()` only enqueues; a small pool of asyncio workers takes jobs off the
queue, waits the per-type processing delay, extracts the text and writes it
back to the store. Within one job the steps are strictly sequential; across
jobs there is no ordering.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from app.core.config import Settings
from app.db.store import MemStore
from app.services.extractor import extract_file_content, file_extension

log = logging.getLogger(__name__)

# ms de "procesamiento" por extensión
PROCESSING_DELAYS_MS: Dict[str, int] = {
    "txt": 1000,
    "md": 1000,
    "json": 1500,
    "csv": 2000,
    "pdf": 3000,
    "doc": 3500,
    "docx": 3500,
}
DEFAULT_DELAY_MS = 2000

Extractor = Callable[[str, str], Awaitable[str]]


def processing_delay_ms(file_name: str) -> int:
    return PROCESSING_DELAYS_MS.get(file_extension(file_name), DEFAULT_DELAY_MS)


@dataclass(frozen=True)
class IngestJob:
    training_data_id: str
    file_ref: str
    file_name: str


class IngestionPipeline:
    def __init__(self, store: MemStore, settings: Settings, extractor: Extractor):
        self.store = store
        self.extractor = extractor
        self.workers = max(1, settings.ingest_workers)
        self.delay_scale = max(0.0, settings.ingest_delay_scale)
        self._queue: Optional[asyncio.Queue] = None
        self._tasks: List[asyncio.Task] = []

    @classmethod
    def with_storage(cls, store: MemStore, settings: Settings, storage) -> "IngestionPipeline":
        async def _extract(file_ref: str, file_name: str) -> str:
            return await extract_file_content(storage, file_ref, file_name)
        return cls(store, settings, _extract)

    @property
    def pending(self) -> int:
        return self._queue.qsize() if self._queue is not None else 0

    def start(self) -> None:
        # Se arranca lazy: necesita un event loop corriendo
        if self._tasks:
            return
        self._queue = asyncio.Queue()
        self._tasks = [
            asyncio.create_task(self._worker(i), name=f"ingest-worker-{i}")
            for i in range(self.workers)
        ]
        log.info(f"[INGEST] {self.workers} workers iniciados")

    def ingest(self, training_data_id: str, file_ref: str, file_name: str) -> None:
        """Queue a training data record for extraction and return immediately."""
        self.start()
        self._queue.put_nowait(IngestJob(training_data_id, file_ref, file_name))
        log.info(f"[INGEST] encolado {training_data_id} ({file_name}), pendientes={self.pending}")

    async def join(self) -> None:
        if self._queue is not None:
            await self._queue.join()

    async def shutdown(self) -> None:
        for t in self._tasks:
            t.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
        self._queue = None

    async def _worker(self, n: int) -> None:
        while True:
            job = await self._queue.get()
            try:
                await self.process(job)
            except Exception:
                log.exception(f"[INGEST] worker {n}: error inesperado en {job.training_data_id}")
            finally:
                self._queue.task_done()

    def delay_for(self, file_name: str) -> float:
        return processing_delay_ms(file_name) / 1000 * self.delay_scale

    async def process(self, job: IngestJob) -> None:
        delay = self.delay_for(job.file_name)
        if delay:
            await asyncio.sleep(delay)

        try:
            content = await self.extractor(job.file_ref, job.file_name)
        except Exception as e:
            log.error(f"[INGEST] ERROR extrayendo {job.file_name} ({job.training_data_id}): {e!r}")
            row = self.store.update_training_data(
                job.training_data_id, {"processed": False, "error": str(e)[:500] or type(e).__name__}
            )
            if row is None:
                log.warning(f"[INGEST] {job.training_data_id} ya no existe, se descarta el error")
            return

        # content y processed van juntos en un único update
        row = self.store.update_training_data(
            job.training_data_id, {"content": content, "processed": True, "error": None}
        )
        if row is None:
            log.warning(f"[INGEST] {job.training_data_id} fue borrado durante la ingesta, se descarta")
            return
        log.info(f"[INGEST] OK {job.file_name}: chars={len(content)}")
