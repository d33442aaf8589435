"""Pytest fixtures shared by the test modules."""

from types import SimpleNamespace
from typing import Dict, Optional
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient, ASGITransport

from app.core.config import Settings
from app.core.errors import ObjectNotFoundError
from app.db.store import MemStore
from app.main import create_app
from app.services.storage import ObjectStorageService


PRIVATE_DIR = "/bucket/private"
UPLOAD_URL = "https://storage.googleapis.com/bucket/private/uploads/test-upload?X-Goog-Signature=abc"


def make_settings(**overrides) -> Settings:
    """Settings isolated from the environment and from any local .env file."""
    values = {
        "OPENAI_API_KEY": None,
        "private_object_dir": PRIVATE_DIR,
        "ingest_workers": 2,
        "ingest_delay_scale": 0.0,
        "log_level": "WARNING",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeStorage(ObjectStorageService):
    """Object storage backed by a dict of `/objects/<id>` -> bytes."""

    def __init__(self, settings: Settings, objects: Optional[Dict[str, bytes]] = None):
        super().__init__(settings)
        self.objects = objects if objects is not None else {}

    async def get_upload_url(self) -> str:
        return UPLOAD_URL

    async def download_bytes(self, object_ref: str) -> bytes:
        if object_ref not in self.objects:
            raise ObjectNotFoundError(f"Object not found: {object_ref}")
        return self.objects[object_ref]


def make_llm_client(content: Optional[str] = "Hi there!", error: Optional[Exception] = None):
    """Stand-in for AsyncOpenAI: only chat.completions.create is used."""
    if error is not None:
        create = AsyncMock(side_effect=error)
    else:
        resp = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
        create = AsyncMock(return_value=resp)
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> MemStore:
    return MemStore()


@pytest.fixture
def llm_client():
    return make_llm_client()


@pytest.fixture
def storage(settings) -> FakeStorage:
    return FakeStorage(settings)


@pytest.fixture
def app(settings, storage, llm_client):
    return create_app(settings, storage=storage, llm_client=llm_client)


@pytest.fixture(scope="function")
async def client(app):
    """Create async HTTP client against a fresh app (fresh in-memory store) for each test."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Cleanup - stop ingestion workers started during the test
    await app.state.pipeline.shutdown()


@pytest.fixture
def settings_factory():
    return make_settings


@pytest.fixture
def llm_factory():
    return make_llm_client
