from typing import AsyncGenerator, Callable

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.api.deps import get_asaas_service, get_db_session
from app.core.config import get_settings
from app.db.base import Base
from app.db.session import create_engine_for, create_session_factory
from app.services.asaas_client import AsaasClient, AsaasConfig
from app.services.asaas_service import AsaasService
from main import app

SANDBOX_URL = "https://api-sandbox.asaas.com/v3"

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(get_settings(), "log_dir", str(tmp_path / "logs"))
    return tmp_path / "logs"


@pytest.fixture
async def session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    db_path = tmp_path / "test.db"
    db_url = f"sqlite+aiosqlite:///{db_path}"

    engine = create_engine_for(db_url)
    factory = create_session_factory(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield factory

    await engine.dispose()


@pytest.fixture
def make_asaas_service() -> Callable[..., AsaasService]:
    def _make(handler: Handler, base_url: str = SANDBOX_URL, api_key: str = "test-key") -> AsaasService:
        config = AsaasConfig(api_key=api_key, base_url=base_url, timeout=5.0)
        return AsaasService(AsaasClient(config, transport=httpx.MockTransport(handler)))

    return _make


@pytest.fixture
def use_asaas(make_asaas_service) -> Callable[..., AsaasService]:
    """Route the API's provider dependency to a fake transport."""

    def _use(handler: Handler, base_url: str = SANDBOX_URL) -> AsaasService:
        service = make_asaas_service(handler, base_url=base_url)
        app.dependency_overrides[get_asaas_service] = lambda: service
        return service

    return _use


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    async def _override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as test_client:
        yield test_client

    app.dependency_overrides.clear()
