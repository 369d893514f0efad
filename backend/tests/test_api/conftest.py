"""
Fixtures for API tests: a fresh store, gate and session service per test,
wired into the app through dependency overrides.
"""
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from speech_practice.core.dependencies import get_capability_gate, get_session_service, get_store
from speech_practice.core.session_tracker import SessionRegistry
from speech_practice.main import app
from speech_practice.services.practice_session_service import PracticeSessionService


@pytest.fixture
def api_service(store, free_gate):
    """Session service over the test store; premium content locked."""
    service = PracticeSessionService(store=store, gate=free_gate, registry=SessionRegistry())

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_capability_gate] = lambda: free_gate
    app.dependency_overrides[get_session_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(api_service):
    """Create async test client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as client:
        yield client
