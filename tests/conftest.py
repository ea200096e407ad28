import random
from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from cortexcloud.api.deps import get_rng
from cortexcloud.api.main import app
from cortexcloud.db.models import User
from cortexcloud.db.store import InMemoryStore, get_store

RegisterUser = Callable[..., Awaitable[str]]


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(20240601)


@pytest_asyncio.fixture()
async def client(
    store: InMemoryStore,
    rng: random.Random,
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_rng] = lambda: rng

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as async_client:
        yield async_client

    app.dependency_overrides.clear()


@pytest.fixture()
def register_user(client: AsyncClient) -> RegisterUser:
    async def _register(
        email: str = "ada@example.com",
        name: str = "Ada",
        password: str = "secret123",
    ) -> str:
        response = await client.post(
            "/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        return str(response.json()["token"])

    return _register


@pytest_asyncio.fixture()
async def auth_headers(register_user: RegisterUser) -> dict[str, str]:
    token = await register_user()
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture()
async def user(store: InMemoryStore) -> User:
    return await store.create_user(
        User(email="grace@example.com", name="Grace", password_hash="not-a-real-hash")
    )


@pytest.fixture()
def sample_csv_bytes() -> bytes:
    return b"month,revenue,region\n1,100,north\n2,110,south\n3,150,east\n4,170,west\n"


@pytest.fixture()
def sample_json_bytes() -> bytes:
    return b'[{"id": 1, "value": 10}, {"id": 2, "value": 20}, {"id": 3, "value": "n/a"}]'


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns the same value."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


@pytest.fixture()
def fixed_random() -> Callable[[float], random.Random]:
    return FixedRandom
