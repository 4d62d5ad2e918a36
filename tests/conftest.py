import fakeredis
import pytest
from fastapi.testclient import TestClient

from consignment.main import app
from consignment.utils.storage import StorageService, get_storage


# Create test store (in-memory Redis for testing)
redis_server = fakeredis.FakeServer()


def make_storage() -> StorageService:
    return StorageService(
        client=fakeredis.FakeRedis(server=redis_server, decode_responses=True),
        namespace="test"
    )


def override_get_storage():
    """Override storage dependency for testing."""
    return make_storage()


# Override the dependency
app.dependency_overrides[get_storage] = override_get_storage


@pytest.fixture(scope="function")
def client():
    """Create test client with a fresh store for each test."""
    with TestClient(app) as test_client:
        yield test_client

    # Flush the store after test
    fakeredis.FakeRedis(server=redis_server).flushall()


@pytest.fixture(scope="function")
def storage():
    """Create storage service for direct access in tests."""
    store = make_storage()

    yield store

    fakeredis.FakeRedis(server=redis_server).flushall()


@pytest.fixture
def create_product(client):
    """Create a catalog product through the API and return its JSON."""
    def _create(code="P1", name="Widget", price=10.0, inventory=5):
        response = client.post(
            "/api/v1/products/",
            json={"code": code, "name": name, "price": price, "inventory": inventory}
        )
        assert response.status_code == 201
        return response.json()
    return _create


@pytest.fixture
def create_client(client):
    """Create a client through the API and return its JSON."""
    def _create(name="Ana Torres", code="C001", address="Calle Falsa 123", phone="555-0101"):
        response = client.post(
            "/api/v1/clients/",
            json={"name": name, "code": code, "address": address, "phone": phone}
        )
        assert response.status_code == 201
        return response.json()
    return _create
