"""
Shared fixtures: an in-memory Motor database per test, tokens, and seed records.
"""
import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from stockflow.core.security import create_access_token
from stockflow.db.mongodb import EMPLOYEES, MEDICINES, PARENT_EGG_MIGRATIONS, MongoDB
from stockflow.domains.sites.repository import SiteRepository
from stockflow.domains.stock_categories.repository import StockCategoryRepository
from stockflow.domains.stock_items.repository import StockItemRepository
from stockflow.domains.stock_items.service import generate_sku
from stockflow.domains.stores.repository import StoreRepository
from stockflow.main import app
from stockflow.models.actor import ActorKind, AdminActor, EmployeeActor
from stockflow.models.site import SiteModel
from stockflow.models.stock import StockCategoryModel, StockItemModel, Unit
from stockflow.models.store import StoreModel
from stockflow.realtime.broadcaster import broadcaster

ADMIN_ID = "64b7f0c2a1b2c3d4e5f60001"
EMPLOYEE_ID = "64b7f0c2a1b2c3d4e5f60002"
OTHER_EMPLOYEE_ID = "64b7f0c2a1b2c3d4e5f60003"


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    client = AsyncMongoMockClient()
    db = client["stockflow_test"]
    monkeypatch.setattr(MongoDB, "client", client)
    monkeypatch.setattr(MongoDB, "db", db)
    return db


@pytest.fixture(autouse=True)
def reset_broadcaster():
    broadcaster._actors.clear()
    broadcaster._subscriptions.clear()
    yield
    broadcaster._actors.clear()
    broadcaster._subscriptions.clear()


@pytest.fixture
def admin():
    return AdminActor(id=ADMIN_ID)


@pytest.fixture
def employee():
    return EmployeeActor(id=EMPLOYEE_ID)


@pytest.fixture
def other_employee():
    return EmployeeActor(id=OTHER_EMPLOYEE_ID)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token(ADMIN_ID, ActorKind.ADMIN)}"}


@pytest.fixture
def employee_headers():
    return {"Authorization": f"Bearer {create_access_token(EMPLOYEE_ID, ActorKind.EMPLOYEE)}"}


@pytest.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def store():
    return await StoreRepository().create(
        StoreModel(code="ST-001", name="Main Warehouse", location="Kigali").model_dump()
    )


@pytest.fixture
async def category():
    return await StockCategoryRepository().create(StockCategoryModel(name="Feed").model_dump())


@pytest.fixture
async def site():
    return await SiteRepository().create(SiteModel(name="Hatchery A", code="HA").model_dump())


@pytest.fixture
def make_stock_item(store, category):
    async def _make(product_name: str = "Fish Feed Pellets", quantity: float = 100, unit_price: float = 2.5):
        stock_item = StockItemModel(
            product_name=product_name,
            sku=generate_sku(product_name),
            quantity=quantity,
            unit=Unit.KG,
            unit_price=unit_price,
            category_id=category["_id"],
            store_id=store["_id"]
        )
        return await StockItemRepository().create(stock_item.model_dump())

    return _make


@pytest.fixture
async def employee_record(mongo_db):
    await mongo_db[EMPLOYEES].insert_one({"_id": EMPLOYEE_ID, "firstname": "Aline", "lastname": "Uwase",
                                          "email": "aline@example.com", "password": "hashed"})
    return EMPLOYEE_ID


@pytest.fixture
async def medicine(mongo_db):
    result = await mongo_db[MEDICINES].insert_one({"name": "Formalin", "unit": "LITERS"})
    return str(result.inserted_id)


@pytest.fixture
async def parent_egg_migration(mongo_db):
    result = await mongo_db[PARENT_EGG_MIGRATIONS].insert_one({"batch": "B-12", "egg_count": 5000})
    return str(result.inserted_id)


class FakeConnection:
    """Stands in for a WebSocket: records everything sent to it."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.messages = []

    async def send_json(self, data):
        if self.fail:
            raise RuntimeError("socket closed")
        self.messages.append(data)

    def events(self):
        return [message["event"] for message in self.messages]


@pytest.fixture
def make_connection():
    return FakeConnection
