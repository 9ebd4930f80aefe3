# tests/conftest.py
import os

# Settings are read once at import time; point them at throwaway values
# before anything from `app` is imported.
os.environ["SUPABASE_URL"] = "https://example.supabase.co"
os.environ["SUPABASE_KEY"] = "anon-key"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("SUPABASE_SERVICE_ROLE_KEY", None)

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from app.core import storage_utils
from app.core.query_cache import query_cache
from app.database import engine, get_session
from app.main import app
from app.models.admin import Admin
from app.models.banner import HeroBanner
from app.models.customer import Customer
from app.models.order import Order, OrderItem
from app.models.product import Product

PUBLIC_URL = "https://example.supabase.co/storage/v1/object/public"
BASE_TIME = datetime(2025, 1, 1, tzinfo=timezone.utc)


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    @property
    def objects(self) -> dict[str, bytes]:
        return self.storage.objects.setdefault(self.name, {})

    def upload(self, path, file, file_options=None):
        if self.storage.fail_uploads:
            raise RuntimeError("upload refused")
        if path in self.objects:
            raise RuntimeError("The resource already exists")
        self.objects[path] = file
        return {"path": path}

    def get_public_url(self, path):
        return f"{PUBLIC_URL}/{self.name}/{path}"

    def remove(self, paths):
        self.storage.remove_calls.append((self.name, list(paths)))
        if self.storage.fail_removes:
            raise RuntimeError("remove refused")
        for p in paths:
            self.objects.pop(p, None)
        return [{"name": p} for p in paths]

    def list(self, path="", options=None):
        limit = (options or {}).get("limit", 100)
        return [{"name": n} for n in sorted(self.objects)][:limit]


class FakeStorage:
    def __init__(self):
        self.objects: dict[str, dict[str, bytes]] = {}
        self.remove_calls: list[tuple[str, list[str]]] = []
        self.fail_uploads = False
        self.fail_removes = False

    def from_(self, name):
        return FakeBucket(self, name)


class FakeSupabase:
    def __init__(self):
        self.storage = FakeStorage()


@pytest.fixture(autouse=True)
def _fresh_state():
    SQLModel.metadata.create_all(engine)
    query_cache.clear()
    yield
    query_cache.clear()
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def storage(monkeypatch) -> FakeStorage:
    fake = FakeSupabase()
    monkeypatch.setattr(storage_utils, "storage_client", lambda: fake)
    return fake.storage


@pytest.fixture
def session():
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(session, storage):
    app.dependency_overrides[get_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth(client, session) -> dict[str, str]:
    session.add(Admin(name="owner", password="s3cret"))
    session.commit()
    res = client.post("/api/v1/admin/login", json={"password": "s3cret"})
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['access_token']}"}


@pytest.fixture
def make_product(session):
    counter = {"n": 0}

    def _make(**fields) -> Product:
        counter["n"] += 1
        data = {
            "name": f"Product {counter['n']}",
            "price": 1000.0,
            "quantity": 50,
            "category": "Back Covers",
            "brand": "spigen",
            "models": ["A05"],
            "colors": ["Black"],
            "created_at": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        data.update(fields)
        product = Product(**data)
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    return _make


@pytest.fixture
def make_customer(session):
    counter = {"n": 0}

    def _make(**fields) -> Customer:
        counter["n"] += 1
        data = {
            "email": f"customer{counter['n']}@example.com",
            "phone_number": f"07700000{counter['n']:02d}",
            "address": f"{counter['n']} Galle Road, Colombo",
            "created_date": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        data.update(fields)
        customer = Customer(**data)
        session.add(customer)
        session.commit()
        session.refresh(customer)
        return customer

    return _make


@pytest.fixture
def make_order(session, make_customer):
    counter = {"n": 0}

    def _make(items: list[tuple[Product, int]], customer: Customer | None = None, **fields) -> Order:
        counter["n"] += 1
        customer = customer or make_customer()
        data = {
            "user_id": customer.id,
            "total_amount": sum(p.price * q for p, q in items),
            "created_at": BASE_TIME + timedelta(minutes=counter["n"]),
        }
        data.update(fields)
        order = Order(**data)
        session.add(order)
        session.flush()
        for product, qty in items:
            session.add(
                OrderItem(
                    order_id=order.id,
                    product_id=product.id,
                    price=product.price,
                    quantity=qty,
                    total_amount=product.price * qty,
                )
            )
        session.commit()
        session.refresh(order)
        return order

    return _make


@pytest.fixture
def make_banner(session, storage):
    def _make(name: str = "banner-1-old.jpg", **fields) -> HeroBanner:
        storage.objects.setdefault("banner", {})[name] = b"old"
        data = {
            "image_url": f"{PUBLIC_URL}/banner/{name}",
            "link_url": "/brand/anker",
            "brand": "anker",
        }
        data.update(fields)
        banner = HeroBanner(**data)
        session.add(banner)
        session.commit()
        session.refresh(banner)
        return banner

    return _make
