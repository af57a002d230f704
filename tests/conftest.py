from decimal import Decimal

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from retailers.database import Base, get_db
from retailers.models import users, cart, order, log, product, customer, legacy_order, queue_message  # noqa: F401
from retailers.models.customer import Customer
from retailers.models.product import Product
from retailers.models.users import UserRole
from retailers.routes.admin import router as admin_router
from retailers.routes.auth import router as auth_router
from retailers.routes.cart import router as cart_router
from retailers.routes.customers import router as customers_router
from retailers.routes.legacy_orders import router as legacy_orders_router
from retailers.routes.logs import router as logs_router
from retailers.routes.orders import router as orders_router
from retailers.routes.products import router as products_router
from retailers.services.users import register_user
from retailers.utils.entity_store import EntityStore
from retailers.utils.queue_client import get_queue
from retailers.utils.tokenJWT import create_access_token


class RecordingQueue:
    """Stand-in queue that keeps sent messages in memory."""

    def __init__(self):
        self.messages = []
        self.fail = False

    def send(self, queue_name, payload):
        if self.fail:
            raise RuntimeError("queue service unavailable")
        self.messages.append((queue_name, payload))

    def on(self, queue_name):
        return [payload for name, payload in self.messages if name == queue_name]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def store(db):
    return EntityStore(db)


@pytest.fixture()
def queue():
    return RecordingQueue()


@pytest.fixture()
def make_user(db):
    def _make_user(username="jane", role=UserRole.CUSTOMER, password="secret123",
                   shipping_address="12 Main Road, Cape Town", **kwargs):
        return register_user(
            db,
            username=username,
            email=kwargs.pop("email", f"{username}@abcmail.co.za"),
            password=password,
            first_name=kwargs.pop("first_name", username.title()),
            last_name=kwargs.pop("last_name", "Doe"),
            shipping_address=shipping_address,
            role=role,
        )
    return _make_user


@pytest.fixture()
def customer_user(make_user):
    return make_user("jane")


@pytest.fixture()
def admin_user(make_user):
    return make_user("admin", role=UserRole.ADMIN, shipping_address=None)


@pytest.fixture()
def make_product(store):
    def _make_product(name="Wireless Mouse", price="9.99", stock=10, image_url=""):
        return store.add(Product(
            product_name=name,
            description=f"{name} description",
            price=Decimal(price),
            stock_available=stock,
            image_url=image_url,
        ))
    return _make_product


@pytest.fixture()
def make_customer(store):
    def _make_customer(username="jane", name="Jane", surname="Doe"):
        return store.add(Customer(
            name=name,
            surname=surname,
            username=username,
            email=f"{username}@abcmail.co.za",
            shipping_address="12 Main Road, Cape Town",
        ))
    return _make_customer


def auth_headers(user):
    token = create_access_token({"sub": str(user.id), "name": user.username, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def client(db, queue):
    app = FastAPI()
    for router in (auth_router, admin_router, logs_router, cart_router, orders_router,
                   products_router, customers_router, legacy_orders_router):
        app.include_router(router)

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_queue] = lambda: queue
    return TestClient(app)
