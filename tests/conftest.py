"""
Wspolne fixtures: baza SQLite w pamieci, fake provider platnosci i fake lock.
"""
import os

# przed importem modulow aplikacji (settings czyta env przy imporcie)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("APP_SECRET", "test-secret")
os.environ.setdefault("CURRENCY", "USD")
os.environ.setdefault("PER_PAGE", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api import create_app
from storefront.api.deps import get_lock_service, get_payment_client
from storefront.data.database import Base, get_db
from storefront.data.models import ItemModel, UserModel, CartItemModel
from storefront.domain.exceptions import PaymentDeclined
from storefront.services.payment_client import Charge
from storefront.services.security import hash_password, issue_session_token

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class FakePaymentClient:
    """Provider platnosci w pamieci, zapisuje kazde wywolanie."""

    def __init__(self):
        self.calls = []
        self.decline = False
        self.charge_id = "c_123"
        self.confirmed_amount = None
        self.on_charge = None

    def create_charge(self, amount, currency, token, idempotency_key):
        self.calls.append(
            {"amount": amount, "currency": currency, "token": token, "idempotency_key": idempotency_key}
        )
        if self.on_charge:
            self.on_charge()
        if self.decline:
            raise PaymentDeclined("Your card was declined", details={"code": "card_declined"})
        amount = self.confirmed_amount if self.confirmed_amount is not None else amount
        return Charge(id=self.charge_id, amount=amount, currency=currency)


class FakeLockService:
    def __init__(self):
        self.held = {}

    def acquire_checkout_lock(self, user_id, ttl):
        if user_id in self.held:
            return None
        self.held[user_id] = f"owner-{user_id}"
        return self.held[user_id]

    def release_checkout_lock(self, user_id, owner):
        if self.held.get(user_id) == owner:
            del self.held[user_id]
            return True
        return False


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def payments() -> FakePaymentClient:
    return FakePaymentClient()


@pytest.fixture
def locks() -> FakeLockService:
    return FakeLockService()


@pytest.fixture
def client(db, payments, locks):
    app = create_app()

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_client] = lambda: payments
    app.dependency_overrides[get_lock_service] = lambda: locks

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(permissions=("USER",), password="secret", email=None, name=None):
        counter["n"] += 1
        user = UserModel(
            name=name or f"User {counter['n']}",
            email=email or f"user{counter['n']}@example.com",
            password=hash_password(password),
            permissions=list(permissions),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_item(db):
    def _make_item(title="Item", price=1000, owner=None, description=None):
        item = ItemModel(
            title=title,
            description=description or f"{title} description",
            price=price,
            image=f"{title.lower()}.jpg",
            large_image=f"{title.lower()}-large.jpg",
            user_id=owner.id if owner else None,
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _make_item


@pytest.fixture
def put_in_cart(db):
    def _put_in_cart(user, item, quantity=1):
        cart_item = CartItemModel(user_id=user.id, item_id=item.id, quantity=quantity)
        db.add(cart_item)
        db.commit()
        db.refresh(cart_item)
        return cart_item

    return _put_in_cart


@pytest.fixture
def login(client):
    def _login(user):
        client.cookies.set("token", issue_session_token(user.id))

    return _login
