"""
Pytest configuration and fixtures for the gift marketplace tests.

Provides test database isolation and model factories.
"""
import os
import pathlib
import sys
from datetime import datetime
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

# Must be set before marketplace.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret")

# Use in-memory SQLite for tests to ensure complete isolation
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")

test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in TEST_DATABASE_URL else {},
    poolclass=StaticPool,
    echo=False
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create the schema once per test session."""
    from marketplace.db import Base
    from marketplace import models  # noqa: F401

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def db():
    """
    Provide a database session whose work is rolled back after each test.

    ``session.commit()`` inside the code under test does not commit the outer
    transaction, so nothing leaks between tests.
    """
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestingSessionLocal(bind=connection)

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()


def override_get_db(db_session):
    def _override():
        yield db_session
    return _override


@pytest.fixture(scope="function")
def client(setup_test_db, db):
    """FastAPI TestClient sharing the ``db`` session with the test."""
    from fastapi.testclient import TestClient
    from marketplace.db import get_db
    from marketplace.main import app

    app.dependency_overrides[get_db] = override_get_db(db)
    try:
        # raise_server_exceptions=False so unhandled errors become 500 responses
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


# ============================================
# Factories
# ============================================

@pytest.fixture
def make_user(db):
    """Create users; keyword arguments override the defaults."""
    from marketplace.models import User, UserRole, UserStatus

    counter = {"n": 0}

    def _make(**kwargs):
        counter["n"] += 1
        fields = {
            "email": f"user{counter['n']}@example.com",
            "display_name": f"User {counter['n']}",
            "role": UserRole.USER,
            "status": UserStatus.ACTIVE,
        }
        fields.update(kwargs)
        user = User(**fields)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make


@pytest.fixture
def make_business(db, make_user):
    """Create a business together with its owning business-role user."""
    from marketplace.models import Business, BusinessStatus, UserRole

    def _make(owner=None, **kwargs):
        if owner is None:
            owner = make_user(role=UserRole.BUSINESS)
        fields = {
            "owner_id": owner.id,
            "business_name": f"Shop of {owner.display_name}",
            "status": BusinessStatus.ACTIVE,
        }
        fields.update(kwargs)
        business = Business(**fields)
        db.add(business)
        db.commit()
        db.refresh(business)
        return business

    return _make


@pytest.fixture
def make_gift_order(db):
    """
    Create a gift order with metadata and line items.

    ``items`` is a list of (product name, quantity, unit price) tuples.
    """
    from marketplace.models import GiftOrderMetadata, Order, OrderItem, OrderStatus, Product

    def _make(
        business,
        order_id=None,
        code="ABC123",
        items=(("Rose bouquet", 1, "25.00"), ("Chocolate box", 2, "12.50")),
        recipient=("Amina Yusuf", "+1 555 123 4567", "ID-12345"),
        is_redeemed=False,
        status=OrderStatus.PROCESSING,
    ):
        total = sum((Decimal(price) * qty for _, qty, price in items), Decimal("0"))
        order = Order(
            business_id=business.id,
            status=status,
            total_amount=total,
            currency="USD",
            created_at=datetime(2024, 5, 1, 12, 0, 0),
        )
        if order_id is not None:
            order.id = order_id
        db.add(order)
        db.flush()

        for name, qty, price in items:
            product = Product(business_id=business.id, name=name, price=Decimal(price))
            db.add(product)
            db.flush()
            db.add(OrderItem(
                order_id=order.id,
                product_id=product.id,
                quantity=qty,
                unit_price=Decimal(price),
                total_price=Decimal(price) * qty,
            ))

        name, phone, national_id = recipient
        db.add(GiftOrderMetadata(
            order_id=order.id,
            redemption_code=code,
            recipient_name=name,
            recipient_phone=phone,
            recipient_national_id=national_id,
            sender_name="Sam Sender",
            sender_phone="+1 555 987 6543",
            is_redeemed=is_redeemed,
        ))
        db.commit()
        db.refresh(order)
        return order

    return _make


@pytest.fixture
def auth_headers():
    """Bearer headers for a user."""
    from marketplace.core.security import create_access_token

    def _headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers
