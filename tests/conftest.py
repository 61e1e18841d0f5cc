import os

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_FILE"] = ""
os.environ["PURCHASE_REQUIRES_APPROVAL"] = "false"

from datetime import datetime  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from trackntoms.database import Base, get_db  # noqa: E402
from trackntoms.main import app  # noqa: E402
from trackntoms.staff.models import Staff  # noqa: E402
from trackntoms.stock.ingredients.models import Ingredient  # noqa: E402
from trackntoms.stock.items.models import Item  # noqa: E402
from trackntoms.suppliers.models import Supplier  # noqa: E402


PURCHASE_DATE = datetime(2026, 10, 1, 9, 30)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    SessionLocal = sessionmaker(autoflush=False, bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def ingredient_factory(db):
    def create_ingredient(**kwargs):
        defaults = {
            "name": "Ingredient",
            "unit": "kg",
            "quantity": Decimal("0"),
            "minimum_quantity": Decimal("0"),
        }
        defaults.update(kwargs)
        ingredient = Ingredient(**defaults)
        db.add(ingredient)
        db.commit()
        db.refresh(ingredient)
        return ingredient

    return create_ingredient


@pytest.fixture
def item_factory(db):
    def create_item(**kwargs):
        defaults = {
            "item_name": "Widget",
            "category": "Pastry",
            "base_price": Decimal("10.00"),
            "is_externally_sourced": True,
        }
        defaults.update(kwargs)
        item = Item(**defaults)
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return create_item


@pytest.fixture
def supplier(db):
    supplier = Supplier(company_name="Bean Traders", contact_person="Ana")
    db.add(supplier)
    db.commit()
    db.refresh(supplier)
    return supplier


@pytest.fixture
def staff(db):
    member = Staff(first_name="Carlo", last_name="Reyes", role="Cashier")
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def manager(db):
    member = Staff(first_name="Mina", last_name="Santos", role="Manager")
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


@pytest.fixture
def stock_of(db):
    """Committed quantity of an ingredient, re-read from the database."""

    def read(ingredient):
        db.refresh(ingredient)
        return ingredient.quantity

    return read
