"""Shared test fixtures: in-memory database, seeded masters, Flask client."""
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import refurb_pricing.models  # noqa: F401  注册全部表
from refurb_pricing.db.base import Base
from refurb_pricing.models.product import Product
from refurb_pricing.models.spare_part import SparePart


@pytest.fixture
def engine():
    """One in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def product_factory(db):
    """Insert a Product master; keyword arguments override the defaults."""
    def create(**overrides):
        values = {
            "id": str(uuid4()),
            "make": "Dell",
            "model_number": "Latitude 5420",
            "cpu": "i5",
            "generation": "11th",
            "product_name": "Laptop",
            "ram": "8GB",
            "hdd": None,
            "ssd": "256GB",
            "sale_price": Decimal("30000.00"),
        }
        values.update(overrides)
        product = Product(**values)
        db.add(product)
        db.commit()
        return product
    return create


@pytest.fixture
def spare_part_factory(db):
    """Insert a SparePart master; unspecified component prices stay NULL."""
    def create(**overrides):
        values = {
            "id": str(uuid4()),
            "make": "Dell",
            "model_number": "Latitude 5420",
            "cpu": "i5",
            "generation": "11th",
            "product_name": "Laptop",
        }
        values.update(overrides)
        part = SparePart(**values)
        db.add(part)
        db.commit()
        return part
    return create


@pytest.fixture
def client(tmp_path, monkeypatch):
    """Flask test client backed by a temporary SQLite file."""
    from refurb_pricing.app_factory import create_app
    from refurb_pricing.db.auto_init import auto_init
    from refurb_pricing.db.session import dispose_engine

    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'test_refurb.db'}")
    dispose_engine()
    auto_init()

    app = create_app({"TESTING": True})
    with app.test_client() as test_client:
        yield test_client

    dispose_engine()
