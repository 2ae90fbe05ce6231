# backend/tests/conftest.py
import os

# must be set before packhub.core.db is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from packhub.core.db import Base, engine, SessionLocal
from packhub import models  # noqa: F401
from packhub.services.user_service import create_user
from packhub.services.supplier_service import create_supplier_profile
from packhub.services.inquiry_service import create_inquiry


@pytest.fixture(autouse=True)
def schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(schema):
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(schema):
    from packhub.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def file_sessions(tmp_path):
    """Session factory on a file database; each session gets its own connection."""
    eng = create_engine(f"sqlite:///{tmp_path / 'shared.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=eng)
    yield sessionmaker(bind=eng, autocommit=False, autoflush=False)
    eng.dispose()


# ---------- factories ----------

def make_user(db, role="buyer", email=None, **kw):
    make_user.n += 1
    data = dict(
        email=email or f"{role}{make_user.n}@example.com",
        password="secret123",
        company_name=f"{role.title()} Co {make_user.n}",
        contact_person="Jane Doe",
        phone=None,
        role=role,
        location="Berlin, Germany",
        description=None,
        website=None,
    )
    data.update(kw)
    return create_user(db, **data)

make_user.n = 0


def make_profile(db, user_id, **kw):
    data = dict(
        user_id=user_id,
        packaging_types=["boxes"],
        materials=["cardboard"],
        min_order_quantity=100,
        personalization_available=False,
        price_range_min=None,
        price_range_max=None,
        delivery_time_days=10,
        certifications=[],
    )
    data.update(kw)
    return create_supplier_profile(db, **data)


def make_inquiry(db, buyer_id, supplier_ids=(), **kw):
    data = dict(
        buyer_id=buyer_id,
        packaging_type="boxes",
        material="cardboard",
        quantity=1000,
        personalization_needed=False,
        description="Shipping boxes",
        budget_min=None,
        budget_max=None,
        delivery_deadline=None,
        supplier_ids=list(supplier_ids),
    )
    data.update(kw)
    return create_inquiry(db, **data)


@pytest.fixture
def buyer(db):
    return make_user(db, "buyer")


@pytest.fixture
def supplier(db):
    return make_user(db, "supplier")
