from contextlib import contextmanager
from decimal import Decimal
import logging

from sqlalchemy import select

from packhub.core.db import SessionLocal, utcnow
from packhub.core.security import hash_password
from packhub.models import User, SupplierProfile, Inquiry, InquirySupplier

logger = logging.getLogger(__name__)

# ---------- small helpers ----------

@contextmanager
def session_scope(factory=SessionLocal):
    """One-off session (rollback on error)."""
    db = factory()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_one(db, model, **by):
    """Fetch a row by unique fields (None if missing)."""
    return db.execute(select(model).filter_by(**by)).scalars().first()

def get_or_create(db, model, unique_by: dict, defaults: dict | None = None):
    """Look up by unique_by, create if missing (idempotent)."""
    inst = get_one(db, model, **unique_by)
    if inst:
        return inst, False
    data = {**unique_by, **(defaults or {})}
    inst = model(**data)
    db.add(inst)
    # caller commits
    return inst, True

# ---------- demo data (idempotent) ----------

DEMO_PASSWORD = "Passw0rd!"

BUYERS = [
    {
        "email": "buyer@example.com",
        "company_name": "ABC Manufacturing",
        "contact_person": "John Smith",
        "phone": "+1-555-0123",
        "location": "New York, USA",
        "description": "Food manufacturer looking for sustainable packaging",
        "website": "https://abc-manufacturing.example.com",
    },
]

SUPPLIERS = [
    {
        "user": {
            "email": "supplier@example.com",
            "company_name": "PackCorp Ltd",
            "contact_person": "Sarah Johnson",
            "phone": "+1-555-0456",
            "location": "Chicago, USA",
            "description": "Corrugated and folding boxes, FSC certified",
            "website": "https://packcorp.example.com",
        },
        "profile": {
            "packaging_types": ["boxes", "labels"],
            "materials": ["cardboard", "paper", "recyclable"],
            "min_order_quantity": 500,
            "personalization_available": True,
            "price_range_min": Decimal("0.45"),
            "price_range_max": Decimal("3.20"),
            "delivery_time_days": 14,
            "certifications": ["fsc", "iso9001"],
        },
    },
    {
        "user": {
            "email": "glass@example.com",
            "company_name": "ClearGlass GmbH",
            "contact_person": "Anna Keller",
            "phone": None,
            "location": "Munich, Germany",
            "description": "Glass bottles and jars for food and cosmetics",
            "website": None,
        },
        "profile": {
            "packaging_types": ["bottles", "jars"],
            "materials": ["glass"],
            "min_order_quantity": 2000,
            "personalization_available": False,
            "price_range_min": Decimal("0.80"),
            "price_range_max": Decimal("5.00"),
            "delivery_time_days": 21,
            "certifications": ["iso14001", "fda"],
        },
    },
]

def run(factory=SessionLocal):
    with session_scope(factory) as db:
        logger.info("seeding users and supplier profiles")
        now = utcnow()

        for b in BUYERS:
            get_or_create(
                db, User, {"email": b["email"]},
                defaults={**b, "role": "buyer", "password_hash": hash_password(DEMO_PASSWORD),
                          "created_at": now, "updated_at": now},
            )

        for s in SUPPLIERS:
            user, _ = get_or_create(
                db, User, {"email": s["user"]["email"]},
                defaults={**s["user"], "role": "supplier", "password_hash": hash_password(DEMO_PASSWORD),
                          "created_at": now, "updated_at": now},
            )
            db.flush()  # need user.id
            get_or_create(
                db, SupplierProfile, {"user_id": user.id},
                defaults={**s["profile"], "created_at": now, "updated_at": now},
            )

    # related rows in their own transaction
    with session_scope(factory) as db:
        logger.info("seeding a demo inquiry")
        buyer = get_one(db, User, email="buyer@example.com")
        supplier = get_one(db, User, email="supplier@example.com")
        desc = "Custom printed shipping boxes, 30x20x10 cm"

        if buyer and not get_one(db, Inquiry, buyer_id=buyer.id, description=desc):
            now = utcnow()
            inq = Inquiry(
                buyer_id=buyer.id,
                packaging_type="boxes",
                material="cardboard",
                quantity=5000,
                personalization_needed=True,
                description=desc,
                budget_min=Decimal("0.50"),
                budget_max=Decimal("1.50"),
                status="pending",
                created_at=now,
                updated_at=now,
            )
            db.add(inq)
            db.flush()  # need inquiry id
            if supplier:
                db.add(InquirySupplier(inquiry_id=inq.id, supplier_id=supplier.id, sent_at=now))

    logger.info("seed done")

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run()
