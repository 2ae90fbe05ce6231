from packhub.core.db import SessionLocal
from packhub.models import User, SupplierProfile, Inquiry, InquirySupplier
from packhub.scripts import seed


def test_seed_is_idempotent(db):
    seed.run(SessionLocal)
    seed.run(SessionLocal)

    assert db.query(User).count() == len(seed.BUYERS) + len(seed.SUPPLIERS)
    assert db.query(SupplierProfile).count() == len(seed.SUPPLIERS)
    assert db.query(Inquiry).count() == 1
    assert db.query(InquirySupplier).count() == 1
    assert db.query(Inquiry).one().status == "pending"
