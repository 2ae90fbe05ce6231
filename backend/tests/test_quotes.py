from decimal import Decimal

import pytest
from fastapi import HTTPException

from packhub.services.inquiry_service import get_inquiry, update_inquiry_status
from packhub.services.quote_service import create_quote, get_quotes_for_inquiry
from conftest import make_user, make_inquiry


def _quote(db, inquiry_id, supplier_id, ppu="1.20", total="1200.00", days=7, notes=None):
    return create_quote(
        db,
        inquiry_id=inquiry_id,
        supplier_id=supplier_id,
        price_per_unit=Decimal(ppu),
        total_price=Decimal(total),
        delivery_time_days=days,
        notes=notes,
    )


def test_bulk_inquiry_scenario(db, buyer):
    s1 = make_user(db, "supplier")
    s2 = make_user(db, "supplier")

    inq = make_inquiry(db, buyer.id, [s1.id, s2.id])
    assert inq.status == "pending"
    assert sorted(inq.supplier_ids) == sorted([s1.id, s2.id])

    _quote(db, inq.id, s1.id)
    assert get_inquiry(db, inq.id).status == "responded"

    _quote(db, inq.id, s2.id, ppu="1.10", total="1100.00")
    assert get_inquiry(db, inq.id).status == "responded"

    quotes = get_quotes_for_inquiry(db, inq.id)
    assert [q.supplier_id for q in quotes] == [s1.id, s2.id]


def test_quote_requires_invitation(db, buyer, supplier):
    outsider = make_user(db, "supplier")
    inq = make_inquiry(db, buyer.id, [supplier.id])

    with pytest.raises(HTTPException) as ei:
        _quote(db, inq.id, outsider.id)
    assert ei.value.status_code == 409
    assert ei.value.detail == f"Supplier {outsider.id} was not sent this inquiry"
    assert get_inquiry(db, inq.id).status == "pending"
    assert get_quotes_for_inquiry(db, inq.id) == []


def test_quote_requires_supplier_role(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    with pytest.raises(HTTPException) as ei:
        _quote(db, inq.id, buyer.id)
    assert ei.value.status_code == 422


def test_quote_unknown_inquiry_and_supplier(db, supplier):
    with pytest.raises(HTTPException) as ei:
        _quote(db, 999, supplier.id)
    assert ei.value.status_code == 404

    with pytest.raises(HTTPException) as ei:
        _quote(db, 1, 999)
    assert ei.value.status_code == 404


def test_quote_on_closed_inquiry_keeps_status(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    update_inquiry_status(db, inquiry_id=inq.id, new_status="closed")

    _quote(db, inq.id, supplier.id)
    assert get_inquiry(db, inq.id).status == "closed"


def test_failed_quote_insert_rolls_back_status_flip(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])

    # the status UPDATE runs first; the quote row trips its CHECK at commit
    with pytest.raises(HTTPException) as ei:
        _quote(db, inq.id, supplier.id, days=0)
    assert ei.value.status_code == 400

    assert get_inquiry(db, inq.id).status == "pending"
    assert get_quotes_for_inquiry(db, inq.id) == []


def test_quotes_for_unknown_inquiry_is_empty(db):
    assert get_quotes_for_inquiry(db, 5) == []


def test_api_quotes_carry_supplier_block(client, db, buyer):
    s = make_user(db, "supplier", company_name="PackCorp", phone="+1-555", website="https://packcorp.example.com")
    inq = make_inquiry(db, buyer.id, [s.id])

    r = client.post("/quotes", json={
        "inquiry_id": inq.id, "supplier_id": s.id,
        "price_per_unit": "0.455", "total_price": 455, "delivery_time_days": 12,
        "notes": "incl. printing",
    })
    assert r.status_code == 201, r.text
    assert r.json()["price_per_unit"] == 0.46
    assert r.json()["total_price"] == 455.0

    r = client.get(f"/quotes/inquiry/{inq.id}")
    assert r.status_code == 200
    (q,) = r.json()
    assert q["supplier"] == {
        "id": s.id,
        "company_name": "PackCorp",
        "contact_person": "Jane Doe",
        "phone": "+1-555",
        "location": "Berlin, Germany",
        "website": "https://packcorp.example.com",
    }

    assert client.get(f"/inquiries/{inq.id}").json()["status"] == "responded"


def test_api_quote_rejects_non_positive_price(client, db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    r = client.post("/quotes", json={
        "inquiry_id": inq.id, "supplier_id": supplier.id,
        "price_per_unit": 0, "total_price": 10, "delivery_time_days": 1,
    })
    assert r.status_code == 422
