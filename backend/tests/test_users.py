import pytest
from fastapi import HTTPException
from sqlalchemy import event

from packhub.core.security import verify_password
from packhub.models import User
from packhub.services.user_service import create_user, update_user_profile, get_user_profile
from packhub.services.rating_service import create_rating
from conftest import make_user, make_profile


def test_create_user_hashes_password_and_normalises_email(db):
    u = make_user(db, "buyer", email="  Buyer@Example.COM ")
    assert u.id is not None
    assert u.email == "buyer@example.com"
    assert u.password_hash != "secret123"
    assert verify_password("secret123", u.password_hash)


def test_create_user_duplicate_email_conflict(db):
    make_user(db, "buyer", email="dup@example.com")
    with pytest.raises(HTTPException) as ei:
        make_user(db, "supplier", email="DUP@example.com")
    assert ei.value.status_code == 409
    assert "already exists" in ei.value.detail


def test_create_user_concurrent_same_email_conflicts(file_sessions):
    first, second = file_sessions(), file_sessions()
    try:
        # the other signup lands between our email check and our insert
        event.listen(first, "before_flush",
                     lambda *_: make_user(second, "buyer", email="race@example.com"), once=True)

        with pytest.raises(HTTPException) as ei:
            make_user(first, "supplier", email="race@example.com")
        assert ei.value.status_code == 409
        assert ei.value.detail == "User with email 'race@example.com' already exists"

        assert [u.role for u in first.query(User).filter_by(email="race@example.com")] == ["buyer"]
    finally:
        first.close()
        second.close()


def test_update_user_profile_only_touches_given_fields(db):
    u = make_user(db, "buyer", phone="+49 1", website="https://a.example.com")
    before = u.updated_at

    out = update_user_profile(db, user_id=u.id, changes={"company_name": "Renamed", "phone": None})
    assert out.company_name == "Renamed"
    assert out.phone is None
    assert out.website == "https://a.example.com"
    assert out.contact_person == "Jane Doe"
    assert out.updated_at >= before


def test_update_user_profile_unknown_user(db):
    with pytest.raises(HTTPException) as ei:
        update_user_profile(db, user_id=999, changes={"location": "x"})
    assert ei.value.status_code == 404


def test_get_user_profile_unknown_is_none(db):
    assert get_user_profile(db, 12345) is None


def test_get_user_profile_buyer_has_no_optional_keys(db, buyer):
    p = get_user_profile(db, buyer.id)
    assert p["id"] == buyer.id
    assert "password_hash" not in p
    assert "supplier_profile" not in p
    assert "rating_stats" not in p


def test_get_user_profile_supplier_with_profile_and_ratings(db, buyer, supplier):
    make_profile(db, supplier.id, price_range_min="1.00", price_range_max="2.50")
    create_rating(db, rater_id=buyer.id, rated_id=supplier.id, inquiry_id=None, rating=4, comment=None)
    create_rating(db, rater_id=buyer.id, rated_id=supplier.id, inquiry_id=None, rating=5, comment="great")

    p = get_user_profile(db, supplier.id)
    assert p["supplier_profile"].user_id == supplier.id
    assert p["rating_stats"] == {"average_rating": 4.5, "total_ratings": 2}


def test_api_create_and_fetch_profile(client):
    r = client.post("/users", json={
        "email": "api@example.com",
        "password": "secret123",
        "company_name": "API Co",
        "contact_person": "Ann",
        "role": "buyer",
        "location": "Paris",
    })
    assert r.status_code == 201
    body = r.json()
    assert "password_hash" not in body and "password" not in body
    uid = body["id"]

    r = client.get(f"/users/{uid}/profile")
    assert r.status_code == 200
    prof = r.json()
    assert prof["email"] == "api@example.com"
    assert "supplier_profile" not in prof
    assert "rating_stats" not in prof

    r = client.get("/users/999/profile")
    assert r.status_code == 200
    assert r.json() is None


def test_api_patch_rejects_null_for_required_field(client):
    r = client.post("/users", json={
        "email": "p@example.com", "password": "secret123", "company_name": "P",
        "contact_person": "P", "role": "supplier", "location": "Rome",
        "website": "https://p.example.com",
    })
    uid = r.json()["id"]

    r = client.patch(f"/users/{uid}", json={"company_name": None})
    assert r.status_code == 422
    assert r.json()["ok"] is False

    r = client.patch(f"/users/{uid}", json={"website": None})
    assert r.status_code == 200
    assert r.json()["website"] is None
    assert r.json()["company_name"] == "P"


def test_api_duplicate_email_envelope(client):
    payload = {
        "email": "twice@example.com", "password": "secret123", "company_name": "T",
        "contact_person": "T", "role": "buyer", "location": "Oslo",
    }
    assert client.post("/users", json=payload).status_code == 201
    r = client.post("/users", json=payload)
    assert r.status_code == 409
    assert r.json() == {"ok": False, "error": "User with email 'twice@example.com' already exists"}
