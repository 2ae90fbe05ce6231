import pytest
from fastapi import HTTPException
from sqlalchemy import event
from sqlalchemy.exc import IntegrityError

from packhub.models import Rating
from packhub.services.rating_service import create_rating, get_ratings_for_user, rating_stats
from conftest import make_user, make_inquiry


def _rate(db, rater, rated, inquiry_id=None, rating=5, comment=None):
    return create_rating(db, rater_id=rater.id, rated_id=rated.id, inquiry_id=inquiry_id,
                         rating=rating, comment=comment)


def test_buyer_rates_supplier(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    r = _rate(db, buyer, supplier, inquiry_id=inq.id, rating=4, comment="on time")
    assert (r.rater_id, r.rated_id, r.inquiry_id, r.rating) == (buyer.id, supplier.id, inq.id, 4)


def test_duplicate_rating_for_same_inquiry_conflicts(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    other = make_inquiry(db, buyer.id, [supplier.id])
    _rate(db, buyer, supplier, inquiry_id=inq.id)

    with pytest.raises(HTTPException) as ei:
        _rate(db, buyer, supplier, inquiry_id=inq.id)
    assert ei.value.status_code == 409

    # another inquiry, the reverse direction, or no inquiry at all are fine
    _rate(db, buyer, supplier, inquiry_id=other.id)
    _rate(db, supplier, buyer, inquiry_id=inq.id)
    _rate(db, buyer, supplier)
    _rate(db, buyer, supplier)
    assert len(get_ratings_for_user(db, supplier.id)) == 4


def test_store_rejects_second_row_for_same_triple(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    _rate(db, buyer, supplier, inquiry_id=inq.id)

    db.add(Rating(rater_id=buyer.id, rated_id=supplier.id, inquiry_id=inq.id, rating=3))
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()


def test_concurrent_duplicate_rating_conflicts(file_sessions):
    setup = file_sessions()
    b = make_user(setup, "buyer")
    s = make_user(setup, "supplier")
    inq_id = make_inquiry(setup, b.id, [s.id]).id
    b_id, s_id = b.id, s.id
    setup.close()

    first, second = file_sessions(), file_sessions()
    try:
        # the other request stores the same triple after our duplicate check passed
        def store_other(*_):
            create_rating(second, rater_id=b_id, rated_id=s_id, inquiry_id=inq_id, rating=2, comment=None)
        event.listen(first, "before_flush", store_other, once=True)

        with pytest.raises(HTTPException) as ei:
            create_rating(first, rater_id=b_id, rated_id=s_id, inquiry_id=inq_id, rating=5, comment=None)
        assert ei.value.status_code == 409
        assert ei.value.detail == "Rating already exists for this inquiry between these users"

        rows = first.query(Rating).filter_by(rater_id=b_id, rated_id=s_id, inquiry_id=inq_id).all()
        assert [r.rating for r in rows] == [2]
    finally:
        first.close()
        second.close()


def test_same_role_rejected(db, buyer):
    other = make_user(db, "buyer")
    with pytest.raises(HTTPException) as ei:
        _rate(db, buyer, other)
    assert ei.value.status_code == 422
    assert ei.value.detail == "Rater and rated users must have different roles (buyer <-> supplier)"


def test_self_rating_rejected(db, buyer):
    with pytest.raises(HTTPException) as ei:
        _rate(db, buyer, buyer)
    assert ei.value.status_code == 422


def test_unknown_users_and_inquiry(db, buyer, supplier):
    with pytest.raises(HTTPException) as ei:
        create_rating(db, rater_id=buyer.id, rated_id=999, inquiry_id=None, rating=3, comment=None)
    assert ei.value.status_code == 404
    assert ei.value.detail == "One or both users do not exist"

    with pytest.raises(HTTPException) as ei:
        _rate(db, buyer, supplier, inquiry_id=999)
    assert ei.value.status_code == 404
    assert ei.value.detail == "Inquiry does not exist"


def test_ratings_for_user_newest_first_and_stats(db, buyer, supplier):
    assert rating_stats(db, supplier.id) is None

    r1 = _rate(db, buyer, supplier, rating=2)
    r2 = _rate(db, buyer, supplier, rating=5)
    assert [r.id for r in get_ratings_for_user(db, supplier.id)] == [r2.id, r1.id]
    assert rating_stats(db, supplier.id) == {"average_rating": 3.5, "total_ratings": 2}
    assert get_ratings_for_user(db, buyer.id) == []


def test_api_rating_out_of_range(client, db, buyer, supplier):
    r = client.post("/ratings", json={"rater_id": buyer.id, "rated_id": supplier.id, "rating": 6})
    assert r.status_code == 422

    r = client.post("/ratings", json={"rater_id": buyer.id, "rated_id": supplier.id, "rating": 1})
    assert r.status_code == 201
    assert client.get(f"/ratings/user/{supplier.id}").json()[0]["rating"] == 1
    assert client.get(f"/users/{supplier.id}/profile").json()["rating_stats"] == {
        "average_rating": 1.0, "total_ratings": 1,
    }
