import pytest
from fastapi import HTTPException
from packhub.models import Message
from packhub.services.message_service import (
    create_message, get_messages_for_user, count_unread_messages, mark_message_as_read,
)
from conftest import make_user, make_inquiry


def _send(db, sender, recipient, inquiry_id=None, subject="Hello"):
    return create_message(
        db, sender_id=sender.id, recipient_id=recipient.id, inquiry_id=inquiry_id,
        subject=subject, content="About your quote",
    )


def test_create_message_starts_unread(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    m = _send(db, buyer, supplier, inquiry_id=inq.id)
    assert m.read_at is None
    assert m.inquiry_id == inq.id


@pytest.mark.parametrize("which, detail", [
    ("sender", "Sender with id 999 does not exist"),
    ("recipient", "Recipient with id 999 does not exist"),
    ("inquiry", "Inquiry with id 999 does not exist"),
])
def test_create_message_unknown_references(db, buyer, supplier, which, detail):
    kw = dict(sender_id=buyer.id, recipient_id=supplier.id, inquiry_id=None, subject="s", content="c")
    kw[{"sender": "sender_id", "recipient": "recipient_id", "inquiry": "inquiry_id"}[which]] = 999
    with pytest.raises(HTTPException) as ei:
        create_message(db, **kw)
    assert ei.value.status_code == 404
    assert ei.value.detail == detail


def test_messages_for_user_sent_and_received_newest_first(db, buyer, supplier):
    third = make_user(db, "supplier")
    m1 = _send(db, buyer, supplier, subject="one")
    m2 = _send(db, supplier, buyer, subject="two")
    _send(db, third, supplier, subject="not mine")

    assert [m.id for m in get_messages_for_user(db, buyer.id)] == [m2.id, m1.id]


def test_mark_read_is_idempotent(db, buyer, supplier):
    m = _send(db, buyer, supplier)
    assert count_unread_messages(db, supplier.id) == 1

    first = mark_message_as_read(db, message_id=m.id, user_id=supplier.id)
    stamp = first.read_at
    assert stamp is not None

    again = mark_message_as_read(db, message_id=m.id, user_id=supplier.id)
    assert again.read_at == stamp
    assert count_unread_messages(db, supplier.id) == 0


def test_mark_read_only_by_recipient(db, buyer, supplier):
    m = _send(db, buyer, supplier)
    for intruder in (buyer.id, 999):
        with pytest.raises(HTTPException) as ei:
            mark_message_as_read(db, message_id=m.id, user_id=intruder)
        assert ei.value.status_code == 403

    # already read: the sender is still refused
    mark_message_as_read(db, message_id=m.id, user_id=supplier.id)
    with pytest.raises(HTTPException) as ei:
        mark_message_as_read(db, message_id=m.id, user_id=buyer.id)
    assert ei.value.status_code == 403


def test_mark_read_unknown_message(db, supplier):
    with pytest.raises(HTTPException) as ei:
        mark_message_as_read(db, message_id=404, user_id=supplier.id)
    assert ei.value.status_code == 404
    assert ei.value.detail == "Message not found"


def test_mark_read_with_stale_session_keeps_first_timestamp(file_sessions):
    # the late session still sees the row unread
    setup = file_sessions()
    a = make_user(setup, "buyer")
    b = make_user(setup, "supplier")
    msg_id = _send(setup, a, b).id
    b_id = b.id
    setup.close()

    first, late = file_sessions(), file_sessions()
    try:
        stale = late.get(Message, msg_id)
        assert stale.read_at is None

        winner = mark_message_as_read(first, message_id=msg_id, user_id=b_id).read_at
        loser = mark_message_as_read(late, message_id=msg_id, user_id=b_id).read_at
        assert loser == winner
    finally:
        first.close()
        late.close()


def test_api_messages_flow(client, db, buyer, supplier):
    r = client.post("/messages", json={
        "sender_id": buyer.id, "recipient_id": supplier.id,
        "subject": "Samples", "content": "Can you send samples?",
    })
    assert r.status_code == 201
    mid = r.json()["id"]

    assert client.get(f"/messages/user/{supplier.id}/unread-count").json() == {"user_id": supplier.id, "unread": 1}

    r = client.post(f"/messages/{mid}/read", json={"user_id": buyer.id})
    assert r.status_code == 403
    assert r.json()["error"] == "User is not authorized to mark this message as read"

    r = client.post(f"/messages/{mid}/read", json={"user_id": supplier.id})
    assert r.status_code == 200
    assert r.json()["read_at"] is not None

    assert client.get(f"/messages/user/{supplier.id}/unread-count").json()["unread"] == 0
    assert [m["id"] for m in client.get(f"/messages/user/{buyer.id}").json()] == [mid]


def test_api_message_requires_subject(client, db, buyer, supplier):
    r = client.post("/messages", json={
        "sender_id": buyer.id, "recipient_id": supplier.id, "subject": "", "content": "x",
    })
    assert r.status_code == 422
