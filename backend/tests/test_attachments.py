import pytest
from fastapi import HTTPException

from packhub.domain.constants import MAX_FILE_SIZE
from packhub.routers import attachments as attachments_router
from packhub.services.attachment_service import upload_file_attachment, list_attachments
from packhub.services.message_service import create_message
from conftest import make_inquiry


def _attach(db, **kw):
    data = dict(filename="artwork.pdf", file_path="/files/artwork.pdf", file_size=2048,
                mime_type="application/pdf", inquiry_id=None, message_id=None)
    data.update(kw)
    return upload_file_attachment(db, **data)


def test_attachment_needs_an_owner(db):
    with pytest.raises(HTTPException) as ei:
        _attach(db)
    assert ei.value.status_code == 400
    assert ei.value.detail == "Either inquiry_id or message_id must be provided"


def test_attachment_over_ten_megabytes_rejected(db, buyer):
    inq = make_inquiry(db, buyer.id)
    with pytest.raises(HTTPException) as ei:
        _attach(db, inquiry_id=inq.id, file_size=11 * 1024 * 1024)
    assert ei.value.status_code == 400
    assert ei.value.detail == "File size exceeds maximum allowed size of 10MB"

    # exactly at the limit is fine
    assert _attach(db, inquiry_id=inq.id, file_size=MAX_FILE_SIZE).file_size == MAX_FILE_SIZE


@pytest.mark.parametrize("kw, detail", [
    ({"file_size": 0}, "File size must be greater than 0"),
    ({"mime_type": "application/zip"}, "File type application/zip is not allowed"),
    ({"filename": "   "}, "Filename cannot be empty"),
    ({"file_path": ""}, "File path cannot be empty"),
])
def test_attachment_input_rules(db, buyer, kw, detail):
    inq = make_inquiry(db, buyer.id)
    with pytest.raises(HTTPException) as ei:
        _attach(db, inquiry_id=inq.id, **kw)
    assert ei.value.status_code == 400
    assert ei.value.detail == detail


def test_attachment_owner_must_exist(db):
    with pytest.raises(HTTPException) as ei:
        _attach(db, inquiry_id=77)
    assert ei.value.status_code == 404

    with pytest.raises(HTTPException) as ei:
        _attach(db, message_id=78)
    assert ei.value.status_code == 404


def test_attachment_trims_and_lists(db, buyer, supplier):
    inq = make_inquiry(db, buyer.id, [supplier.id])
    msg = create_message(db, sender_id=buyer.id, recipient_id=supplier.id, inquiry_id=inq.id,
                         subject="drawing", content="see attached")

    a = _attach(db, inquiry_id=inq.id, filename="  drawing.png ", file_path=" /files/d.png ",
                mime_type="image/png")
    b = _attach(db, message_id=msg.id, mime_type="text/csv", filename="sizes.csv")
    assert (a.filename, a.file_path) == ("drawing.png", "/files/d.png")

    assert [x.id for x in list_attachments(db, inquiry_id=inq.id)] == [a.id]
    assert [x.id for x in list_attachments(db, message_id=msg.id)] == [b.id]


def test_api_multipart_upload(client, db, buyer, tmp_path, monkeypatch):
    monkeypatch.setattr(attachments_router, "UPLOAD_DIR", str(tmp_path))
    inq = make_inquiry(db, buyer.id)

    r = client.post(
        "/attachments/upload",
        files={"file": ("notes.txt", b"hello packaging", "text/plain")},
        data={"inquiry_id": str(inq.id)},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["filename"] == "notes.txt"
    assert body["file_size"] == len(b"hello packaging")
    with open(body["file_path"], "rb") as fh:
        assert fh.read() == b"hello packaging"

    r = client.get("/attachments", params={"inquiry_id": inq.id})
    assert [x["id"] for x in r.json()] == [body["id"]]


def test_api_multipart_upload_rejected_leaves_no_file(client, db, buyer, tmp_path, monkeypatch):
    monkeypatch.setattr(attachments_router, "UPLOAD_DIR", str(tmp_path))

    r = client.post(
        "/attachments/upload",
        files={"file": ("notes.txt", b"hello", "text/plain")},
        data={"inquiry_id": "999"},
    )
    assert r.status_code == 404
    assert list(tmp_path.iterdir()) == []

    r = client.post("/attachments/upload", files={"file": ("x.exe", b"MZ", "application/x-msdownload")})
    assert r.status_code == 400
    assert r.json()["error"] == "Either inquiry_id or message_id must be provided"
