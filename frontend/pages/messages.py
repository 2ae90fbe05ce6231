# frontend/pages/messages.py
import os
import requests
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Messages", layout="wide")

# ---------- Helpers ----------
def get_api_and_user():
    api_base = st.session_state.get("api_base") or os.getenv("API_BASE", "http://127.0.0.1:8000")
    return api_base.rstrip("/"), int(st.session_state.get("user_id") or 0)

def get_json(url: str, params: dict | None = None):
    r = requests.get(url, params=params, timeout=20)
    r.raise_for_status()
    return r.json()

def post_json(url: str, payload: dict):
    r = requests.post(url, json=payload, timeout=20)
    r.raise_for_status()
    return r.json()

def error_text(e: requests.HTTPError) -> str:
    try:
        return f"{e.response.status_code}: {e.response.json().get('error')}"
    except ValueError:
        return f"{e.response.status_code}: {e.response.text[:180]}"

def toast(msg: str, icon: str = "✅"):
    try: st.toast(msg, icon=icon)
    except Exception: st.success(msg)

API_BASE, USER_ID = get_api_and_user()

st.title("✉️ Messages")
with st.sidebar:
    st.info(f"API: {API_BASE}")
    st.write("Acting user:", USER_ID or "❌ none (set it on Home)")
    st.button("Refresh")

if not USER_ID:
    st.stop()

# ---------- Inbox / outbox ----------
try:
    msgs = get_json(f"{API_BASE}/messages/user/{USER_ID}")
except requests.RequestException as e:
    st.error(f"Messages could not be loaded: {e}")
    msgs = []

df = pd.DataFrame(msgs)
inbox_tab, outbox_tab = st.tabs(["Inbox", "Sent"])
with inbox_tab:
    inbox = df[df["recipient_id"] == USER_ID] if not df.empty else df
    if inbox.empty:
        st.info("Inbox is empty.")
    else:
        view = inbox.assign(unread=inbox["read_at"].isna())
        st.dataframe(view[["id", "sender_id", "inquiry_id", "subject", "sent_at", "unread"]],
                     use_container_width=True, height=260)

        unread_ids = inbox.loc[inbox["read_at"].isna(), "id"].tolist()
        if unread_ids:
            c1, c2 = st.columns([2, 1])
            mid = c1.selectbox("Unread message", unread_ids)
            picked = inbox.loc[inbox["id"] == mid].iloc[0]
            st.markdown(f"**{picked['subject']}**\n\n{picked['content']}")
            if c2.button("Mark as read"):
                try:
                    post_json(f"{API_BASE}/messages/{int(mid)}/read", {"user_id": USER_ID})
                    toast("Marked as read")
                except requests.HTTPError as e:
                    st.error(f"Failed: {error_text(e)}")
                except requests.RequestException as e:
                    st.error(f"Network error: {e}")

        # files attached to received messages
        with st.expander("Attachments"):
            att_mid = st.selectbox("Message", inbox["id"].tolist(), key="att_mid")
            try:
                atts = get_json(f"{API_BASE}/attachments", params={"message_id": int(att_mid)})
                if atts:
                    st.dataframe(pd.DataFrame(atts), use_container_width=True)
                else:
                    st.caption("None")
            except requests.RequestException as e:
                st.error(f"Attachments could not be loaded: {e}")

with outbox_tab:
    sent = df[df["sender_id"] == USER_ID] if not df.empty else df
    if sent.empty:
        st.info("Nothing sent yet.")
    else:
        st.dataframe(sent[["id", "recipient_id", "inquiry_id", "subject", "sent_at", "read_at"]],
                     use_container_width=True, height=260)

# ---------- Compose ----------
st.markdown("---")
st.subheader("📝 New message")
with st.form("compose", clear_on_submit=True):
    c1, c2 = st.columns(2)
    recipient_id = c1.number_input("Recipient user id", min_value=1, step=1)
    inquiry_id = c2.number_input("About inquiry (0 = none)", min_value=0, step=1)
    subject = st.text_input("Subject")
    content = st.text_area("Message")
    upload = st.file_uploader("Attachment (optional, max 10MB)")
    send = st.form_submit_button("Send")

if send:
    payload = {
        "sender_id": USER_ID,
        "recipient_id": int(recipient_id),
        "inquiry_id": int(inquiry_id) or None,
        "subject": subject,
        "content": content,
    }
    try:
        msg = post_json(f"{API_BASE}/messages", payload)
        if upload is not None:
            r = requests.post(
                f"{API_BASE}/attachments/upload",
                files={"file": (upload.name, upload.getvalue(), upload.type or "application/octet-stream")},
                data={"message_id": msg["id"]},
                timeout=60,
            )
            r.raise_for_status()
        toast(f"Message #{msg['id']} sent")
    except requests.HTTPError as e:
        st.error(f"Send failed: {error_text(e)}")
    except requests.RequestException as e:
        st.error(f"Network error: {e}")
