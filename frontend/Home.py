# frontend/Home.py
import os
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="PackHub", layout="wide")

DEFAULT_API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")

# no login: the acting user id is chosen here and sent with each request
if "user_id" not in st.session_state:
    st.session_state["user_id"] = 0

st.title("📦 PackHub")
st.caption("Packaging buyers meet packaging suppliers.")

# --------- Sidebar: settings / acting user / health ---------
with st.sidebar:
    st.header("Settings")
    api_base = st.text_input("API base", value=DEFAULT_API_BASE, key="api_base")

    st.divider()
    st.subheader("Acting user")
    def _set_user():
        st.session_state["user_id"] = int(st.session_state["_acting_user"])
    st.number_input("User ID", min_value=0, step=1, value=int(st.session_state["user_id"]),
                    key="_acting_user", on_change=_set_user)

    st.divider()
    st.subheader("API health")
    def _health(api_base: str):
        try:
            h = requests.get(f"{api_base.rstrip('/')}/health", timeout=5)
            h.raise_for_status()
            return True, h.json()
        except requests.RequestException as e:
            return False, str(e)
    ok, payload = _health(api_base)
    if ok:
        st.success("API: OK")
    else:
        st.error(f"API unreachable: {payload}")

API_BASE = (api_base or DEFAULT_API_BASE).strip().rstrip("/")

def error_text(e: requests.HTTPError) -> str:
    # error envelope: {"ok": false, "error": "..."}
    try:
        body = e.response.json()
        return f"{e.response.status_code}: {body.get('error', body)}"
    except ValueError:
        return f"{e.response.status_code}: {e.response.text[:180]}"

# --------- Current user ---------
USER_ID = st.session_state["user_id"]
if USER_ID:
    try:
        r = requests.get(f"{API_BASE}/users/{USER_ID}/profile", timeout=15)
        r.raise_for_status()
        me = r.json()
        if me is None:
            st.warning(f"User {USER_ID} does not exist.")
        else:
            c1, c2, c3 = st.columns(3)
            c1.metric("Company", me["company_name"])
            c2.metric("Role", me["role"])
            unread = requests.get(f"{API_BASE}/messages/user/{USER_ID}/unread-count", timeout=15).json()
            c3.metric("Unread messages", unread.get("unread", 0))
            if "rating_stats" in me:
                st.write(f"⭐ {me['rating_stats']['average_rating']:.1f} "
                         f"({me['rating_stats']['total_ratings']} ratings)")
    except requests.RequestException as e:
        st.error(f"Could not load user: {e}")
else:
    st.info("Pick the acting user in the sidebar, or register a new company below.")

st.markdown("---")

# --------- Registration ---------
st.subheader("📝 Register a company")
with st.form("register"):
    c1, c2 = st.columns(2)
    email = c1.text_input("Email")
    password = c2.text_input("Password", type="password")
    company_name = c1.text_input("Company name")
    contact_person = c2.text_input("Contact person")
    role = c1.selectbox("Role", ["buyer", "supplier"])
    location = c2.text_input("Location")
    phone = c1.text_input("Phone (optional)")
    website = c2.text_input("Website (optional)")
    description = st.text_area("Description (optional)")
    submitted = st.form_submit_button("Register")

if submitted:
    payload = {
        "email": email,
        "password": password,
        "company_name": company_name,
        "contact_person": contact_person,
        "role": role,
        "location": location,
        "phone": phone or None,
        "website": website or None,
        "description": description or None,
    }
    try:
        r = requests.post(f"{API_BASE}/users", json=payload, timeout=20)
        r.raise_for_status()
        new_id = r.json()["id"]
        st.session_state["user_id"] = new_id
        st.success(f"Registered (user id={new_id}). You are now acting as this user.")
    except requests.HTTPError as e:
        st.error(f"Registration failed: {error_text(e)}")
    except requests.RequestException as e:
        st.error(f"Network error: {e}")
