# frontend/pages/profile.py
import os
import requests
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Profile", layout="wide")

PACKAGING_TYPES = ["boxes", "bottles", "bags", "containers", "labels", "pouches",
                   "tubes", "cans", "jars", "wrapping", "other"]
MATERIALS = ["cardboard", "plastic", "glass", "metal", "paper", "fabric",
             "wood", "biodegradable", "recyclable", "compostable", "other"]
CERTIFICATIONS = ["fsc", "pefc", "iso14001", "iso9001", "brc", "fda",
                  "eu_organic", "cradle_to_cradle", "other"]

# ---------- Helpers ----------
def get_api_and_user():
    api_base = st.session_state.get("api_base") or os.getenv("API_BASE", "http://127.0.0.1:8000")
    return api_base.rstrip("/"), int(st.session_state.get("user_id") or 0)

def get_json(url: str):
    r = requests.get(url, timeout=20)
    r.raise_for_status()
    return r.json()

def send_json(method: str, url: str, payload: dict):
    r = requests.request(method, url, json=payload, timeout=20)
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

st.title("👤 Profile")
with st.sidebar:
    st.info(f"API: {API_BASE}")
    st.write("Acting user:", USER_ID or "❌ none (set it on Home)")

if not USER_ID:
    st.stop()

try:
    me = get_json(f"{API_BASE}/users/{USER_ID}/profile")
except requests.RequestException as e:
    st.error(f"Profile could not be loaded: {e}")
    st.stop()

if me is None:
    st.warning(f"User {USER_ID} does not exist.")
    st.stop()

# ---------- Company details ----------
st.subheader("🏢 Company")
with st.form("user_update"):
    c1, c2 = st.columns(2)
    company_name = c1.text_input("Company name", value=me["company_name"])
    contact_person = c2.text_input("Contact person", value=me["contact_person"])
    location = c1.text_input("Location", value=me["location"])
    phone = c2.text_input("Phone", value=me.get("phone") or "")
    website = c1.text_input("Website", value=me.get("website") or "")
    description = st.text_area("Description", value=me.get("description") or "")
    st.caption(f"Email: {me['email']} · Role: {me['role']}")
    save_user = st.form_submit_button("Save")

if save_user:
    payload = {
        "company_name": company_name,
        "contact_person": contact_person,
        "location": location,
        # empty optional fields are cleared
        "phone": phone or None,
        "website": website or None,
        "description": description or None,
    }
    try:
        send_json("PATCH", f"{API_BASE}/users/{USER_ID}", payload)
        toast("Profile saved")
    except requests.HTTPError as e:
        st.error(f"Save failed: {error_text(e)}")
    except requests.RequestException as e:
        st.error(f"Network error: {e}")

# ---------- Supplier capabilities ----------
if me["role"] == "supplier":
    st.markdown("---")
    st.subheader("🏭 Supplier profile")
    sp = me.get("supplier_profile") or {}

    with st.form("supplier_profile"):
        c1, c2 = st.columns(2)
        types = c1.multiselect("Packaging types", PACKAGING_TYPES, default=sp.get("packaging_types", []))
        mats = c2.multiselect("Materials", MATERIALS, default=sp.get("materials", []))
        certs = c1.multiselect("Certifications", CERTIFICATIONS, default=sp.get("certifications", []))
        moq = c2.number_input("Minimum order quantity", min_value=1, step=1, value=int(sp.get("min_order_quantity", 100)))
        days = c1.number_input("Delivery time (days)", min_value=1, step=1, value=int(sp.get("delivery_time_days", 14)))
        pers = c2.checkbox("Personalization available", value=bool(sp.get("personalization_available", False)))
        pmin = c1.number_input("Price per unit from", min_value=0.0, step=0.01, format="%.2f",
                               value=float(sp.get("price_range_min") or 0.0))
        pmax = c2.number_input("Price per unit up to", min_value=0.0, step=0.01, format="%.2f",
                               value=float(sp.get("price_range_max") or 0.0))
        save_sp = st.form_submit_button("Save supplier profile")

    if save_sp:
        payload = {
            "packaging_types": types,
            "materials": mats,
            "certifications": certs,
            "min_order_quantity": int(moq),
            "delivery_time_days": int(days),
            "personalization_available": pers,
            # 0 means "not specified"
            "price_range_min": float(pmin) or None,
            "price_range_max": float(pmax) or None,
        }
        try:
            if sp:
                send_json("PATCH", f"{API_BASE}/supplier-profiles/{sp['id']}", payload)
            else:
                send_json("POST", f"{API_BASE}/supplier-profiles", {"user_id": USER_ID, **payload})
            toast("Supplier profile saved")
        except requests.HTTPError as e:
            st.error(f"Save failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")

# ---------- Ratings ----------
st.markdown("---")
st.subheader("⭐ Ratings")
if "rating_stats" in me:
    c1, c2 = st.columns(2)
    c1.metric("Average", f"{me['rating_stats']['average_rating']:.2f}")
    c2.metric("Ratings", me["rating_stats"]["total_ratings"])
    try:
        df = pd.DataFrame(get_json(f"{API_BASE}/ratings/user/{USER_ID}"))
        st.dataframe(df, use_container_width=True, height=240)
    except requests.RequestException as e:
        st.error(f"Ratings could not be loaded: {e}")
else:
    st.info("No ratings yet.")
