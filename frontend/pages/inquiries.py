# frontend/pages/inquiries.py
import os
import datetime as dt
import requests
import pandas as pd
import streamlit as st
import altair as alt
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Inquiries", layout="wide")

PACKAGING_TYPES = ["boxes", "bottles", "bags", "containers", "labels", "pouches",
                   "tubes", "cans", "jars", "wrapping", "other"]
MATERIALS = ["cardboard", "plastic", "glass", "metal", "paper", "fabric",
             "wood", "biodegradable", "recyclable", "compostable", "other"]
STATUSES = ["pending", "responded", "closed"]

# ---------- Helpers ----------
def get_api_and_user():
    api_base = st.session_state.get("api_base") or os.getenv("API_BASE", "http://127.0.0.1:8000")
    return api_base.rstrip("/"), int(st.session_state.get("user_id") or 0)

def get_json(url: str):
    r = requests.get(url, timeout=20)
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

st.title("📋 Inquiries")
with st.sidebar:
    st.info(f"API: {API_BASE}")
    st.write("Acting user:", USER_ID or "❌ none (set it on Home)")

if not USER_ID:
    st.stop()

try:
    me = get_json(f"{API_BASE}/users/{USER_ID}/profile")
except requests.RequestException as e:
    st.error(f"User could not be loaded: {e}")
    st.stop()
if me is None:
    st.warning(f"User {USER_ID} does not exist.")
    st.stop()

ROLE = me["role"]

# ---------- Buyer: new inquiry ----------
if ROLE == "buyer":
    st.subheader("🆕 New inquiry")
    with st.form("new_inquiry"):
        c1, c2, c3 = st.columns(3)
        ptype = c1.selectbox("Packaging type", PACKAGING_TYPES)
        mat = c2.selectbox("Material", MATERIALS)
        qty = c3.number_input("Quantity", min_value=1, step=100, value=1000)
        bmin = c1.number_input("Budget from (0 = open)", min_value=0.0, step=0.05, format="%.2f")
        bmax = c2.number_input("Budget to (0 = open)", min_value=0.0, step=0.05, format="%.2f")
        deadline = c3.date_input("Delivery deadline", value=None)
        need_pers = c1.checkbox("Personalization needed")
        ids_raw = c2.text_input("Supplier ids (comma separated)")
        desc = st.text_area("Description")
        create = st.form_submit_button("Create")

    if create:
        try:
            supplier_ids = [int(x) for x in ids_raw.split(",") if x.strip()]
        except ValueError:
            st.error("Supplier ids must be numbers.")
            st.stop()
        payload = {
            "buyer_id": USER_ID,
            "packaging_type": ptype,
            "material": mat,
            "quantity": int(qty),
            "personalization_needed": need_pers,
            "description": desc,
            "budget_min": float(bmin) or None,
            "budget_max": float(bmax) or None,
            "delivery_deadline": dt.datetime.combine(deadline, dt.time()).isoformat() if deadline else None,
            "supplier_ids": supplier_ids,
        }
        try:
            inq = post_json(f"{API_BASE}/inquiries", payload)
            toast(f"Inquiry #{inq['id']} created")
        except requests.HTTPError as e:
            st.error(f"Inquiry failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")
    st.markdown("---")

# ---------- List ----------
st.subheader("📬 My inquiries" if ROLE == "buyer" else "📥 Inquiries sent to me")
list_url = f"{API_BASE}/inquiries/{'buyer' if ROLE == 'buyer' else 'supplier'}/{USER_ID}"
try:
    df = pd.DataFrame(get_json(list_url))
except requests.RequestException as e:
    st.error(f"Inquiries could not be loaded: {e}")
    st.stop()

if df.empty:
    st.info("No inquiries yet.")
    st.stop()

cols = ["id", "status", "packaging_type", "material", "quantity", "budget_min", "budget_max",
        "delivery_deadline", "personalization_needed", "created_at"]
st.dataframe(df[[c for c in cols if c in df.columns]], use_container_width=True, height=280)

inquiry_id = st.selectbox("Inquiry", df["id"].tolist())
row = df.loc[df["id"] == inquiry_id].iloc[0]
st.write(row["description"])

# ---------- Quotes ----------
st.subheader("💶 Quotes")
try:
    quotes = get_json(f"{API_BASE}/quotes/inquiry/{int(inquiry_id)}")
    if quotes:
        qdf = pd.DataFrame([{
            "supplier": q["supplier"]["company_name"],
            "location": q["supplier"]["location"],
            "unit price": q["price_per_unit"],
            "total": q["total_price"],
            "days": q["delivery_time_days"],
            "notes": q.get("notes"),
            "created": q["created_at"],
        } for q in quotes])
        st.dataframe(qdf, use_container_width=True, height=220)

        chart = (
            alt.Chart(qdf)
            .mark_bar()
            .encode(
                x=alt.X("unit price:Q", title="Price per unit"),
                y=alt.Y("supplier:N", sort="x", title="Supplier"),
                tooltip=["supplier", "unit price", "total", "days"]
            )
        )
        st.altair_chart(chart, use_container_width=True)
    else:
        st.info("No quotes yet.")
except requests.RequestException as e:
    st.error(f"Quotes could not be loaded: {e}")

if ROLE == "supplier":
    with st.form("quote"):
        c1, c2, c3 = st.columns(3)
        ppu = c1.number_input("Price per unit", min_value=0.01, step=0.01, format="%.2f", value=1.00)
        total = c2.number_input("Total price", min_value=0.01, step=1.0, format="%.2f",
                                value=float(row["quantity"]) * 1.00)
        days = c3.number_input("Delivery time (days)", min_value=1, step=1, value=14)
        notes = st.text_area("Notes")
        send = st.form_submit_button("Submit quote")
    if send:
        payload = {
            "inquiry_id": int(inquiry_id),
            "supplier_id": USER_ID,
            "price_per_unit": float(ppu),
            "total_price": float(total),
            "delivery_time_days": int(days),
            "notes": notes or None,
        }
        try:
            post_json(f"{API_BASE}/quotes", payload)
            toast("Quote submitted")
        except requests.HTTPError as e:
            st.error(f"Quote failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")

# ---------- Status ----------
if ROLE == "buyer":
    st.subheader("🔁 Status")
    current = row["status"]
    # only forward moves are offered
    options = STATUSES[STATUSES.index(current):]
    c1, c2 = st.columns([2, 1])
    new_status = c1.selectbox("New status", options)
    if c2.button("Update status"):
        try:
            post_json(f"{API_BASE}/inquiries/{int(inquiry_id)}/status", {"status": new_status})
            toast(f"Inquiry #{inquiry_id}: {current} → {new_status}")
        except requests.HTTPError as e:
            st.error(f"Status update failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")
