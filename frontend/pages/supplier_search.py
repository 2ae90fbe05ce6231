# frontend/pages/supplier_search.py
import os
import requests
import pandas as pd
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Supplier search", layout="wide")

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

def flatten(rows: list) -> pd.DataFrame:
    out = []
    for u in rows:
        p = u.get("supplier_profile") or {}
        out.append({
            "id": u["id"],
            "company": u["company_name"],
            "location": u["location"],
            "packaging": ", ".join(p.get("packaging_types", [])),
            "materials": ", ".join(p.get("materials", [])),
            "certifications": ", ".join(p.get("certifications", [])),
            "MOQ": p.get("min_order_quantity"),
            "days": p.get("delivery_time_days"),
            "price from": p.get("price_range_min"),
            "price to": p.get("price_range_max"),
            "personalization": p.get("personalization_available"),
        })
    return pd.DataFrame(out)

API_BASE, USER_ID = get_api_and_user()

st.title("🔎 Supplier search")
with st.sidebar:
    st.info(f"API: {API_BASE}")
    st.write("Acting user:", USER_ID or "❌ none (set it on Home)")

# ---------- Filters ----------
with st.form("search"):
    c1, c2, c3 = st.columns(3)
    types = c1.multiselect("Packaging types (any)", PACKAGING_TYPES)
    mats = c2.multiselect("Materials (any)", MATERIALS)
    certs = c3.multiselect("Certifications (all)", CERTIFICATIONS)
    location = c1.text_input("Location contains")
    max_moq = c2.number_input("Max. minimum order quantity (0 = any)", min_value=0, step=100, value=0)
    max_days = c3.number_input("Max. delivery days (0 = any)", min_value=0, step=1, value=0)
    max_price = c1.number_input("Max. unit price (0 = any)", min_value=0.0, step=0.05, format="%.2f", value=0.0)
    pers = c2.checkbox("Personalization required")
    do_search = st.form_submit_button("Search")

if do_search:
    filters = {
        "packaging_types": types or None,
        "materials": mats or None,
        "certifications": certs or None,
        "location": location or None,
        "max_min_order_quantity": int(max_moq) or None,
        "delivery_time_max_days": int(max_days) or None,
        "price_range_max": float(max_price) or None,
        "personalization_required": pers or None,
    }
    try:
        st.session_state["search_rows"] = post_json(f"{API_BASE}/suppliers/search", filters)
    except requests.HTTPError as e:
        st.error(f"Search failed: {error_text(e)}")
    except requests.RequestException as e:
        st.error(f"Network error: {e}")

rows = st.session_state.get("search_rows", [])
df = flatten(rows)
if df.empty:
    st.info("No suppliers to show.")
    st.stop()

st.dataframe(df, use_container_width=True, height=320)

# ---------- Send an inquiry to the selection ----------
st.markdown("---")
st.subheader("📨 Send an inquiry to selected suppliers")
chosen = st.multiselect(
    "Suppliers",
    options=df["id"].tolist(),
    format_func=lambda i: df.loc[df["id"] == i, "company"].iloc[0],
)
with st.form("bulk_inquiry"):
    c1, c2, c3 = st.columns(3)
    ptype = c1.selectbox("Packaging type", PACKAGING_TYPES)
    mat = c2.selectbox("Material", MATERIALS)
    qty = c3.number_input("Quantity", min_value=1, step=100, value=1000)
    need_pers = c1.checkbox("Personalization needed")
    bmin = c2.number_input("Budget from (0 = open)", min_value=0.0, step=0.05, format="%.2f")
    bmax = c3.number_input("Budget to (0 = open)", min_value=0.0, step=0.05, format="%.2f")
    desc = st.text_area("Description")
    send = st.form_submit_button("Send inquiry")

if send:
    if not USER_ID:
        st.error("Set the acting (buyer) user on Home first.")
    else:
        payload = {
            "buyer_id": USER_ID,
            "packaging_type": ptype,
            "material": mat,
            "quantity": int(qty),
            "personalization_needed": need_pers,
            "description": desc,
            "budget_min": float(bmin) or None,
            "budget_max": float(bmax) or None,
            "supplier_ids": [int(i) for i in chosen],
        }
        try:
            inq = post_json(f"{API_BASE}/inquiries", payload)
            toast(f"Inquiry #{inq['id']} sent to {len(chosen)} supplier(s)")
        except requests.HTTPError as e:
            st.error(f"Inquiry failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")
