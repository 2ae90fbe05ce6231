# frontend/pages/ratings.py
import os
import requests
import pandas as pd
import streamlit as st
import plotly.graph_objects as go
from dotenv import load_dotenv

load_dotenv()
st.set_page_config(page_title="Ratings", layout="wide")

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

def _empty_fig(height=300, text="No data"):
    fig = go.Figure()
    fig.update_layout(margin=dict(l=10, r=10, t=30, b=10), height=height)
    fig.add_annotation(text=text, x=0.5, y=0.5, xref="paper", yref="paper", showarrow=False)
    return fig

API_BASE, USER_ID = get_api_and_user()

st.title("⭐ Ratings")
with st.sidebar:
    st.info(f"API: {API_BASE}")
    st.write("Acting user:", USER_ID or "❌ none (set it on Home)")

# ---------- Rate someone ----------
st.subheader("🗳️ Rate a business partner")
with st.form("rate", clear_on_submit=True):
    c1, c2, c3 = st.columns(3)
    rated_id = c1.number_input("User id to rate", min_value=1, step=1)
    inquiry_id = c2.number_input("Inquiry (0 = none)", min_value=0, step=1)
    stars = c3.slider("Rating", min_value=1, max_value=5, value=5)
    comment = st.text_area("Comment")
    send = st.form_submit_button("Submit rating")

if send:
    if not USER_ID:
        st.error("Set the acting user on Home first.")
    else:
        payload = {
            "rater_id": USER_ID,
            "rated_id": int(rated_id),
            "inquiry_id": int(inquiry_id) or None,
            "rating": int(stars),
            "comment": comment or None,
        }
        try:
            post_json(f"{API_BASE}/ratings", payload)
            toast("Rating saved")
        except requests.HTTPError as e:
            st.error(f"Rating failed: {error_text(e)}")
        except requests.RequestException as e:
            st.error(f"Network error: {e}")

# ---------- Received ratings ----------
st.markdown("---")
target = st.number_input("Show ratings received by user id", min_value=1, step=1, value=max(USER_ID, 1))
try:
    df = pd.DataFrame(get_json(f"{API_BASE}/ratings/user/{int(target)}"))
except requests.RequestException as e:
    st.error(f"Ratings could not be loaded: {e}")
    st.stop()

c1, c2 = st.columns([1, 1])
with c1:
    st.subheader("Distribution")
    if df.empty:
        st.plotly_chart(_empty_fig(), use_container_width=True, key="chart_ratings")
    else:
        counts = df["rating"].value_counts().reindex([1, 2, 3, 4, 5], fill_value=0)
        fig = go.Figure(data=[go.Bar(x=[f"{i}★" for i in counts.index], y=counts.values,
                                     text=counts.values, textposition="outside", texttemplate="%{text:.0f}")])
        fig.update_layout(margin=dict(l=10, r=10, t=30, b=10), height=300)
        st.plotly_chart(fig, use_container_width=True, key="chart_ratings")
        st.metric("Average", f"{df['rating'].mean():.2f}", help=f"{len(df)} ratings")

with c2:
    st.subheader("Received")
    if df.empty:
        st.info("No ratings yet.")
    else:
        st.dataframe(df[["rating", "comment", "rater_id", "inquiry_id", "created_at"]],
                     use_container_width=True, height=300)
        st.download_button("Download CSV", df.to_csv(index=False).encode("utf-8"),
                           f"ratings_user_{int(target)}.csv", "text/csv", key="dl_ratings")
