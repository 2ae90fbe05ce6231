# backend/packhub/main.py
import os
import json
import logging

from fastapi import FastAPI, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

# load .env
from dotenv import load_dotenv, find_dotenv
load_dotenv(find_dotenv())

from packhub.core.db import get_db

# --- routers ---
from packhub.routers.users import router as users_router
from packhub.routers.suppliers import router as suppliers_router
from packhub.routers.inquiries import router as inquiries_router
from packhub.routers.quotes import router as quotes_router
from packhub.routers.messages import router as messages_router
from packhub.routers.ratings import router as ratings_router
from packhub.routers.attachments import router as attachments_router

# --- response envelopes ---
from packhub.core.api import ok, UTF8JSONResponse, install_error_handlers

from fastapi.middleware.cors import CORSMiddleware

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("packhub")

app = FastAPI(title="PackHub", default_response_class=UTF8JSONResponse)


# error envelope
install_error_handlers(app)


# -----------------------------
# CORS (.env)
# -----------------------------
def _parse_origins(env_val: str | None):
    if not env_val or env_val.strip() == "*":
        return ["*"]
    try:
        parsed = json.loads(env_val)
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
    except ValueError:
        pass
    return [s.strip() for s in env_val.split(",") if s.strip()]

ALLOWED_ORIGINS = _parse_origins(os.getenv("CORS_ALLOW_ORIGINS", "*"))
logger.info("CORS allow_origins = %s", ALLOWED_ORIGINS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---- health ----
@app.get("/health")
def health():
    return ok({"service": "PackHub"})

@app.get("/db-ping")
def db_ping(db: Session = Depends(get_db)):
    val = db.execute(text("SELECT 1")).scalar()
    return ok({"db": "ok", "select1": val})

@app.get("/__routes", include_in_schema=False)
def dump_routes():
    return [getattr(r, "path", str(r)) for r in app.routes]


# =========================
# Router registration
# =========================
app.include_router(users_router)          # /users
app.include_router(suppliers_router)      # /supplier-profiles, /suppliers/search
app.include_router(inquiries_router)      # /inquiries
app.include_router(quotes_router)         # /quotes
app.include_router(messages_router)       # /messages
app.include_router(ratings_router)        # /ratings
app.include_router(attachments_router)    # /attachments

logger.info("routes registered: %d", len(app.routes))
