from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from finance_api.api.errors import register_exception_handlers
from finance_api.api.routers import api_router
from finance_api.core.config import settings
from finance_api.db.init_db import ensure_seed_data
from finance_api.db.session import SessionLocal

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Personal Finance API")

origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")
register_exception_handlers(app)


@app.on_event("startup")
def on_startup() -> None:
    db = SessionLocal()
    try:
        ensure_seed_data(db)
    finally:
        db.close()
    logger.info("Personal Finance API started")
