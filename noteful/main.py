import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .db import ensure_schema
from .errors import register_error_handlers
from .login import router as login_router
from .users import router as users_router

log = logging.getLogger("noteful")


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _split_origins(val: str) -> list[str]:
    return [o.strip() for o in (val or "").split(",") if o.strip()]


ALLOWED_ORIGINS = _split_origins(os.getenv("ALLOWED_ORIGINS", ""))

app = FastAPI(title="Noteful API")


@app.on_event("startup")
def _startup():
    configure_logging()
    log.info("starting Noteful API")
    ensure_schema()


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if ALLOWED_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)


@app.get("/api/health")
def health():
    return {"ok": True}


app.include_router(users_router, prefix="/api")
app.include_router(login_router, prefix="/api")
