"""Application factory and top-level wiring for the IT asset dashboard.

This module brings together configuration, database setup, static files,
routers and error handling. Importing it gives you the ready-to-serve
``app``; ``asset_dashboard.main`` adds logging and metrics on top.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .core.errors import http_exception_handler, validation_exception_handler
from .db.session import Base, engine
from .middlewares import RequestIdMiddleware

# Importing the SQLAlchemy models registers them with the metadata. Without
# this step ``Base.metadata.create_all`` would not know about our tables.
from . import models as _models  # noqa: F401

# ---------- App init ----------
app = FastAPI(title=settings.APP_NAME)

# Static assets for the server-rendered pages.
app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")

# ---------- DB init ----------
# The schema is owned elsewhere in production; create_all only fills in
# missing tables for fresh development databases and tests.
if settings.CREATE_TABLES:
    Base.metadata.create_all(bind=engine)

# ---------- Middleware ----------
app.add_middleware(RequestIdMiddleware)

# ---------- Routers ----------
from .routers import ui as ui_router  # noqa: E402

app.include_router(ui_router.router)

from .routers import api_devices as api_devices_router  # noqa: E402

app.include_router(api_devices_router.router)

from .routers import api_software as api_software_router  # noqa: E402

app.include_router(api_software_router.router)

# ---------- Exception handling ----------
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


__all__ = ["app"]
