import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from memoapp.shared.config import settings
from memoapp.shared.db import DatabaseNotConfigured, init_db
from memoapp.shared.http import ApiError, api_error_handler, validation_error_handler
from memoapp.shared.log import configure_logging

# import models so they register with Base.metadata
from memoapp.memos import models as memos_models  # noqa: F401

# Routers Import
from memoapp.memos.api import router as memos_router
from memoapp.summarize.api import router as summarize_router

configure_logging()
logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Memos", "description": "Create, list, edit, categorize, tag and delete memos"},
    {"name": "Summarize", "description": "AI summary of memo content"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="Memo Notes",
    version="0.1.0",
    description="Personal memos with optional AI summaries.",
    openapi_tags=TAGS_METADATA,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ApiError, api_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

@app.exception_handler(DatabaseNotConfigured)
async def _db_not_configured(request: Request, exc: DatabaseNotConfigured):
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.on_event("startup")
def _init_db():
    # a missing database only breaks the memo routes; summarize keeps working
    try:
        init_db()
    except DatabaseNotConfigured as e:
        logger.error("memo storage disabled: %s", e)

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# Routers
app.include_router(memos_router)
app.include_router(summarize_router)
