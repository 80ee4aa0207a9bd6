"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from showcase.api.v1 import router as v1_router
from showcase.core.config import settings
from showcase.core.errors import (
    http_exception_handler,
    storage_error_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from showcase.core.log_config import configure_logging
from showcase.web.pages import PageRedirect, page_redirect_handler
from showcase.web.pages import router as pages_router

configure_logging()

app = FastAPI(
    title="Showcase API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(SQLAlchemyError, storage_error_handler)
app.add_exception_handler(PageRedirect, page_redirect_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)
app.include_router(pages_router)
