from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.exceptions import (
    CategoryError,
    ValidationError,
    DuplicateSlugError,
    NotFoundError,
    CategoryInUseError,
    HasSubcategoriesError,
)
from app.core.logging import setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.USE_MOCK_DATA:
        from app.db.session import create_db_and_tables
        create_db_and_tables()
    logger.info("Catalog API started (env=%s, mock_data=%s)", settings.ENV, settings.USE_MOCK_DATA)
    yield


app = FastAPI(
    title="Koshiro Catalog API",
    version="1.0.0",
    lifespan=lifespan
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Import routers after app creation to avoid circular imports
from app.api import categories, admin_categories

# Routers - all already have /api prefix
app.include_router(categories.router)
app.include_router(admin_categories.router)


def _error_response(status_code: int, exc: CategoryError) -> JSONResponse:
    logger.warning("%s: %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error_response(422, exc)


@app.exception_handler(DuplicateSlugError)
async def duplicate_slug_handler(request: Request, exc: DuplicateSlugError):
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return _error_response(status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(CategoryInUseError)
async def category_in_use_handler(request: Request, exc: CategoryInUseError):
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(HasSubcategoriesError)
async def has_subcategories_handler(request: Request, exc: HasSubcategoriesError):
    return _error_response(status.HTTP_409_CONFLICT, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies get the same {message, field} shape"""
    error = exc.errors()[0]
    loc = [part for part in error.get("loc", ()) if isinstance(part, str) and part != "body"]
    body = {"message": error.get("msg", "Invalid request")}
    if loc:
        body["field"] = loc[-1]
    return JSONResponse(status_code=422, content=body)


@app.get("/")
def root():
    return {"status": "ok", "service": "koshiro-catalog"}


@app.get("/api/health")
def health_check():
    return {
        "status": "healthy",
        "env": settings.ENV
    }
