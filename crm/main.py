import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401 - registers tables on Base
from .config import CORS_ORIGINS, LOG_LEVEL
from .database import Base, engine
from .domain.analytics import router as analytics_router
from .domain.business import router as business_router
from .domain.customers import router as customers_router
from .domain.surveys import router as surveys_router

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables created successfully")
    except Exception as e:
        # Ignore "already exists" errors from race conditions between workers
        error_msg = str(e)
        if "already exists" in error_msg or "duplicate key" in error_msg:
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title="Customer Pulse CRM API", version="1.0.0", lifespan=lifespan)


def jsonable_errors(errors: list) -> list:
    # pydantic puts the raised exception object in ctx, which is not serialisable
    cleaned = []
    for error in errors:
        error = dict(error)
        if "ctx" in error:
            error["ctx"] = {key: str(value) for key, value in error["ctx"].items()}
        cleaned.append(error)
    return cleaned


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return 422 with both the raw errors and a flat list of messages"""
    errors = exc.errors()
    logger.warning(f"Validation error for {request.url.path}: {errors}")
    messages = [
        f"{'.'.join(str(part) for part in error.get('loc', []) if part != 'body')}: {error.get('msg')}"
        for error in errors
    ]
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_errors(errors), "messages": messages},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"❌ {request.method} {request.url.path} - Unhandled error: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# CORS Configuration
logger.info(f"CORS allowed origins: {CORS_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Routes
app.include_router(customers_router)
app.include_router(surveys_router)
app.include_router(analytics_router)
app.include_router(business_router)


@app.get("/")
def root():
    return {"message": "Customer Pulse CRM API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
