import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from petflow.core.config import settings
from petflow.core.exceptions import PetFlowError
from petflow.db.base import Base
from petflow.db.session import engine
import petflow.models  # noqa: F401

from petflow.api.routes import (
    auth,
    products,
    clients,
    pets,
    grooming,
    dashboard,
    marketing,
    menu,
)

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# ===============================
# CORS CONFIGURATION
# ===============================
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ===============================
# CREATE DATABASE TABLES
# ===============================
Base.metadata.create_all(bind=engine)

# ===============================
# ERROR HANDLERS
# ===============================
@app.exception_handler(PetFlowError)
async def petflow_error_handler(request: Request, exc: PetFlowError):
    if exc.status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning("Constraint violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(status_code=400, content={"detail": "Request conflicts with existing data"})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


# ===============================
# INCLUDE ROUTERS
# ===============================
app.include_router(auth.router)
app.include_router(products.router)
app.include_router(clients.router)
app.include_router(pets.router)
app.include_router(grooming.router)
app.include_router(dashboard.router)
app.include_router(marketing.router)
app.include_router(menu.router)

# ===============================
# ROOT ENDPOINT
# ===============================
@app.get("/")
def root():
    return {"status": "PetFlow backend running"}
