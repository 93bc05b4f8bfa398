"""
Blood Bank Ledger Backend.

ARCHITECTURE:
- FastAPI: thin HTTP layer over the services
- Services: registration, donations, request fulfillment, reports
- SQLAlchemy: source of truth for donors, recipients, stock, donations, requests

CONSISTENCY MODEL:
- A donation and its stock increment commit together
- Fulfillment checks and takes stock under the blood group's lock,
  with conditional UPDATEs as the database-level guard
- Stock never goes below zero; insufficient stock means Rejected, not an error
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bloodbank.api.routes import donations, donors, recipients, reports, requests, stock
from bloodbank.core.config import settings
from bloodbank.core.exceptions import BloodBankError, BusinessError
from bloodbank.db.init_db import init_db

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging, create tables."""
    configure_logging()
    logger.info("Initializing database...")
    init_db()
    logger.info(f"Blood bank ledger ready (environment={settings.ENVIRONMENT})")
    yield
    logger.info("Blood bank ledger shutting down")


app = FastAPI(
    title="Blood Bank Ledger API",
    description="Donors, recipients, donations and request fulfillment against per-group stock.",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "Origin"],
    max_age=600,
)


@app.exception_handler(BloodBankError)
async def handle_domain_error(request: Request, exc: BloodBankError):
    http_exc = BusinessError.from_domain(exc)
    return JSONResponse(
        status_code=http_exc.status_code,
        content={"detail": http_exc.detail},
        headers=http_exc.headers,
    )


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    http_exc = BusinessError.server_error(exc)
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


app.include_router(donors.router, prefix="/donors", tags=["donors"])
app.include_router(recipients.router, prefix="/recipients", tags=["recipients"])
app.include_router(donations.router, prefix="/donations", tags=["donations"])
app.include_router(requests.router, prefix="/requests", tags=["requests"])
app.include_router(stock.router, prefix="/stock", tags=["stock"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])


@app.get("/health")
def health():
    return {"status": "ok"}
