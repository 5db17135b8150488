"""
Back Office Ledger - FastAPI Application Entry Point

This is the main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import init_db, close_db
from app.utils.error_handling import setup_exception_handlers

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    logger.info(f"Environment: {settings.app_env}")

    # Initialize database (dev only - use migrations in production)
    if settings.is_development:
        await init_db()
        logger.info("Database tables initialized")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await close_db()
    logger.info("Database connections closed")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Back office ledger for clients, staff payouts, influencer payments and contract reminders",
    version="0.1.0",
    docs_url="/api/docs" if settings.is_development else None,
    redoc_url="/api/redoc" if settings.is_development else None,
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


# ===========================================
# HEALTH & INFO
# ===========================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "environment": settings.app_env,
        "version": "0.1.0",
    }


@app.get(f"/api/{settings.api_version}", tags=["API Info"])
async def api_root():
    """API version root with available endpoints."""
    return {
        "version": settings.api_version,
        "endpoints": {
            "accounts": f"/api/{settings.api_version}/accounts",
            "clients": f"/api/{settings.api_version}/clients",
            "staff": f"/api/{settings.api_version}/staff",
            "work_items": f"/api/{settings.api_version}/work-items",
            "staff_works": f"/api/{settings.api_version}/staff-works",
            "income": f"/api/{settings.api_version}/income",
            "expenses": f"/api/{settings.api_version}/expenses",
            "reminders": f"/api/{settings.api_version}/reminders",
            "influencers": f"/api/{settings.api_version}/influencers",
            "collaborations": f"/api/{settings.api_version}/collaborations",
            "payments": f"/api/{settings.api_version}/payments",
        },
    }


# ===========================================
# API ROUTERS
# ===========================================

from app.routers import (
    accounts,
    clients,
    collaborations,
    expenses,
    income,
    influencers,
    payments,
    reminders,
    staff,
    staff_works,
    work_items,
)

app.include_router(accounts.router, prefix="/api/v1/accounts", tags=["Accounts"])
app.include_router(clients.router, prefix="/api/v1/clients", tags=["Clients"])
app.include_router(staff.router, prefix="/api/v1/staff", tags=["Staff"])
app.include_router(work_items.router, prefix="/api/v1/work-items", tags=["Work Items"])
app.include_router(staff_works.router, prefix="/api/v1/staff-works", tags=["Staff Works"])
app.include_router(income.router, prefix="/api/v1/income", tags=["Income"])
app.include_router(expenses.router, prefix="/api/v1/expenses", tags=["Expenses"])
app.include_router(reminders.router, prefix="/api/v1/reminders", tags=["Reminders"])
app.include_router(influencers.router, prefix="/api/v1/influencers", tags=["Influencers"])
app.include_router(collaborations.router, prefix="/api/v1/collaborations", tags=["Collaborations"])
app.include_router(payments.router, prefix="/api/v1/payments", tags=["Payments"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=5120,
        reload=settings.is_development,
    )
