"""
ClinicDesk Backend — pharmacy counter, inventory and OPD desk for a small clinic.

ARCHITECTURE:
- FastAPI routes: form handlers of the front-end, user-facing validation
- Services: catalog, sale ledger, procurement, scheduling, analytics
- AppState: every collection in memory, single writer
- SQLite (app_state table): one JSON snapshot per collection
- Groq LLM: optional business insights, never on the mutation path

Ledger rule: stock always moves together with the sale log.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinicdesk.api.routes import analytics, auth, insights, procurement, records, sales, scheduling
from clinicdesk.core.config import settings
from clinicdesk.db.init_db import init_db
from clinicdesk.db.session import SessionLocal, engine
from clinicdesk.services.insight_service import InsightGateway
from clinicdesk.services.state import AppState

logger = logging.getLogger(__name__)


def create_app(state: Optional[AppState] = None, gateway: Optional[InsightGateway] = None) -> FastAPI:
    """Build the API. Passing a state skips the database load (used by tests)."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup:
        1. Create the app_state table
        2. Load every collection, falling back to defaults per key
        """
        if state is None:
            logger.info("Loading clinic state...")
            app.state.clinic = init_db(engine, SessionLocal)
        else:
            app.state.clinic = state
        app.state.insight_gateway = gateway or InsightGateway()
        if not settings.GROQ_API_KEY and gateway is None:
            logger.warning("AI insights disabled (no GROQ_API_KEY)")
        yield
        logger.info("Clinic backend stopped")

    app = FastAPI(
        title="ClinicDesk API",
        description="Pharmacy sales ledger, inventory, appointments and AI insights.",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
        ],
        max_age=600,
    )

    @app.middleware("http")
    async def add_security_headers(request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    app.include_router(auth.router, prefix="/auth", tags=["auth"])
    app.include_router(records.router, prefix="/records", tags=["records"])
    app.include_router(sales.router, prefix="/sales", tags=["sales"])
    app.include_router(procurement.router, prefix="/purchase-orders", tags=["purchase-orders"])
    app.include_router(scheduling.router, prefix="/scheduling", tags=["scheduling"])
    app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
    app.include_router(insights.router, prefix="/insights", tags=["insights"])

    @app.get("/health")
    def health():
        return {"status": "ok", "ai_insights": bool(settings.GROQ_API_KEY)}

    return app


app = create_app()
