from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from app.config import settings
from app.database import Database
from app.dependencies import get_role_store
from app.core.route_gate import RouteGateMiddleware
from app.features.auth.router import router as auth_router
from app.features.roles.router import router as roles_router
from app.features.roles.router import admin_router as admin_users_router
from app.features.records.router import router as records_router
from app.features.records.router import admin_router as admin_records_router
from app.features.reports.router import router as reports_router
from app.features.reports.router import asha_router as asha_reports_router
from app.shared.exceptions import ForbiddenException
from app.core.logging import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info(f"Starting {settings.APP_NAME}...")
    await Database.connect_db()

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await Database.close_db()
    logger.info("Application shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Role-gated village health reporting API",
    version="1.0.0",
    lifespan=lifespan,
)

# Route gate runs inside CORS so preflight requests are answered first
app.add_middleware(
    RouteGateMiddleware,
    role_store_provider=get_role_store,
    admin_prefixes=settings.ADMIN_ROUTE_PREFIXES,
    asha_prefixes=settings.ASHA_ROUTE_PREFIXES,
    redirect_url=settings.UNAUTHORIZED_REDIRECT_URL,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth_router, prefix=settings.API_V1_PREFIX)
app.include_router(roles_router, prefix=settings.API_V1_PREFIX)
app.include_router(admin_users_router, prefix=settings.API_V1_PREFIX)
app.include_router(records_router, prefix=settings.API_V1_PREFIX)
app.include_router(admin_records_router, prefix=settings.API_V1_PREFIX)
app.include_router(reports_router, prefix=settings.API_V1_PREFIX)
app.include_router(asha_reports_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
    }


@app.get("/unauthorized")
async def unauthorized():
    """Landing target for route gate redirects."""
    raise ForbiddenException("You do not have access to that page")
