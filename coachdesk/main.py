"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import RedirectResponse

from coachdesk.api.dashboard import router as dashboard_router
from coachdesk.api.dependencies import GateRedirect
from coachdesk.api.v1.router import api_router
from coachdesk.core.config import settings
from coachdesk.core.logger import setup_logger

setup_logger(settings.LOG_LEVEL, settings.LOG_FILE)

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Questionnaires, workouts and rosters for trainers and their athletes.",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json")

# Include routers
app.include_router(api_router, prefix="/api/v1")
app.include_router(dashboard_router, prefix=settings.DASHBOARD_PREFIX, tags=["Dashboard"])


@app.exception_handler(GateRedirect)
async def gate_redirect_handler(request: Request, exc: GateRedirect):
    """Turn a gate denial into a 303, dropping the session cookie if it was signed out."""
    response = RedirectResponse(exc.location, status_code=status.HTTP_303_SEE_OTHER)
    if exc.signed_out:
        response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@app.get("/")
async def root():
    """Public entry point."""
    return {
        "message": "CoachDesk API",
        "version": settings.VERSION,
        "status": "healthy"
    }


@app.get("/login")
async def login_page():
    """Where unauthenticated dashboard requests land."""
    return {
        "message": "Sign in to continue",
        "login_url": "/api/v1/auth/login",
        "register_url": "/api/v1/auth/register"
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "coachdesk-api",
        "version": settings.VERSION
    }


@app.get("/info")
async def info():
    return {
        "project name": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "authors": settings.AUTHORS,
        "authors emails": settings.AUTHORS_EMAILS,
        "project url": settings.PROJECT_URL
    }
