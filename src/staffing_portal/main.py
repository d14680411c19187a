"""FastAPI application for the staffing portal."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import structlog

from staffing_portal import __version__
from staffing_portal.api import admin_router, auth_router, client_router, public_router
from staffing_portal.core.config import settings
from staffing_portal.core.database import close_db, db_manager, init_db
from staffing_portal.core.error_handling import ErrorContext, PortalError, error_handler
from staffing_portal.core.logging import configure_logging, system_logger

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and the database on startup, release it on shutdown."""
    configure_logging()
    init_db()
    system_logger.log_system_startup("api", environment=settings.environment, version=__version__)
    yield
    close_db()
    system_logger.log_system_shutdown("api")


app = FastAPI(
    title="Staffing Portal API",
    description="Job postings, access codes and client self-service for a staffing agency",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(public_router)
app.include_router(admin_router)
app.include_router(client_router)


def _context(request: Request) -> ErrorContext:
    return ErrorContext(operation=f"{request.method} {request.url.path}", component="api")


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError):
    error_handler.handle_error(exc, _context(request))
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    logger.info("Request validation failed", path=request.url.path, error_count=len(errors))
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "error": "validation_error",
            "message": "Invalid request data",
            "errors": errors,
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    portal_error = error_handler.handle_error(exc, _context(request))
    return JSONResponse(status_code=portal_error.status_code, content=portal_error.to_response())


@app.get("/health")
def health_check():
    """Health check endpoint."""
    healthy = db_manager.health_check()
    system_logger.log_health_check("database", healthy)
    return {
        "status": "healthy" if healthy else "degraded",
        "service": "staffing-portal",
        "database": "ok" if healthy else "unavailable",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "staffing_portal.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True
    )
