"""
FastAPI application for the capability map.

This module creates and configures the FastAPI application, registering
all routers, middleware and exception handlers, and loads the workbook
into the data cache at startup.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.config import settings
from api.dependencies import get_data_cache
from api.routers import applications, capabilities
from api.schemas.common import ErrorResponse, HealthCheckResponse
from services.data_cache import DataCache
from services.errors import FunctionNotFound, MissingParameter
from datetime import datetime

# Configure logging
log_handlers = [logging.StreamHandler()]
if settings.LOG_FILE:
    log_handlers.append(logging.FileHandler(settings.LOG_FILE))

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format=settings.LOG_FORMAT,
    handlers=log_handlers
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Loads the workbook on startup. A missing or malformed workbook is not
    fatal: the API keeps serving empty collections.
    """
    # Startup
    logger.info(f"Starting {settings.API_TITLE} v{settings.API_VERSION}")
    logger.info(f"Workbook: {settings.EXCEL_FILE_PATH}")

    cache = get_data_cache()
    if cache.reload(settings.EXCEL_FILE_PATH):
        logger.info(f"Capability map loaded: {cache.last_stats}")
    else:
        logger.warning(f"Serving without workbook data: {cache.last_error}")

    yield

    # Shutdown
    logger.info("Shutting down application")


# Create FastAPI application
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS
)


# Exception handlers

def error_response(request: Request, status_code: int, error: str, detail=None) -> JSONResponse:
    """Build a JSON error response in the standard format."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=error,
            detail=detail,
            path=str(request.url)
        ).model_dump(mode='json')
    )


@app.exception_handler(MissingParameter)
async def missing_parameter_handler(request: Request, exc: MissingParameter):
    """Handle a missing required query parameter."""
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, str(exc), {"parameter": exc.parameter}
    )


@app.exception_handler(FunctionNotFound)
async def function_not_found_handler(request: Request, exc: FunctionNotFound):
    """Handle a query for an unknown function."""
    return error_response(
        request, status.HTTP_404_NOT_FOUND, str(exc), {"function": exc.function}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle malformed query parameters (e.g. non-numeric scores)."""
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
        for e in exc.errors()
    ]
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, "Invalid request parameters", {"errors": errors}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    return error_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        {"message": str(exc)} if settings.DEBUG else None
    )


@app.exception_handler(404)
async def not_found_handler(request: Request, exc):
    """Handle 404 Not Found errors."""
    return error_response(
        request, status.HTTP_404_NOT_FOUND, "Resource not found", {"path": str(request.url)}
    )


# Register routers with API prefix
app.include_router(applications.router, prefix=settings.API_PREFIX)
app.include_router(capabilities.router, prefix=settings.API_PREFIX)


# Root endpoints

@app.get('/', include_in_schema=False)
async def root():
    """
    Root endpoint - points to docs.
    """
    return {
        'message': f'Welcome to {settings.API_TITLE}',
        'version': settings.API_VERSION,
        'docs': '/docs',
        'redoc': '/redoc',
        'openapi': '/openapi.json'
    }


@app.get('/health', response_model=HealthCheckResponse, tags=['health'])
async def health_check(cache: DataCache = Depends(get_data_cache)):
    """
    Health check endpoint.

    The service stays up without a workbook; `excelLoaded` reports whether
    a generation has been loaded.

    **Example:**
    ```bash
    curl http://localhost:8080/health
    ```
    """
    snapshot = cache.snapshot()

    return HealthCheckResponse(
        status='OK',
        excelLoaded=snapshot.is_loaded,
        timestamp=datetime.utcnow(),
        message=f'{settings.API_TITLE} v{settings.API_VERSION}',
        version=settings.API_VERSION,
        generation=snapshot.generation,
        loadedAt=snapshot.loaded_at,
        source=snapshot.source,
        lastError=cache.last_error
    )


@app.get('/api/ping', tags=['health'])
async def ping():
    """
    Simple ping endpoint for load balancers.

    **Returns:**
    ```json
    {"ping": "pong"}
    ```
    """
    return {'ping': 'pong'}


# Middleware for request logging

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all HTTP requests."""
    logger.info(f"{request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(f"{request.method} {request.url.path} - {response.status_code}")
    return response


if __name__ == '__main__':
    import uvicorn

    uvicorn.run(
        'api.main:app',
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower()
    )
