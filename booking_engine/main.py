import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from booking_engine.api.deps import engine
from booking_engine.api.routers.availability import router as availability_router
from booking_engine.api.routers.booking import router as booking_router
from booking_engine.api.routers.health import router as health_router
from booking_engine.api.routers.pricing import router as pricing_router
from booking_engine.config import get_settings
from booking_engine.infrastructure.db.engine import create_schema

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not get_settings().use_in_memory:
        # Create tables for dev/demo databases
        await create_schema(engine)
    yield
    await engine.dispose()


app = FastAPI(
    title="Booking Engine API",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Logs unhandled exceptions with an error_id and returns a generic 500
    without exposing internals to the client.
    """
    error_id = str(uuid.uuid4())
    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        },
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists.",
        },
    )


app.include_router(health_router, tags=["Health"])
app.include_router(availability_router, prefix="/api", tags=["Availability"])
app.include_router(pricing_router, prefix="/api", tags=["Pricing"])
app.include_router(booking_router, prefix="/api", tags=["Booking"])
