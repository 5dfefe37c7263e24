"""FastAPI application for the RV Stay REST API.

This package provides REST endpoints for:
- Health checks
- Listing search, details and availability
- Booking requests and host approval
- The host calendar and day inspector
"""

import logging
import os
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from rvstay import __version__
from rvstay_api.exceptions import register_exception_handlers
from rvstay_api.middleware.correlation import CorrelationIdMiddleware
from rvstay_api.routes.bookings import router as bookings_router
from rvstay_api.routes.health import router as health_router
from rvstay_api.routes.host import router as host_router
from rvstay_api.routes.listings import router as listings_router

logger = logging.getLogger(__name__)
logging.basicConfig(level=logging.INFO)

app = FastAPI(
    title="RV Stay API",
    description="REST API for RV spot listings, bookings and the host calendar",
    version=__version__,
)

frontend_url = os.getenv("FRONTEND_URL", "http://localhost:3000")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[frontend_url, "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

register_exception_handlers(app)

app.include_router(health_router, prefix="/api")
app.include_router(listings_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(host_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Liveness check at /api/ping."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "rvstay-api",
    }


# Lambda handler for API Gateway HTTP APIs
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "rvstay_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["backend/api/src", "backend/shared/src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
