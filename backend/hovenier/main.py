"""
Hovenier Offerte Engine API
FastAPI backend that prices landscaping quotes from scope data and rate tables.
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hovenier import config
from hovenier.services.logging_config import setup_logging
from hovenier.services.middleware import RequestTimingMiddleware
from hovenier.services.scope_registry import registered_scopes

setup_logging(level=config.LOG_LEVEL, json_output=config.JSON_LOGS)
logger = logging.getLogger("hovenier-api")

from hovenier.api.quote_routes import router as quote_router

app = FastAPI(
    title="Hovenier Offerte Engine",
    version=config.APP_VERSION,
    description="Quote line-item generation for garden construction and maintenance",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept", "X-Request-ID"],
)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

app.include_router(quote_router)

logger.info(f"Hovenier API ready with {len(registered_scopes())} scope calculators")


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": config.APP_VERSION,
        "scope_calculators": len(registered_scopes()),
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("hovenier.main:app", host="0.0.0.0", port=8000, reload=True)
