"""
Tickerboard API - FastAPI Application.

Proxies price history, quotes, exchange rates and news from the data
providers and serves merged indicator rows for the dashboard.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import prices, fx, news, chart
from api.schemas import HealthResponse
from config import Config

logging.basicConfig(
    level=Config.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

for warning in Config.validate():
    logger.warning(warning)

app = FastAPI(
    title="Tickerboard API",
    description="REST API for market data, news and technical indicators",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS for the Streamlit dashboard
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Include routers
app.include_router(prices.router, prefix="/api/prices", tags=["prices"])
app.include_router(fx.router, prefix="/api/fx", tags=["fx"])
app.include_router(news.router, prefix="/api/news", tags=["news"])
app.include_router(chart.router, prefix="/api/chart", tags=["chart"])


@app.get("/api/health", response_model=HealthResponse, tags=["health"])
def health_check():
    """
    Health check endpoint.

    Returns the service status and API version.
    """
    return HealthResponse(status="healthy", version="1.0.0")


@app.get("/", tags=["root"])
def root():
    """Root endpoint with API info."""
    return {
        "name": "Tickerboard API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }
