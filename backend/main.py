"""
FastAPI Backend for Roster Merge

This is the main entry point for the API server. It provides endpoints for:
- Parsing a roster PDF
- Parsing a date → topic table
- Merging a chat transcript against the roster and topics
- Exporting (edited) merged rows as XLSX

Architecture Decision:
- No storage - every request carries its own inputs and the client keeps
  the intermediate roster / topic lists between calls
- Core logic lives in the roster_merge package; routes only move bytes
"""

# Load .env BEFORE any application imports that read os.environ
from dotenv import load_dotenv
load_dotenv()

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.api.errors import register_error_handlers
from backend.api.routes import export, merge, roster, topics
from backend.api.schemas import HealthResponse
from roster_merge import __version__
from roster_merge.config import get_settings
from roster_merge.config.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level, json_logs=settings.log_json)

app = FastAPI(
    title="Roster Merge API",
    description="Match chat transcript questions to a roster and annotate them with the day's topic",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000", "*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# =============================================================================
# API routes - mounted under /api prefix
# =============================================================================

app.include_router(roster.router, prefix="/api", tags=["Roster"])
app.include_router(topics.router, prefix="/api", tags=["Topics"])
app.include_router(merge.router, prefix="/api", tags=["Merge"])
app.include_router(export.router, prefix="/api", tags=["Export"])


@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.get("/")
async def root():
    """Root endpoint listing the available operations."""
    return {
        "name": "Roster Merge API",
        "docs": "/docs",
        "endpoints": {
            "parse_roster": "POST /api/parse-roster",
            "parse_topics": "POST /api/parse-topics",
            "merge": "POST /api/merge",
            "export": "POST /api/export?variant=minimal|full",
        },
    }


# =============================================================================
# Run with: python -m backend.main
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8100))
    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
    )
