import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

import env
from api.admin.router import router as admin_router
from api.dependencies import get_report_analyzer
from api.reports.router import router as reports_router
from database import DatabaseManager, get_database_manager
from services.report_analyzer import ReportAnalyzer, create_report_analyzer

logging.basicConfig(
    level=env.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Connect the database and build the report analyzer for the app's lifetime."""
    logger.info(
        "Starting SafeSpeak API (env=%s, ai=%s)",
        env.APP_ENV,
        "configured" if env.GEMINI_API_KEY else "fallback only",
    )

    application.state.report_analyzer = create_report_analyzer(
        api_key=env.GEMINI_API_KEY,
        model_id=env.GEMINI_MODEL_ID,
        timeout=env.AI_ANALYSIS_TIMEOUT,
    )

    db_manager = get_database_manager()
    if await asyncio.to_thread(db_manager.connect_with_retry):
        try:
            db_manager.ensure_indexes()
        except PyMongoError as e:
            logger.warning("Failed to create indexes: %s", e)
    else:
        # Health check reports unhealthy until the database is reachable
        logger.warning("Starting without database connection")

    yield

    logger.info("Shutting down SafeSpeak API")
    db_manager.disconnect()


app = FastAPI(
    title="SafeSpeak API",
    description="Anonymous incident reporting platform",
    version=API_VERSION,
    lifespan=lifespan,
)

# Include routers
app.include_router(reports_router)
app.include_router(admin_router)

# Configure CORS: the frontend, Vercel preview deployments, and localhost in development
allowed_origin_regex = r"https://.*\.vercel\.app"
if env.IS_DEVELOPMENT:
    allowed_origin_regex += r"|https?://(localhost|127\.0\.0\.1)(:\d+)?"

app.add_middleware(
    CORSMiddleware,
    allow_origins=[env.FRONTEND_URL],
    allow_origin_regex=allowed_origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    """Reject request bodies over MAX_BODY_BYTES with 413."""
    content_length = request.headers.get("content-length")
    if content_length is not None:
        too_large = not content_length.isdigit() or int(content_length) > env.MAX_BODY_BYTES
    elif request.method in ("POST", "PUT", "PATCH"):
        # Chunked upload, measure what was sent
        too_large = len(await request.body()) > env.MAX_BODY_BYTES
    else:
        too_large = False

    if too_large:
        logger.warning("Rejected oversized body on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=413, content={"detail": "Request body too large"})
    return await call_next(request)


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError):
    """Database failures surface as 503 instead of a stack trace."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "SafeSpeak API",
        "version": API_VERSION,
        "description": "Anonymous incident reporting platform",
        "endpoints": {
            "health": "GET /health",
            "report": "POST /api/report",
            "admin_login": "POST /api/admin/login",
            "admin_reports": "GET /api/admin/reports (requires auth)",
        },
    }


@app.get("/health")
async def health_check(
    analyzer: ReportAnalyzer = Depends(get_report_analyzer),
    db_manager: DatabaseManager = Depends(get_database_manager),
):
    """
    Health check endpoint.

    Healthy means the database answers a ping. AI status comes from the
    analyzer's configuration; no model call is made.
    """
    db_connected = db_manager.is_connected()
    ai_status = analyzer.get_status()

    return JSONResponse(
        status_code=200 if db_connected else 503,
        content={
            "status": "healthy" if db_connected else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "services": {
                "database": {"status": "connected" if db_connected else "disconnected"},
                "ai": {
                    "status": "configured" if ai_status.configured else "not configured",
                    "provider": ai_status.provider,
                    "model": ai_status.model,
                },
            },
            "environment": env.APP_ENV,
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=env.PORT)
