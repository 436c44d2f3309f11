import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tower_profile import __version__
from tower_profile.core.config import engine_settings
from tower_profile.core.logging_config import setup_logging
from tower_profile.engine.loader import get_reference_tables
from tower_profile.routers import assessment as assessment_router

# Configure logging before anything else logs
setup_logging(engine_settings.log_level, engine_settings.json_logs)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Load and validate the reference tables up front so a bad table file
    # stops the service at startup instead of failing the first request.
    tables = get_reference_tables()
    logger.info(f"Reference tables version {tables.version} ready")
    yield


app = FastAPI(title="Tower Profile Engine API", version=__version__, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assessment_router.router, prefix="/api/v1", tags=["profile"])


@app.get("/", tags=["Health Check"])
async def read_root():
    """
    Root endpoint for basic health check.
    """
    return {"status": "ok", "message": "Tower Profile Engine is running.", "version": __version__}
