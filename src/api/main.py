"""FastAPI application entry point."""

import os
import sys
import logging
import tomllib
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Must be called before importing modules that read env vars (like api.security)
load_dotenv()

# main.py is at /app/src/api/main.py, src is two levels up
_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(_src_path))

from api.errors import register_exception_handlers
from api.middleware.request_logging import RequestLoggingMiddleware
from api.routes import auth, health, password
from utils.logging import setup_structured_logging
from adapter.mongodb.connection import MongoConnection
from adapter.mongodb.indexes import ensure_all_indexes

setup_structured_logging()

logger = logging.getLogger(__name__)

# Version lives in pyproject.toml
_project_root = _src_path.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Password Strength Analyzer API"

DEFAULT_CORS_ORIGINS = ",".join([
    "https://passwordstrengthanalyser.com",
    "https://www.passwordstrengthanalyser.com",
    "http://localhost:3000",
])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: own the MongoDB connection."""
    connection = MongoConnection()
    app.state.mongo = connection

    db = connection.get_database()
    if db is not None:
        if ensure_all_indexes(db):
            logger.info("MongoDB indexes verified/created successfully")
        else:
            logger.warning("Failed to create some MongoDB indexes")
    else:
        logger.warning("MongoDB unavailable at startup, will reconnect on demand")

    yield

    connection.close()


app = FastAPI(
    title=SERVICE_NAME,
    description="Google sign-in and password strength scoring",
    version=VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)

# With JWT in the Authorization header, credentials are only allowed
# for an explicit origin list (browsers reject credentials with "*").
cors_origins_env = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)

if cors_origins_env == "*":
    cors_origins = ["*"]
    allow_credentials = False
    logger.warning("CORS configured with wildcard origin ('*')")
else:
    cors_origins = [origin.strip() for origin in cors_origins_env.split(",") if origin.strip()]
    allow_credentials = True
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.add_middleware(RequestLoggingMiddleware)

app.include_router(auth.router)
app.include_router(password.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Service banner."""
    return {
        "message": f"{SERVICE_NAME} is running",
        "version": VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
    }


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", 5004))
    # Request lines come from RequestLoggingMiddleware
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        access_log=False
    )
