"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Depends

from api.dependencies import get_mongo_connection
from adapter.mongodb.connection import MongoConnection

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health(connection: MongoConnection = Depends(get_mongo_connection)):
    """Liveness plus MongoDB connection state."""
    connected = connection.is_connected()
    if not connected:
        logger.warning("Health check: MongoDB disconnected")
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "mongo": "connected" if connected else "disconnected",
    }
