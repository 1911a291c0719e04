import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from catalog.core.deps import get_search_engine
from catalog.core.errors import StoreUnavailable
from catalog.search.engine import SearchEngine

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(engine: SearchEngine = Depends(get_search_engine)):
    timestamp = datetime.now(timezone.utc).isoformat()
    try:
        await engine.ping()
    except StoreUnavailable as e:
        logger.warning("Health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "timestamp": timestamp,
                "database": "disconnected",
                "error": str(e),
            },
        )
    return {"status": "healthy", "timestamp": timestamp, "database": "connected"}
