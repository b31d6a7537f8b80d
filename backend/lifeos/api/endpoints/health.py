# backend/lifeos/api/endpoints/health.py
import logging

from fastapi import APIRouter, Response, status
from pymongo.errors import PyMongoError

from lifeos.core.config import settings
from lifeos.db.mongo import get_db
from lifeos.focus.timer import TimerConfig

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


async def _check_mongo() -> dict:
    try:
        await get_db().command("ping")
    except (PyMongoError, RuntimeError) as e:
        logger.warning("health check: mongo unavailable: %s", e)
        return {"ok": False, "error": str(e)}
    return {"ok": True, "error": None}


@router.get("/health")
async def health_check(response: Response):
    """
    Liveness plus store reachability. 503 while Mongo is down, so the
    timer clients know their session writes will be held, not lost.
    """
    mongo = await _check_mongo()
    if not mongo["ok"]:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return {
        "status": "ok" if mongo["ok"] else "degraded",
        "environment": settings.ENVIRONMENT,
        "checks": {"mongo": mongo},
        "timer": TimerConfig.from_settings().model_dump(by_alias=True),
    }
