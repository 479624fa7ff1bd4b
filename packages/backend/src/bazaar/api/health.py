"""Health check endpoint.

Reports the server version plus database and Redis reachability. Redis is
optional, so only the database decides healthy vs degraded.
"""

from fastapi import APIRouter
from sqlalchemy import text

from bazaar import __version__
from bazaar.db.engine import engine

router = APIRouter()


@router.get("/health")
async def health_check():
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"

    try:
        from bazaar.realtime.redis import get_redis

        await get_redis().ping()
        checks["redis"] = "ok"
    except Exception as e:
        checks["redis"] = f"unavailable: {e}"

    status = "healthy" if checks["database"] == "ok" else "degraded"
    return {"status": status, **checks}
