"""Rate limiting middleware — Redis fixed-window counters per IP.

Learn: each IP gets one counter per minute per bucket, stored under
"bazaar:rl:{ip}:{bucket}:{minute}". Login and register share a stricter
"auth" bucket to slow down password guessing.

When Redis is not initialized or errors, requests pass through unlimited.
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger()

_AUTH_PATHS = ("/api/auth/login", "/api/auth/register")


def bucket_for(path: str) -> str:
    return "auth" if path.startswith(_AUTH_PATHS) else "api"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, default_rpm: int = 120, auth_rpm: int = 10):
        super().__init__(app)
        self.limits = {"api": default_rpm, "auth": auth_rpm}

    async def dispatch(self, request: Request, call_next) -> Response:
        from bazaar.realtime.redis import get_redis

        try:
            redis = get_redis()
        except RuntimeError:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        bucket = bucket_for(request.url.path)
        limit = self.limits[bucket]
        key = f"bazaar:rl:{client_ip}:{bucket}:{int(time.time() // 60)}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)
        except Exception as e:
            logger.warning("rate_limit.redis_error", error=str(e))
            return await call_next(request)

        if count > limit:
            logger.info("rate_limit.exceeded", client_ip=client_ip, bucket=bucket)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Rate limit exceeded. Try again later.",
                    "code": "RateLimited",
                },
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(limit)
        response.headers["X-RateLimit-Remaining"] = str(max(0, limit - count))
        return response
