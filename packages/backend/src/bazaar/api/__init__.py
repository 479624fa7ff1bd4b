"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: authentication is applied at the include_router level using
FastAPI's dependencies parameter, so every route of a protected group is
gated by get_requester without each handler opting in. Resource modules
split their reads into a `public_router` (mounted open) and their writes
into `router` (mounted protected).

Protected groups are included before the open ones: `/stores/me` must be
matched before the open `/stores/{store_id}` pattern.
"""

from fastapi import APIRouter, Depends

from bazaar.api.auth import router as auth_router
from bazaar.api.communities import public_router as communities_public_router
from bazaar.api.communities import router as communities_router
from bazaar.api.health import router as health_router
from bazaar.api.stores import public_router as stores_public_router
from bazaar.api.stores import router as stores_router
from bazaar.api.transactions import router as transactions_router
from bazaar.auth.dependencies import get_requester

# All protected routers require a valid credential
_auth = [Depends(get_requester)]

api_router = APIRouter(prefix="/api")

# Protected routes: require a valid bearer header or auth cookie
api_router.include_router(transactions_router, tags=["transactions"], dependencies=_auth)
api_router.include_router(communities_router, tags=["community"], dependencies=_auth)
api_router.include_router(stores_router, tags=["stores"], dependencies=_auth)

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(communities_public_router, tags=["community"])
api_router.include_router(stores_public_router, tags=["stores"])
