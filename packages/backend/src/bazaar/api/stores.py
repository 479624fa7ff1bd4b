"""Store and theme customization routes.

Theme customizations are addressed by store id. Update and delete first
check that the customization exists (404), then that the requester owns
that store (403).
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext, get_requester
from bazaar.db.engine import get_db
from bazaar.schemas.community import MessageResponse
from bazaar.schemas.store import (
    StoreCreate,
    StoreRead,
    StoreUpdate,
    ThemeCustomizationRead,
    ThemeFields,
)
from bazaar.services.store_service import StoreService

router = APIRouter()
public_router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> StoreService:
    return StoreService(db)


# ─── Stores ─────────────────────────────────────────────

@router.post("/stores", response_model=StoreRead, status_code=201)
async def create_store(
    body: StoreCreate,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    return await svc.create_store(requester, body)


@router.get("/stores/me", response_model=StoreRead)
async def get_my_store(
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    return await svc.get_my_store(requester)


@public_router.get("/stores/by-name/{name}", response_model=StoreRead)
async def get_store_by_name(name: str, svc: StoreService = Depends(_svc)):
    return await svc.get_store_by_name(name)


@public_router.get("/stores/{store_id}", response_model=StoreRead)
async def get_store(store_id: uuid.UUID, svc: StoreService = Depends(_svc)):
    return await svc.get_store(store_id)


@router.patch("/stores/{store_id}", response_model=StoreRead)
async def update_store(
    store_id: uuid.UUID,
    body: StoreUpdate,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    return await svc.update_store(requester, store_id, body)


@router.delete("/stores/{store_id}", response_model=MessageResponse)
async def delete_store(
    store_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    await svc.delete_store(requester, store_id)
    return {"message": "Store deleted successfully"}


# ─── Theme customization ────────────────────────────────

@router.get("/theme-customizations/me", response_model=ThemeCustomizationRead)
async def get_my_theme(
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    return await svc.get_my_theme(requester)


@public_router.get(
    "/theme-customizations/store/{name}", response_model=ThemeCustomizationRead
)
async def get_theme_by_store_name(name: str, svc: StoreService = Depends(_svc)):
    return await svc.get_theme_by_store_name(name)


@router.post(
    "/theme-customizations", response_model=ThemeCustomizationRead, status_code=201
)
async def create_theme(
    body: ThemeFields,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    """Create the customization for the requester's own store."""
    return await svc.create_theme(requester, body)


@router.put(
    "/theme-customizations/{store_id}", response_model=ThemeCustomizationRead
)
async def update_theme(
    store_id: uuid.UUID,
    body: ThemeFields,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    return await svc.update_theme(requester, store_id, body)


@router.delete("/theme-customizations/{store_id}", response_model=MessageResponse)
async def delete_theme(
    store_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: StoreService = Depends(_svc),
):
    await svc.delete_theme(requester, store_id)
    return {"message": "Theme customization deleted successfully"}
