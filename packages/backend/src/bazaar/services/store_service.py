"""Store service — storefronts and their theme customization.

Learn: a store is owned directly (stores.owner_id). A theme customization
is owned indirectly: it has no user column, only store_id. To decide
whether the requester may touch one, we look up the store the requester
owns and compare store ids (authorize_store_mutation). A requester with no
store therefore owns no customization.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext
from bazaar.auth.ownership import (
    authorize_mutation,
    authorize_store_mutation,
    require_owner,
    resolve_requester_store,
)
from bazaar.db.models import Store, ThemeCustomization
from bazaar.db.repository import Repository
from bazaar.errors import NotFound, UniqueConstraintViolation
from bazaar.schemas.store import StoreCreate, StoreUpdate, ThemeFields

logger = structlog.get_logger()

_STORE_DUPLICATES = {
    ("name",): "Store name already exists!",
    ("owner_id",): "You already have a store",
}


class StoreService:
    """Stores and theme customizations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.stores = Repository(db, Store)
        self.themes = Repository(db, ThemeCustomization)

    # ─── Stores ─────────────────────────────────────────

    async def create_store(self, requester: RequesterContext, body: StoreCreate) -> Store:
        try:
            store = await self.stores.create(
                owner_id=requester.user_uuid,
                name=body.name,
                description=body.description,
            )
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, _STORE_DUPLICATES.get(e.field_group)
            ) from e
        await self.db.commit()
        logger.info("store.created", store_id=str(store.id), owner_id=requester.user_id)
        return store

    async def get_store(self, store_id: uuid.UUID) -> Store:
        store = await self.stores.find_unique(id=store_id)
        if not store:
            raise NotFound("Store not found")
        return store

    async def get_store_by_name(self, name: str) -> Store:
        store = await self.stores.find_unique(name=name)
        if not store:
            raise NotFound("Store not found")
        return store

    async def get_my_store(self, requester: RequesterContext) -> Store:
        store = await resolve_requester_store(self.db, requester.user_id)
        if not store:
            raise NotFound("Store not found for this user")
        return store

    async def update_store(
        self, requester: RequesterContext, store_id: uuid.UUID, body: StoreUpdate
    ) -> Store:
        store = await self.get_store(store_id)
        require_owner(
            authorize_mutation(requester.user_id, store.owner_id),
            "You can update only your own store",
        )
        try:
            store = await self.stores.update(store, body.model_dump(exclude_none=True))
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, _STORE_DUPLICATES.get(e.field_group)
            ) from e
        await self.db.commit()
        return store

    async def delete_store(self, requester: RequesterContext, store_id: uuid.UUID) -> None:
        store = await self.get_store(store_id)
        require_owner(
            authorize_mutation(requester.user_id, store.owner_id),
            "You can delete only your own store",
        )
        await self.db.execute(
            delete(ThemeCustomization).where(ThemeCustomization.store_id == store.id)
        )
        await self.stores.delete(store)
        await self.db.commit()
        logger.info("store.deleted", store_id=str(store_id))

    # ─── Theme customization ────────────────────────────

    async def _theme_for_store(self, store_id: uuid.UUID) -> ThemeCustomization:
        theme = await self.themes.find_unique(store_id=store_id)
        if not theme:
            raise NotFound("Theme customization not found for this store")
        return theme

    async def get_my_theme(self, requester: RequesterContext) -> ThemeCustomization:
        store = await self.get_my_store(requester)
        return await self._theme_for_store(store.id)

    async def get_theme_by_store_name(self, name: str) -> ThemeCustomization:
        store = await self.get_store_by_name(name)
        return await self._theme_for_store(store.id)

    async def create_theme(
        self, requester: RequesterContext, body: ThemeFields
    ) -> ThemeCustomization:
        """Create the customization for the requester's own store."""
        store = await self.get_my_store(requester)
        try:
            theme = await self.themes.create(
                store_id=store.id, **body.model_dump(exclude_none=True)
            )
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, "Theme customization already exists for this store"
            ) from e
        await self.db.commit()
        logger.info("theme.created", store_id=str(store.id))
        return theme

    async def _authorize_theme(
        self, requester: RequesterContext, theme: ThemeCustomization, action: str
    ) -> None:
        own_store: Optional[Store] = await resolve_requester_store(
            self.db, requester.user_id
        )
        require_owner(
            authorize_store_mutation(own_store.id if own_store else None, theme.store_id),
            f"You can {action} only your own store's theme",
        )

    async def update_theme(
        self, requester: RequesterContext, store_id: uuid.UUID, body: ThemeFields
    ) -> ThemeCustomization:
        theme = await self._theme_for_store(store_id)
        await self._authorize_theme(requester, theme, "update")
        # An explicit null clears a nullable field; NOT NULL columns keep their value.
        columns = ThemeCustomization.__table__.c
        fields = {
            name: value
            for name, value in body.model_dump(exclude_unset=True).items()
            if value is not None or columns[name].nullable
        }
        theme = await self.themes.update(theme, fields)
        await self.db.commit()
        logger.info("theme.updated", store_id=str(store_id), fields=sorted(fields))
        return theme

    async def delete_theme(self, requester: RequesterContext, store_id: uuid.UUID) -> None:
        theme = await self._theme_for_store(store_id)
        await self._authorize_theme(requester, theme, "delete")
        await self.themes.delete(theme)
        await self.db.commit()
        logger.info("theme.deleted", store_id=str(store_id))
