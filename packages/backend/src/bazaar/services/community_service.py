"""Community service — communities, posts and post likes.

Learn: every mutating method takes the RequesterContext as an explicit
argument and runs the same four steps:

    load target (NotFound) → ownership guard (Forbidden) → write → commit

Creates take the owner from the requester only. Reads are public.
"""

import uuid
from typing import Optional

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext
from bazaar.auth.ownership import authorize_mutation, require_owner
from bazaar.db.models import Community, CommunityPost, PostLike, User
from bazaar.db.repository import Repository
from bazaar.errors import NotFound, UniqueConstraintViolation
from bazaar.schemas.community import (
    CommunityCreate,
    CommunityUpdate,
    PostCreate,
    PostUpdate,
)

logger = structlog.get_logger()

_LIKE_KEY = ("post_id", "user_id")


class CommunityService:
    """Communities and their posts."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.communities = Repository(db, Community)
        self.posts = Repository(db, CommunityPost)
        self.likes = Repository(db, PostLike)
        self.users = Repository(db, User)

    # ─── Communities ────────────────────────────────────

    async def create_community(
        self, requester: RequesterContext, body: CommunityCreate
    ) -> Community:
        try:
            community = await self.communities.create(
                owner_id=requester.user_uuid,
                name=body.name,
                description=body.description,
            )
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, "Community name already exists!"
            ) from e
        await self.db.commit()
        logger.info("community.created", community_id=str(community.id))
        return community

    async def list_communities(self) -> list[Community]:
        return await self.communities.find_many(order_by=Community.name)

    async def get_community(self, community_id: uuid.UUID) -> Community:
        community = await self.communities.find_unique(id=community_id)
        if not community:
            raise NotFound("Community not found")
        return community

    async def update_community(
        self,
        requester: RequesterContext,
        community_id: uuid.UUID,
        body: CommunityUpdate,
    ) -> Community:
        community = await self.get_community(community_id)
        require_owner(
            authorize_mutation(requester.user_id, community.owner_id),
            "You can update only your own community",
        )
        fields = body.model_dump(exclude_none=True)
        try:
            community = await self.communities.update(community, fields)
        except UniqueConstraintViolation as e:
            raise UniqueConstraintViolation(
                e.field_group, "Community name already exists!"
            ) from e
        await self.db.commit()
        return community

    async def delete_community(
        self, requester: RequesterContext, community_id: uuid.UUID
    ) -> None:
        """Delete a community with all of its posts and their likes."""
        community = await self.get_community(community_id)
        require_owner(
            authorize_mutation(requester.user_id, community.owner_id),
            "You can delete only your own community",
        )
        post_ids = select(CommunityPost.id).where(
            CommunityPost.community_id == community.id
        )
        await self.db.execute(delete(PostLike).where(PostLike.post_id.in_(post_ids)))
        await self.db.execute(
            delete(CommunityPost).where(CommunityPost.community_id == community.id)
        )
        await self.communities.delete(community)
        await self.db.commit()
        logger.info("community.deleted", community_id=str(community_id))

    # ─── Posts ──────────────────────────────────────────

    async def create_post(
        self, requester: RequesterContext, body: PostCreate
    ) -> CommunityPost:
        await self.get_community(body.community_id)
        post = await self.posts.create(
            community_id=body.community_id,
            user_id=requester.user_uuid,
            title=body.title,
            content=body.content,
            link=body.link,
            image=body.image,
            video=body.video,
            audio=body.audio,
        )
        await self.db.commit()
        logger.info(
            "post.created",
            post_id=str(post.id),
            community_id=str(body.community_id),
            user_id=requester.user_id,
        )
        return post

    async def get_post(self, post_id: uuid.UUID) -> CommunityPost:
        post = await self.posts.find_unique(id=post_id)
        if not post:
            raise NotFound("Community post not found")
        return post

    async def count_likes(self, post_id: uuid.UUID) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(PostLike).where(PostLike.post_id == post_id)
        )
        return result.scalar_one()

    async def authors_of(self, posts: list[CommunityPost]) -> dict[uuid.UUID, User]:
        """Authors of the given posts keyed by user id, in one query."""
        user_ids = {post.user_id for post in posts}
        if not user_ids:
            return {}
        users = await self.users.find_many(User.id.in_(user_ids))
        return {user.id: user for user in users}

    async def list_posts(
        self,
        community_id: Optional[uuid.UUID] = None,
        user_id: Optional[uuid.UUID] = None,
    ) -> list[CommunityPost]:
        """Newest first, optionally narrowed to one community or author."""
        filters = []
        if community_id is not None:
            filters.append(CommunityPost.community_id == community_id)
        if user_id is not None:
            filters.append(CommunityPost.user_id == user_id)
        return await self.posts.find_many(
            *filters, order_by=CommunityPost.created_at.desc()
        )

    async def update_post(
        self,
        requester: RequesterContext,
        post_id: uuid.UUID,
        body: PostUpdate,
    ) -> CommunityPost:
        post = await self.get_post(post_id)
        require_owner(
            authorize_mutation(requester.user_id, post.user_id),
            "You can update only your own community post",
        )
        # Blank values keep what is already there.
        fields = {k: v for k, v in body.model_dump().items() if v}
        post = await self.posts.update(post, fields)
        await self.db.commit()
        logger.info("post.updated", post_id=str(post.id), fields=sorted(fields))
        return post

    async def delete_post(self, requester: RequesterContext, post_id: uuid.UUID) -> None:
        post = await self.get_post(post_id)
        require_owner(
            authorize_mutation(requester.user_id, post.user_id),
            "You can delete only your own community post",
        )
        await self.db.execute(delete(PostLike).where(PostLike.post_id == post.id))
        await self.posts.delete(post)
        await self.db.commit()
        logger.info("post.deleted", post_id=str(post_id))

    # ─── Likes ──────────────────────────────────────────

    async def like_post(
        self, requester: RequesterContext, post_id: uuid.UUID
    ) -> Optional[PostLike]:
        """Like a post. Returns the new like, or None if already liked.

        Learn: no "does the like exist?" read before the insert. The
        (post_id, user_id) unique constraint arbitrates, so two racing
        requests still end with exactly one row.
        """
        await self.get_post(post_id)
        try:
            like = await self.likes.create(post_id=post_id, user_id=requester.user_uuid)
        except UniqueConstraintViolation as e:
            if e.field_group != _LIKE_KEY:
                raise
            logger.info("like.duplicate", post_id=str(post_id), user_id=requester.user_id)
            return None
        await self.db.commit()
        logger.info("like.created", post_id=str(post_id), user_id=requester.user_id)
        return like

    async def unlike_post(self, requester: RequesterContext, post_id: uuid.UUID) -> None:
        await self.get_post(post_id)
        like = await self.likes.find_unique(post_id=post_id, user_id=requester.user_uuid)
        if not like:
            raise NotFound("Like not found")
        await self.likes.delete(like)
        await self.db.commit()
        logger.info("like.deleted", post_id=str(post_id), user_id=requester.user_id)

    async def list_likes(self, post_id: uuid.UUID) -> list[PostLike]:
        await self.get_post(post_id)
        return await self.likes.find_many(
            PostLike.post_id == post_id, order_by=PostLike.created_at
        )
