"""Community, post and like routes.

Learn: each resource file exports two routers. `public_router` holds the
reads, which anyone may call. `router` holds every mutation and is mounted
behind get_requester in api/__init__.py; its handlers also declare the
requester as a parameter (FastAPI resolves it once per request) and pass
it to the service explicitly.
"""

import uuid

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext, get_requester
from bazaar.db.engine import get_db
from bazaar.schemas.community import (
    CommunityCreate,
    CommunityRead,
    CommunityUpdate,
    LikeRead,
    MessageResponse,
    PostAuthor,
    PostCreate,
    PostDetail,
    PostRead,
    PostUpdate,
    PostWithAuthor,
)
from bazaar.services.community_service import CommunityService

router = APIRouter()
public_router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> CommunityService:
    return CommunityService(db)


# ─── Communities ────────────────────────────────────────

@router.post("/communities", response_model=CommunityRead, status_code=201)
async def create_community(
    body: CommunityCreate,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    return await svc.create_community(requester, body)


@public_router.get("/communities", response_model=list[CommunityRead])
async def list_communities(svc: CommunityService = Depends(_svc)):
    return await svc.list_communities()


@public_router.get("/communities/{community_id}", response_model=CommunityRead)
async def get_community(community_id: uuid.UUID, svc: CommunityService = Depends(_svc)):
    return await svc.get_community(community_id)


@router.patch("/communities/{community_id}", response_model=CommunityRead)
async def update_community(
    community_id: uuid.UUID,
    body: CommunityUpdate,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    return await svc.update_community(requester, community_id, body)


@router.delete("/communities/{community_id}", response_model=MessageResponse)
async def delete_community(
    community_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    await svc.delete_community(requester, community_id)
    return {"message": "Community deleted successfully"}


# ─── Posts ──────────────────────────────────────────────

@router.post("/community-posts", response_model=PostRead, status_code=201)
async def create_post(
    body: PostCreate,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    """Create a post. The author is the requester, whatever the body says."""
    return await svc.create_post(requester, body)


async def _with_authors(svc: CommunityService, posts) -> list[PostWithAuthor]:
    authors = await svc.authors_of(posts)
    result = []
    for post in posts:
        author = authors.get(post.user_id)
        result.append(
            PostWithAuthor(
                **PostRead.model_validate(post).model_dump(),
                author=PostAuthor.model_validate(author) if author else None,
            )
        )
    return result


@public_router.get("/community-posts", response_model=list[PostWithAuthor])
async def list_posts(svc: CommunityService = Depends(_svc)):
    return await _with_authors(svc, await svc.list_posts())


@public_router.get(
    "/community-posts/community/{community_id}", response_model=list[PostWithAuthor]
)
async def list_community_posts(
    community_id: uuid.UUID, svc: CommunityService = Depends(_svc)
):
    return await _with_authors(svc, await svc.list_posts(community_id=community_id))


@public_router.get(
    "/community-posts/user/{user_id}", response_model=list[PostWithAuthor]
)
async def list_user_posts(user_id: uuid.UUID, svc: CommunityService = Depends(_svc)):
    return await _with_authors(svc, await svc.list_posts(user_id=user_id))


@public_router.get("/community-posts/{post_id}", response_model=PostDetail)
async def get_post(post_id: uuid.UUID, svc: CommunityService = Depends(_svc)):
    """One post with its author and like count."""
    post = await svc.get_post(post_id)
    [with_author] = await _with_authors(svc, [post])
    return PostDetail(
        **with_author.model_dump(),
        like_count=await svc.count_likes(post_id),
    )


@router.patch("/community-posts/{post_id}", response_model=PostRead)
async def update_post(
    post_id: uuid.UUID,
    body: PostUpdate,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    return await svc.update_post(requester, post_id, body)


@router.delete("/community-posts/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    await svc.delete_post(requester, post_id)
    return {"message": "Community post deleted successfully"}


# ─── Likes ──────────────────────────────────────────────

@router.post(
    "/community-posts/{post_id}/like",
    response_model=LikeRead,
    status_code=201,
    responses={200: {"model": MessageResponse, "description": "Already liked"}},
)
async def like_post(
    post_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    like = await svc.like_post(requester, post_id)
    if like is None:
        return JSONResponse(status_code=200, content={"message": "Already liked"})
    return like


@router.delete("/community-posts/{post_id}/like", response_model=MessageResponse)
async def unlike_post(
    post_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: CommunityService = Depends(_svc),
):
    await svc.unlike_post(requester, post_id)
    return {"message": "Community post unliked successfully"}


@public_router.get("/community-posts/{post_id}/likes", response_model=list[LikeRead])
async def list_likes(post_id: uuid.UUID, svc: CommunityService = Depends(_svc)):
    return await svc.list_likes(post_id)
