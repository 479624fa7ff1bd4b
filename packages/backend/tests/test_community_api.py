"""Community, post and like tests.

Learn: the central scenario is the ownership walk-through:

    alice creates a post          → 201, author is alice
    bob edits alice's post        → 403, post unchanged
    alice edits her post          → 200
    alice deletes it              → 200, then GET → 404

plus the like rules: liking twice keeps one row, and the second request
answers "Already liked" instead of failing.
"""

import uuid

import pytest

from bazaar.auth.tokens import Role, issue_token


async def _post(client, user, community, **overrides):
    body = {
        "community_id": community["id"],
        "title": "First batch",
        "content": "Glazed mugs, twelve of them",
        **overrides,
    }
    r = await client.post("/api/community-posts", json=body, headers=user["headers"])
    assert r.status_code == 201, r.text
    return r.json()


# ═══════════════════════════════════════════════════════════
# Communities
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_community_owner_is_requester(client, alice, community):
    assert community["name"] == "Makers"
    assert community["owner_id"] == alice["user"]["id"]


@pytest.mark.asyncio
async def test_create_community_requires_credential(client):
    r = await client.post("/api/communities", json={"name": "Anon"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_duplicate_community_name(client, bob, community):
    r = await client.post(
        "/api/communities", json={"name": "Makers"}, headers=bob["headers"]
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Community name already exists!"


@pytest.mark.asyncio
async def test_list_and_get_communities_public(client, community):
    r = await client.get("/api/communities")
    assert r.status_code == 200
    assert [c["id"] for c in r.json()] == [community["id"]]

    r = await client.get(f"/api/communities/{community['id']}")
    assert r.status_code == 200
    assert r.json()["description"] == "Handmade goods"


@pytest.mark.asyncio
async def test_update_community_owner_only(client, alice, bob, community):
    url = f"/api/communities/{community['id']}"
    r = await client.patch(url, json={"description": "hijacked"}, headers=bob["headers"])
    assert r.status_code == 403

    r = await client.patch(url, json={"description": "Pottery"}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["description"] == "Pottery"
    assert r.json()["name"] == "Makers"


@pytest.mark.asyncio
async def test_delete_community_removes_posts(client, alice, bob, community):
    post = await _post(client, alice, community)
    await client.post(f"/api/community-posts/{post['id']}/like", headers=bob["headers"])

    url = f"/api/communities/{community['id']}"
    assert (await client.delete(url, headers=bob["headers"])).status_code == 403

    r = await client.delete(url, headers=alice["headers"])
    assert r.status_code == 200
    assert (await client.get(url)).status_code == 404
    assert (await client.get(f"/api/community-posts/{post['id']}")).status_code == 404


# ═══════════════════════════════════════════════════════════
# Posts: ownership scenario
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_post_ownership_scenario(client, alice, bob, community):
    post = await _post(client, alice, community)
    assert post["user_id"] == alice["user"]["id"]
    url = f"/api/community-posts/{post['id']}"

    r = await client.patch(url, json={"title": "Bob was here"}, headers=bob["headers"])
    assert r.status_code == 403
    assert r.json()["code"] == "Forbidden"
    assert (await client.get(url)).json()["title"] == "First batch"

    r = await client.patch(url, json={"title": "Second batch"}, headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["title"] == "Second batch"
    assert r.json()["content"] == post["content"]

    r = await client.delete(url, headers=bob["headers"])
    assert r.status_code == 403

    r = await client.delete(url, headers=alice["headers"])
    assert r.status_code == 200

    r = await client.get(url)
    assert r.status_code == 404
    assert r.json()["error"] == "Community post not found"


@pytest.mark.asyncio
async def test_body_user_id_is_ignored(client, alice, bob, community):
    """The author is whoever holds the token, not whoever the body names."""
    post = await _post(client, alice, community, user_id=bob["user"]["id"])
    assert post["user_id"] == alice["user"]["id"]


@pytest.mark.asyncio
async def test_post_in_missing_community(client, alice):
    r = await client.post(
        "/api/community-posts",
        json={"community_id": str(uuid.uuid4()), "title": "x", "content": "y"},
        headers=alice["headers"],
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_blank_fields_keep_values(client, alice, community):
    post = await _post(client, alice, community, link="https://example.com")
    r = await client.patch(
        f"/api/community-posts/{post['id']}",
        json={"title": "", "content": "New content", "link": ""},
        headers=alice["headers"],
    )
    assert r.status_code == 200
    data = r.json()
    assert data["title"] == "First batch"
    assert data["content"] == "New content"
    assert data["link"] == "https://example.com"


@pytest.mark.asyncio
async def test_nonexistent_post_is_404_not_403(client, bob):
    """A missing post is reported as missing, even to someone who would not own it."""
    url = f"/api/community-posts/{uuid.uuid4()}"
    r = await client.patch(url, json={"title": "x"}, headers=bob["headers"])
    assert r.status_code == 404
    r = await client.delete(url, headers=bob["headers"])
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_malformed_post_id_is_400(client):
    r = await client.get("/api/community-posts/not-a-uuid")
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_list_posts_filters(client, alice, bob, community):
    first = await _post(client, alice, community, title="one")
    second = await _post(client, bob, community, title="two")

    r = await client.get("/api/community-posts")
    assert [p["id"] for p in r.json()] == [second["id"], first["id"]]

    r = await client.get(f"/api/community-posts/community/{community['id']}")
    assert {p["id"] for p in r.json()} == {first["id"], second["id"]}

    r = await client.get(f"/api/community-posts/user/{bob['user']['id']}")
    assert [p["id"] for p in r.json()] == [second["id"]]

    r = await client.get(f"/api/community-posts/community/{uuid.uuid4()}")
    assert r.json() == []


# ═══════════════════════════════════════════════════════════
# Likes
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_like_is_idempotent(client, alice, bob, community):
    post = await _post(client, alice, community)
    url = f"/api/community-posts/{post['id']}/like"

    r1 = await client.post(url, headers=bob["headers"])
    assert r1.status_code == 201
    assert r1.json()["user_id"] == bob["user"]["id"]

    r2 = await client.post(url, headers=bob["headers"])
    assert r2.status_code == 200
    assert r2.json() == {"message": "Already liked"}

    likes = (await client.get(f"/api/community-posts/{post['id']}/likes")).json()
    assert len(likes) == 1
    assert likes[0]["user_id"] == bob["user"]["id"]

    detail = (await client.get(f"/api/community-posts/{post['id']}")).json()
    assert detail["like_count"] == 1


@pytest.mark.asyncio
async def test_likes_from_different_users_count_separately(client, alice, bob, community):
    post = await _post(client, alice, community)
    url = f"/api/community-posts/{post['id']}/like"
    assert (await client.post(url, headers=alice["headers"])).status_code == 201
    assert (await client.post(url, headers=bob["headers"])).status_code == 201

    detail = (await client.get(f"/api/community-posts/{post['id']}")).json()
    assert detail["like_count"] == 2


@pytest.mark.asyncio
async def test_unlike(client, alice, bob, community):
    post = await _post(client, alice, community)
    url = f"/api/community-posts/{post['id']}/like"

    r = await client.delete(url, headers=bob["headers"])
    assert r.status_code == 404
    assert r.json()["error"] == "Like not found"

    await client.post(url, headers=bob["headers"])
    r = await client.delete(url, headers=bob["headers"])
    assert r.status_code == 200

    # Liking again after unliking creates a fresh row
    assert (await client.post(url, headers=bob["headers"])).status_code == 201


@pytest.mark.asyncio
async def test_like_missing_post(client, bob):
    r = await client.post(
        f"/api/community-posts/{uuid.uuid4()}/like", headers=bob["headers"]
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_like_requires_credential(client, alice, community):
    post = await _post(client, alice, community)
    r = await client.post(f"/api/community-posts/{post['id']}/like")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_owner_token_in_other_uuid_spelling_can_edit(client, alice, community):
    """A token naming alice's id in upper case still owns what it created."""
    token = issue_token(alice["user"]["id"].upper(), Role.STANDARD)
    headers = {"Authorization": f"Bearer {token}"}
    r = await client.post(
        "/api/community-posts",
        json={"community_id": community["id"], "title": "t", "content": "c"},
        headers=headers,
    )
    assert r.status_code == 201
    assert r.json()["user_id"] == alice["user"]["id"]

    url = f"/api/community-posts/{r.json()['id']}"
    r = await client.patch(url, json={"title": "renamed"}, headers=headers)
    assert r.status_code == 200
    r = await client.patch(url, json={"title": "again"}, headers=alice["headers"])
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_post_reads_embed_public_author(client, alice, bob, community):
    post = await _post(client, alice, community)
    await _post(client, bob, community, title="bob's")

    detail = (await client.get(f"/api/community-posts/{post['id']}")).json()
    author = detail["author"]
    assert author["id"] == alice["user"]["id"]
    assert author["username"] == "alice"
    assert "email" not in author
    assert "password_hash" not in author

    listed = (await client.get("/api/community-posts")).json()
    assert {p["author"]["username"] for p in listed} == {"alice", "bob"}

    by_user = (await client.get(f"/api/community-posts/user/{bob['user']['id']}")).json()
    assert [p["author"]["username"] for p in by_user] == ["bob"]

    by_community = (
        await client.get(f"/api/community-posts/community/{community['id']}")
    ).json()
    assert all(p["author"] is not None for p in by_community)
