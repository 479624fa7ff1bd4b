"""Requester resolution — which credential wins, and 401 vs 403.

Learn: extract_credential/resolve_requester are pure functions, tested
directly. The HTTP tests then check the same rules through a protected
route (/api/auth/me).
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest

from bazaar.auth.dependencies import (
    RequesterContext,
    extract_credential,
    resolve_requester,
)
from bazaar.auth.tokens import Role, issue_token
from bazaar.errors import InvalidCredential, MissingCredential

from conftest import bearer, register_user


# ═══════════════════════════════════════════════════════════
# Pure resolution
# ═══════════════════════════════════════════════════════════


def test_header_wins_over_cookie():
    assert extract_credential("Bearer header-token", "cookie-token") == "header-token"


def test_cookie_used_without_header():
    assert extract_credential(None, "cookie-token") == "cookie-token"


@pytest.mark.parametrize("header", ["", "Bearer", "Bearer   ", "Basic abc", "Token x"])
def test_non_bearer_header_counts_as_absent(header):
    assert extract_credential(header, None) is None
    assert extract_credential(header, "cookie-token") == "cookie-token"


def test_bearer_scheme_case_insensitive():
    assert extract_credential("bearer abc", None) == "abc"


def test_resolve_without_credential_is_missing():
    with pytest.raises(MissingCredential):
        resolve_requester(None, None)


def test_resolve_bad_token_is_invalid():
    with pytest.raises(InvalidCredential):
        resolve_requester("Bearer not-a-token", None)


def test_resolve_valid_header_ignores_bad_cookie():
    user_id = str(uuid.uuid4())
    ctx = resolve_requester(f"Bearer {issue_token(user_id, Role.STANDARD)}", "junk")
    assert ctx == RequesterContext(user_id=user_id)


def test_resolve_bad_header_not_rescued_by_good_cookie():
    good = issue_token(str(uuid.uuid4()), Role.STANDARD)
    with pytest.raises(InvalidCredential):
        resolve_requester("Bearer junk", good)


def test_non_uuid_subject_rejected_on_use():
    ctx = RequesterContext(user_id="not-a-uuid")
    with pytest.raises(InvalidCredential):
        ctx.user_uuid


# ═══════════════════════════════════════════════════════════
# Over HTTP
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_no_credential_is_401(client):
    r = await client.get("/api/auth/me")
    assert r.status_code == 401
    assert r.json()["code"] == "MissingCredential"
    assert r.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_garbage_token_is_403(client):
    r = await client.get("/api/auth/me", headers=bearer("garbage"))
    assert r.status_code == 403
    assert r.json()["code"] == "InvalidCredential"


@pytest.mark.asyncio
async def test_expired_token_is_403(client):
    token, user = await register_user(client)
    old = issue_token(
        user["id"], Role.STANDARD, now=datetime.now(timezone.utc) - timedelta(days=8)
    )
    r = await client.get("/api/auth/me", headers=bearer(old))
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_bearer_header_resolves(client, alice):
    r = await client.get("/api/auth/me", headers=alice["headers"])
    assert r.status_code == 200
    assert r.json()["id"] == alice["user"]["id"]


@pytest.mark.asyncio
async def test_cookie_resolves(client, alice):
    r = await client.get("/api/auth/me", headers={"Cookie": f"accessToken={alice['token']}"})
    assert r.status_code == 200
    assert r.json()["username"] == "alice"


@pytest.mark.asyncio
async def test_header_wins_over_cookie_over_http(client, alice, bob):
    r = await client.get(
        "/api/auth/me",
        headers={**bob["headers"], "Cookie": f"accessToken={alice['token']}"},
    )
    assert r.status_code == 200
    assert r.json()["username"] == "bob"


@pytest.mark.asyncio
async def test_public_read_ignores_missing_credential(client):
    r = await client.get("/api/communities")
    assert r.status_code == 200
    assert r.json() == []
