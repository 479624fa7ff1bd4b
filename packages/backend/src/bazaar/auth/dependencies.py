"""FastAPI auth dependencies — who is making this request?

Learn: a credential can arrive two ways:
1. `Authorization: Bearer <token>` header (API clients, mobile)
2. the HTTP-only cookie set at login (browser)

When both are present the header wins. resolve_requester() is a pure
function over those two strings; the Depends() wrappers just pull them off
the request. Protected router groups attach get_requester once at include
time, and handlers that need the identity declare the same dependency as a
parameter — FastAPI caches it per request, so verification runs once.

Identity comes from the verified token and nothing else. No handler reads
a user id from the body or query string.
"""

import uuid
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from bazaar.auth.tokens import verify_token
from bazaar.config import settings
from bazaar.errors import InvalidCredential, MissingCredential


@dataclass(frozen=True)
class RequesterContext:
    """The authenticated caller. Lives for one request, never persisted."""

    user_id: str

    @property
    def user_uuid(self) -> uuid.UUID:
        try:
            return uuid.UUID(self.user_id)
        except ValueError as e:
            raise InvalidCredential("Invalid token: bad subject") from e


def extract_credential(
    authorization: Optional[str],
    cookie: Optional[str],
) -> Optional[str]:
    """Pick the raw token from the carriers, header first.

    A header that is not a non-empty Bearer credential counts as absent.
    """
    if authorization:
        scheme, _, token = authorization.partition(" ")
        token = token.strip()
        if scheme.lower() == "bearer" and token:
            return token
    if cookie:
        return cookie
    return None


def resolve_requester(
    authorization: Optional[str],
    cookie: Optional[str],
) -> RequesterContext:
    """Raises MissingCredential (401) or InvalidCredential (403)."""
    token = extract_credential(authorization, cookie)
    if token is None:
        raise MissingCredential()
    identity = verify_token(token)
    return RequesterContext(user_id=identity.subject_user_id)


async def get_optional_requester(request: Request) -> Optional[RequesterContext]:
    """Soft variant: None when no credential, but a bad one still fails."""
    authorization = request.headers.get("Authorization")
    cookie = request.cookies.get(settings.auth_cookie_name)
    if extract_credential(authorization, cookie) is None:
        return None
    return resolve_requester(authorization, cookie)


async def get_requester(
    requester: Optional[RequesterContext] = Depends(get_optional_requester),
) -> RequesterContext:
    """Hard variant: 401 when no credential is present."""
    if requester is None:
        raise MissingCredential()
    return requester
