"""Identity token issue and verification.

Learn: the identity token is a JWT signed with settings.jwt_secret carrying
three claims that matter:

    {"id": "<user uuid>", "role": "standard" | "seller", "exp": <epoch>}

(plus "iat"). It is issued at register/login, presented on every request,
and never refreshed: after 7 days the user logs in again. verify_token()
returns a typed IdentityToken so no caller ever pokes at the raw payload.
"""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from bazaar.config import settings
from bazaar.errors import InvalidCredential


class Role(str, enum.Enum):
    STANDARD = "standard"
    SELLER = "seller"

    @classmethod
    def for_user(cls, is_seller: bool) -> "Role":
        return cls.SELLER if is_seller else cls.STANDARD


@dataclass(frozen=True)
class IdentityToken:
    subject_user_id: str
    role: Role
    issued_at: datetime
    expires_at: datetime


def issue_token(
    subject_user_id: str,
    role: Role,
    now: Optional[datetime] = None,
) -> str:
    """Sign a token for a user, valid for settings.token_expire_days."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "id": str(subject_user_id),
        "role": Role(role).value,
        "iat": issued,
        "exp": issued + timedelta(days=settings.token_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, now: Optional[datetime] = None) -> IdentityToken:
    """Verify signature and expiry, then type the claims.

    Raises InvalidCredential for a bad signature, a malformed token,
    missing or ill-typed claims, an unknown role, or an expired token.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["id", "role", "exp", "iat"], "verify_exp": False},
        )
    except jwt.InvalidTokenError as e:
        raise InvalidCredential(f"Invalid token: {e}") from e

    subject = payload["id"]
    if not isinstance(subject, str) or not subject:
        raise InvalidCredential("Invalid token: bad subject")
    try:
        role = Role(payload["role"])
    except ValueError as e:
        raise InvalidCredential("Invalid token: unknown role") from e

    try:
        issued_at = datetime.fromtimestamp(payload["iat"], tz=timezone.utc)
        expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidCredential("Invalid token: bad timestamps") from e

    # Expiry is checked here rather than by PyJWT so callers can pin "now".
    current = now or datetime.now(timezone.utc)
    if current >= expires_at:
        raise InvalidCredential("Token has expired")

    return IdentityToken(
        subject_user_id=subject,
        role=role,
        issued_at=issued_at,
        expires_at=expires_at,
    )
