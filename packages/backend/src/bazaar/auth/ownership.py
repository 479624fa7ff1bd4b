"""Ownership guard — may this requester mutate this resource?

Learn: callers follow a fixed order:

    1. load the target            → miss raises NotFound (404)
    2. authorize_*(...)           → Deny
    3. require_owner(decision)    → raises Forbidden (403)
    4. mutate

so "does not exist" is never reported as "not yours". Direct ownership
compares the resource's user column to the requester. Indirect ownership
(theme customizations) compares the resource's store to the store the
requester owns, resolved with resolve_requester_store().

IDs are compared in canonical form: tokens carry strings in whatever
spelling they were issued with, the ORM hands back uuid.UUID objects.
Anything that parses as a UUID is compared as one, so "ABCD..." and
"{abcd...}" name the same owner.
"""

import enum
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.db.models import Store
from bazaar.errors import Forbidden

Id = Union[str, uuid.UUID, None]


class DenyReason(str, enum.Enum):
    FORBIDDEN = "forbidden"
    NO_REQUESTER = "no_requester"


@dataclass(frozen=True)
class Allow:
    pass


@dataclass(frozen=True)
class Deny:
    reason: DenyReason


Decision = Union[Allow, Deny]


def _normalize(value: Id) -> Optional[str]:
    """Canonical text of an id. Any UUID spelling maps to the hyphenated form."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        return str(uuid.UUID(text))
    except ValueError:
        return text


def authorize_mutation(requester_user_id: Id, owner_user_id: Id) -> Decision:
    """Allow iff the requester is the resource's owning user."""
    requester = _normalize(requester_user_id)
    if requester is None:
        return Deny(DenyReason.NO_REQUESTER)
    owner = _normalize(owner_user_id)
    if owner is None or owner != requester:
        return Deny(DenyReason.FORBIDDEN)
    return Allow()


def authorize_store_mutation(requester_store_id: Id, resource_store_id: Id) -> Decision:
    """Allow iff the resource hangs off the store the requester owns.

    A requester without a store owns nothing.
    """
    requester_store = _normalize(requester_store_id)
    if requester_store is None:
        return Deny(DenyReason.NO_REQUESTER)
    resource_store = _normalize(resource_store_id)
    if resource_store is None or resource_store != requester_store:
        return Deny(DenyReason.FORBIDDEN)
    return Allow()


def require_owner(decision: Decision, message: str = "You do not own this resource") -> None:
    if isinstance(decision, Deny):
        raise Forbidden(message, details={"reason": decision.reason.value})


async def resolve_requester_store(
    db: AsyncSession, requester_user_id: Id
) -> Optional[Store]:
    """The store owned by the requester, or None."""
    requester = _normalize(requester_user_id)
    if requester is None:
        return None
    try:
        owner_id = uuid.UUID(requester)
    except ValueError:
        return None
    result = await db.execute(select(Store).where(Store.owner_id == owner_id))
    return result.scalars().first()
