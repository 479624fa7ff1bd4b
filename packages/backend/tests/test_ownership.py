"""Ownership guard — pure decisions, no database."""

import uuid

import pytest

from bazaar.auth.ownership import (
    Allow,
    Deny,
    DenyReason,
    authorize_mutation,
    authorize_store_mutation,
    require_owner,
)
from bazaar.errors import Forbidden


def test_owner_allowed():
    uid = str(uuid.uuid4())
    assert authorize_mutation(uid, uid) == Allow()


def test_uuid_and_string_compare_equal():
    uid = uuid.uuid4()
    assert authorize_mutation(str(uid), uid) == Allow()


def test_other_user_denied():
    decision = authorize_mutation(str(uuid.uuid4()), uuid.uuid4())
    assert decision == Deny(DenyReason.FORBIDDEN)


@pytest.mark.parametrize("requester", [None, "", "   "])
def test_no_requester_denied(requester):
    assert authorize_mutation(requester, uuid.uuid4()) == Deny(DenyReason.NO_REQUESTER)


def test_missing_owner_denied():
    assert authorize_mutation(str(uuid.uuid4()), None) == Deny(DenyReason.FORBIDDEN)


def test_store_mutation_same_store_allowed():
    store_id = uuid.uuid4()
    assert authorize_store_mutation(store_id, str(store_id)) == Allow()


def test_store_mutation_other_store_denied():
    assert authorize_store_mutation(uuid.uuid4(), uuid.uuid4()) == Deny(DenyReason.FORBIDDEN)


def test_store_mutation_without_store_denied():
    assert authorize_store_mutation(None, uuid.uuid4()) == Deny(DenyReason.NO_REQUESTER)


def test_require_owner_passes_allow():
    require_owner(Allow())


def test_require_owner_raises_on_deny():
    with pytest.raises(Forbidden) as exc:
        require_owner(Deny(DenyReason.FORBIDDEN), "nope")
    assert exc.value.status_code == 403
    assert exc.value.message == "nope"
    assert exc.value.details == {"reason": "forbidden"}


@pytest.mark.parametrize(
    "spelling",
    [
        lambda u: str(u).upper(),
        lambda u: u.hex,
        lambda u: "{" + str(u) + "}",
        lambda u: f"  {u}  ",
    ],
)
def test_any_uuid_spelling_names_the_same_owner(spelling):
    uid = uuid.uuid4()
    assert authorize_mutation(spelling(uid), uid) == Allow()
    assert authorize_mutation(spelling(uid), str(uid)) == Allow()
    assert authorize_store_mutation(spelling(uid), uid) == Allow()


def test_non_uuid_ids_still_compare_as_text():
    assert authorize_mutation("user-1", "user-1") == Allow()
    assert authorize_mutation("user-1", "USER-1") == Deny(DenyReason.FORBIDDEN)
