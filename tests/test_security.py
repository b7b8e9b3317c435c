"""
Tests for token handling and role permissions.
"""
from datetime import timedelta

import pytest
from jose import jwt

from stockflow.core.config import settings
from stockflow.core.errors import AuthenticationError, AuthorizationError
from stockflow.core.permissions import permission_checker
from stockflow.core.security import create_access_token, decode_access_token
from stockflow.models.actor import ActorKind, AdminActor, EmployeeActor, make_actor


def test_token_round_trip_gives_tagged_actor():
    actor = decode_access_token(create_access_token("abc", ActorKind.ADMIN))
    assert isinstance(actor, AdminActor)
    assert actor.id == "abc"
    assert actor.is_admin

    actor = decode_access_token(create_access_token("def"))
    assert isinstance(actor, EmployeeActor)
    assert not actor.is_admin


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_invalid_tokens(token):
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_expired_token():
    token = create_access_token("abc", ActorKind.ADMIN, expires_delta=timedelta(seconds=-1))
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_unknown_role_and_missing_claims():
    token = jwt.encode({"sub": "abc", "role": "auditor"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(AuthenticationError, match="Unknown role"):
        decode_access_token(token)

    token = jwt.encode({"sub": "abc"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(AuthenticationError):
        decode_access_token(token)


def test_role_permissions():
    admin = make_actor("admin", "a1")
    employee = make_actor("employee", "e1")

    for permission in ("stock_requests:approve", "stock_requests:issue", "stock:delete", "clients:write"):
        assert permission_checker.has_permission(admin, permission)

    assert permission_checker.has_permission(employee, "stock_requests:write")
    assert permission_checker.has_permission(employee, "stock_requests:receive")
    assert permission_checker.has_permission(employee, "egg_fish_medication:write")
    assert not permission_checker.has_permission(employee, "stock_requests:approve")
    assert not permission_checker.has_permission(employee, "stock_requests:issue")
    assert not permission_checker.has_permission(None, "stock:read")

    with pytest.raises(AuthorizationError):
        permission_checker.ensure_permission(employee, "stores:write")
