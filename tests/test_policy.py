"""Tests for the access policy helpers."""

import pytest

from ecommerce_api.errors import ForbiddenError
from ecommerce_api.models import Role
from ecommerce_api.policy import (
    Principal,
    can_access,
    is_admin,
    is_owner,
    require_admin,
    require_owner_or_admin,
    scope_user_filter,
)

ADMIN = Principal(id="admin-1", role=Role.ADMIN)
ALICE = Principal(id="alice", role=Role.USER)


class TestPredicates:
    def test_is_admin(self):
        assert is_admin(ADMIN)
        assert not is_admin(ALICE)

    def test_is_owner(self):
        assert is_owner(ALICE, "alice")
        assert not is_owner(ALICE, "bob")

    def test_can_access(self):
        assert can_access(ALICE, "alice")
        assert can_access(ADMIN, "alice")
        assert not can_access(ALICE, "bob")


class TestGuards:
    def test_require_admin(self):
        require_admin(ADMIN)
        with pytest.raises(ForbiddenError, match="Administrator access required"):
            require_admin(ALICE)

    def test_require_admin_custom_message(self):
        with pytest.raises(ForbiddenError, match="Only administrators"):
            require_admin(ALICE, "Only administrators can do that")

    def test_require_owner_or_admin(self):
        require_owner_or_admin(ALICE, "alice")
        require_owner_or_admin(ADMIN, "alice")
        with pytest.raises(ForbiddenError):
            require_owner_or_admin(ALICE, "bob")


class TestScopeUserFilter:
    @pytest.mark.parametrize("requested", [None, "bob", "alice"])
    def test_user_is_pinned_to_self(self, requested):
        assert scope_user_filter(ALICE, requested) == "alice"

    @pytest.mark.parametrize("requested", [None, "bob"])
    def test_admin_gets_what_was_asked(self, requested):
        assert scope_user_filter(ADMIN, requested) == requested
