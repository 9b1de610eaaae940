"""Tests for the authorization policy: ownership-chain membership and admin override."""

import unittest
from unittest.mock import MagicMock

from taskboard.core.exceptions import NotAuthorizedError, NotFoundError
from taskboard.models import BoardList, Permission, Role
from taskboard.schemas.auth import Principal
from taskboard.services import teams as team_service
from taskboard.services.authorization import (
    effective_permissions,
    is_admin,
    require_access,
    require_admin,
    require_move,
    require_same_identity_or_admin,
    resolve_root_team,
)
from tests.support import make_chain, make_user, new_session, seed_roles


def _principal(permissions: set[str]) -> Principal:
    return Principal(id=1, email="p@example.com", first_name="P", last_name="Q", permissions=frozenset(permissions))


class TestPureChecks(unittest.TestCase):

    def test_is_admin(self) -> None:
        self.assertTrue(is_admin(_principal({"default", "admin"})))
        self.assertFalse(is_admin(_principal({"default"})))
        self.assertFalse(is_admin(_principal(set())))

    def test_effective_permissions_skip_retired(self) -> None:
        default = Permission(code="default", description="", retired=False)
        admin = Permission(code="admin", description="", retired=True)
        extra = Permission(code="extra", description="", retired=False)
        user = MagicMock()
        user.roles = [
            Role(code="user", description="", permissions=[default, admin], retired=False),
            Role(code="old", description="", permissions=[extra], retired=True),
        ]
        self.assertEqual(effective_permissions(user), frozenset({"default"}))

    def test_same_identity_or_admin(self) -> None:
        require_same_identity_or_admin(_principal({"default"}), 1)
        require_same_identity_or_admin(_principal({"admin"}), 99)
        with self.assertRaises(NotAuthorizedError):
            require_same_identity_or_admin(_principal({"default"}), 99)

    def test_require_admin(self) -> None:
        require_admin(_principal({"admin"}))
        with self.assertRaises(NotAuthorizedError):
            require_admin(_principal({"default"}))


class TestOwnershipChain(unittest.TestCase):
    """Membership of the root team (or admin) grants access at every depth."""

    def setUp(self) -> None:
        self.db = new_session()
        seed_roles(self.db)
        _, self.alice = make_user(self.db, "alice@example.com")
        _, self.bob = make_user(self.db, "bob@example.com")
        _, self.admin = make_user(self.db, "root@example.com", admin=True)
        self.team = team_service.create_team(self.db, self.alice, "Core")
        self.board, self.list, self.card = make_chain(self.db, self.team)

    def tearDown(self) -> None:
        self.db.close()

    def _chain(self):
        return (self.team, self.board, self.list, self.card)

    def test_root_team_resolves_at_every_depth(self) -> None:
        for resource in self._chain():
            self.assertEqual(resolve_root_team(self.db, resource).id, self.team.id)

    def test_member_allowed_at_every_depth(self) -> None:
        for resource in self._chain():
            require_access(self.db, self.alice, resource)

    def test_non_member_denied_at_every_depth(self) -> None:
        for resource in self._chain():
            with self.assertRaises(NotAuthorizedError):
                require_access(self.db, self.bob, resource)

    def test_admin_allowed_without_membership(self) -> None:
        for resource in self._chain():
            require_access(self.db, self.admin, resource)

    def test_membership_is_read_at_decision_time(self) -> None:
        team_service.add_members(self.db, self.alice, self.team.id, ["bob@example.com"])
        require_access(self.db, self.bob, self.card)
        team_service.remove_members(self.db, self.alice, self.team.id, ["bob@example.com"])
        with self.assertRaises(NotAuthorizedError):
            require_access(self.db, self.bob, self.card)

    def test_broken_chain_is_not_found(self) -> None:
        orphan = BoardList(name="Orphan", priority=0, board_id=999)
        with self.assertRaises(NotFoundError):
            resolve_root_team(self.db, orphan)

    def test_unknown_resource_kind(self) -> None:
        with self.assertRaises(TypeError):
            resolve_root_team(self.db, object())

    def test_move_needs_both_teams(self) -> None:
        other = team_service.create_team(self.db, self.bob, "Other")
        with self.assertRaises(NotAuthorizedError):
            require_move(self.db, self.alice, self.board, other)
        with self.assertRaises(NotAuthorizedError):
            require_move(self.db, self.bob, self.board, other)
        require_move(self.db, self.admin, self.board, other)

    def test_move_within_own_team(self) -> None:
        second = team_service.create_team(self.db, self.alice, "Second")
        require_move(self.db, self.alice, self.board, second)


if __name__ == "__main__":
    unittest.main()
