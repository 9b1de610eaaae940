"""HTTP scenarios through the FastAPI app: registration, login, refresh and access control."""

import unittest

from fastapi.testclient import TestClient

from taskboard.core.database import engine
from taskboard.main import app
from taskboard.models import Base

API = "/api/v1"
ADMIN = ("admin@taskboard.test", "admin-pw")


def _auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class ApiTestCase(unittest.TestCase):
    """Each test starts from an empty database; startup preloads the admin account."""

    def setUp(self) -> None:
        Base.metadata.drop_all(bind=engine)
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)

    def register(self, email: str, password: str = "pw123", first: str = "Test") -> dict:
        response = self.client.post(
            f"{API}/users",
            json={"first_name": first, "last_name": "User", "email_address": email, "password": password},
        )
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def login(self, email: str, password: str = "pw123") -> dict:
        response = self.client.post(f"{API}/authenticate", json={"username": email, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()

    def token_for(self, email: str, password: str = "pw123") -> str:
        return self.login(email, password)["access_token"]


class TestRegistrationAndLogin(ApiTestCase):

    def test_register_then_duplicate(self) -> None:
        alice = self.register("alice@example.com", first="Alice")
        self.assertEqual(alice["email"], "alice@example.com")
        self.assertEqual(alice["roles"], ["user"])
        self.assertNotIn("password", alice)

        response = self.client.post(
            f"{API}/users",
            json={"first_name": "A", "last_name": "B", "email_address": "alice@example.com", "password": "pw123"},
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error_code"], "L1001")

    def test_wrong_password_is_401_with_empty_body(self) -> None:
        self.register("alice@example.com")
        response = self.client.post(f"{API}/authenticate", json={"username": "alice@example.com", "password": "nope"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.content, b"")

    def test_unknown_user_is_indistinguishable(self) -> None:
        response = self.client.post(f"{API}/authenticate", json={"username": "ghost@example.com", "password": "pw123"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.content, b"")

    def test_login_returns_token_pair(self) -> None:
        alice = self.register("alice@example.com")
        tokens = self.login("alice@example.com")
        self.assertEqual(tokens["token_type"], "bearer")
        self.assertEqual(tokens["expires_in"], 900)
        self.assertNotEqual(tokens["access_token"], tokens["refresh_token"])

        response = self.client.get(f"{API}/users/{alice['id']}", headers=_auth(tokens["access_token"]))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["id"], alice["id"])

    def test_refresh(self) -> None:
        self.register("alice@example.com")
        tokens = self.login("alice@example.com")
        response = self.client.post(f"{API}/authenticate/refresh", json={"refresh_token": tokens["refresh_token"]})
        self.assertEqual(response.status_code, 200)
        self.assertIn("access_token", response.json())

        response = self.client.post(f"{API}/authenticate/refresh", json={"refresh_token": "garbage"})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.content, b"")

    def test_retired_user_cannot_log_in_or_use_tokens(self) -> None:
        alice = self.register("alice@example.com")
        token = self.token_for("alice@example.com")
        response = self.client.delete(f"{API}/users/{alice['id']}", headers=_auth(token))
        self.assertEqual(response.status_code, 204)

        response = self.client.get(f"{API}/users/{alice['id']}", headers=_auth(token))
        self.assertEqual(response.status_code, 401)
        response = self.client.post(f"{API}/authenticate", json={"username": "alice@example.com", "password": "pw123"})
        self.assertEqual(response.status_code, 401)


class TestGate(ApiTestCase):

    def test_protected_route_without_token(self) -> None:
        response = self.client.get(f"{API}/teams/1")
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.headers.get("www-authenticate"), "Bearer")

    def test_garbage_token_on_protected_route(self) -> None:
        response = self.client.get(f"{API}/teams/1", headers=_auth("not-a-jwt"))
        self.assertEqual(response.status_code, 401)

    def test_garbage_token_on_public_route_still_works(self) -> None:
        response = self.client.post(
            f"{API}/users",
            headers=_auth("not-a-jwt"),
            json={"first_name": "C", "last_name": "D", "email_address": "carol@example.com", "password": "pw123"},
        )
        self.assertEqual(response.status_code, 200)

    def test_routes_without_principal_dependency_need_no_token(self) -> None:
        self.assertEqual(self.client.get("/").status_code, 200)
        self.assertEqual(self.client.get("/openapi.json").status_code, 200)
        response = self.client.post(f"{API}/authenticate", json={"username": "ghost@example.com", "password": "pw"})
        self.assertNotIn("www-authenticate", response.headers)

    def test_health_is_public(self) -> None:
        response = self.client.get(f"{API}/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertEqual(body["database"], "connected")
        self.assertEqual(body["environment"], "test")


class TestTeamAccess(ApiTestCase):

    def setUp(self) -> None:
        super().setUp()
        self.alice = self.register("alice@example.com", first="Alice")
        self.bob = self.register("bob@example.com", first="Bob")
        self.alice_token = self.token_for("alice@example.com")
        self.bob_token = self.token_for("bob@example.com")
        self.admin_token = self.token_for(*ADMIN)
        response = self.client.post(f"{API}/teams", json={"name": "Core"}, headers=_auth(self.alice_token))
        self.assertEqual(response.status_code, 200)
        self.team = response.json()

    def test_member_non_member_and_admin(self) -> None:
        url = f"{API}/teams/{self.team['id']}"
        self.assertEqual(self.client.get(url, headers=_auth(self.alice_token)).status_code, 200)

        response = self.client.get(url, headers=_auth(self.bob_token))
        self.assertEqual(response.status_code, 403)
        body = response.json()
        self.assertEqual(body["error_code"], "L1002")
        self.assertEqual(body["error_description"], "You are not authorized to perform that operation.")
        self.assertIn("timestamp", body)

        self.assertEqual(self.client.get(url, headers=_auth(self.admin_token)).status_code, 200)

    def test_missing_team_is_404(self) -> None:
        response = self.client.get(f"{API}/teams/9999", headers=_auth(self.alice_token))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["error_code"], "L1000")

    def test_membership_by_address(self) -> None:
        url = f"{API}/teams/{self.team['id']}/members"
        response = self.client.put(url, json={"members": ["bob@example.com"]}, headers=_auth(self.alice_token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 2)
        self.assertEqual(
            self.client.get(f"{API}/teams/{self.team['id']}", headers=_auth(self.bob_token)).status_code, 200
        )

        response = self.client.request(
            "DELETE", url, json={"members": ["bob@example.com"]}, headers=_auth(self.alice_token)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual([m["email"] for m in response.json()], ["alice@example.com"])

    def test_list_teams_for_user(self) -> None:
        response = self.client.get(
            f"{API}/teams", params={"user_id": self.alice["id"]}, headers=_auth(self.alice_token)
        )
        self.assertEqual(response.status_code, 200)
        page = response.json()
        self.assertEqual(page["total"], 1)
        self.assertEqual(page["items"][0]["name"], "Core")

        response = self.client.get(
            f"{API}/teams", params={"user_id": self.alice["id"]}, headers=_auth(self.bob_token)
        )
        self.assertEqual(response.status_code, 403)

    def test_board_list_card_chain(self) -> None:
        board = self.client.post(
            f"{API}/boards",
            json={"name": "Release", "team_id": self.team["id"]},
            headers=_auth(self.alice_token),
        ).json()
        todo = self.client.post(
            f"{API}/lists", json={"name": "To Do", "board_id": board["id"]}, headers=_auth(self.alice_token)
        ).json()
        response = self.client.post(
            f"{API}/cards", json={"title": "Write docs", "list_id": todo["id"]}, headers=_auth(self.alice_token)
        )
        self.assertEqual(response.status_code, 200)
        card = response.json()

        self.assertEqual(
            self.client.get(f"{API}/cards/{card['id']}", headers=_auth(self.bob_token)).status_code, 403
        )
        response = self.client.get(f"{API}/cards", params={"list_id": todo["id"]}, headers=_auth(self.alice_token))
        self.assertEqual(response.json()["items"][0]["title"], "Write docs")

    def test_list_batch_across_boards_is_400(self) -> None:
        boards = [
            self.client.post(
                f"{API}/boards", json={"name": name, "team_id": self.team["id"]}, headers=_auth(self.alice_token)
            ).json()
            for name in ("One", "Two")
        ]
        lists = [
            self.client.post(
                f"{API}/lists", json={"name": "L", "board_id": b["id"]}, headers=_auth(self.alice_token)
            ).json()
            for b in boards
        ]
        response = self.client.put(
            f"{API}/lists",
            json={
                "board_id": boards[0]["id"],
                "lists": [{"id": lst["id"], "name": "Renamed", "priority": 1} for lst in lists],
            },
            headers=_auth(self.alice_token),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error_code"], "L1004")


class TestAdminRoutes(ApiTestCase):

    def test_roles_require_admin(self) -> None:
        self.register("bob@example.com")
        bob_token = self.token_for("bob@example.com")
        self.assertEqual(self.client.get(f"{API}/roles", headers=_auth(bob_token)).status_code, 403)

        admin_token = self.token_for(*ADMIN)
        response = self.client.get(f"{API}/roles", headers=_auth(admin_token))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(r["code"] for r in response.json()["items"]), ["admin", "user"])

    def test_permission_conflict_is_409(self) -> None:
        admin_token = self.token_for(*ADMIN)
        response = self.client.post(
            f"{API}/permissions", json={"code": "admin", "description": "dup"}, headers=_auth(admin_token)
        )
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.json()["error_code"], "L1003")

    def test_promoting_a_user(self) -> None:
        bob = self.register("bob@example.com")
        admin_token = self.token_for(*ADMIN)
        response = self.client.put(
            f"{API}/users/{bob['id']}/roles", json={"roles": ["user", "admin"]}, headers=_auth(admin_token)
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(sorted(response.json()["roles"]), ["admin", "user"])

        bob_token = self.token_for("bob@example.com")
        self.assertEqual(self.client.get(f"{API}/roles", headers=_auth(bob_token)).status_code, 200)


if __name__ == "__main__":
    unittest.main()
