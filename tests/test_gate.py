"""Unit tests for AuthenticationGate: token outcomes and principal attachment."""

import asyncio
import unittest
from unittest.mock import MagicMock, patch

from fastapi import Request, Response

from taskboard.api.gate import AuthenticationGate, extract_bearer_token
from taskboard.core.security import TokenExpiredError, TokenInvalidError
from taskboard.schemas.auth import Principal

ALICE = Principal(id=1, email="alice@example.com", first_name="Alice", last_name="Smith")


def _request(authorization: str | None = None, state: dict | None = None) -> Request:
    headers = [(b"authorization", authorization.encode())] if authorization else []
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/v1/teams/1",
        "query_string": b"",
        "headers": headers,
        "state": state if state is not None else {},
    }
    return Request(scope)


class TestExtractBearerToken(unittest.TestCase):

    def test_extracts_token(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def"), "abc.def")

    def test_rejects_other_schemes_and_blanks(self) -> None:
        self.assertIsNone(extract_bearer_token(None))
        self.assertIsNone(extract_bearer_token("Basic dXNlcjpwdw=="))
        self.assertIsNone(extract_bearer_token("Bearer   "))


class TestAuthenticate(unittest.TestCase):

    def setUp(self) -> None:
        self.tokens = MagicMock()
        self.db = MagicMock()
        self.gate = AuthenticationGate(self.tokens, MagicMock(return_value=self.db))

    def test_attached_principal_is_kept_without_reading_token(self) -> None:
        request = _request("Bearer whatever", state={"principal": ALICE})
        self.assertIs(asyncio.run(self.gate.authenticate(request)), ALICE)
        self.tokens.subject_of.assert_not_called()

    def test_no_header_is_unauthenticated(self) -> None:
        self.assertIsNone(asyncio.run(self.gate.authenticate(_request())))
        self.tokens.subject_of.assert_not_called()

    def test_expired_token_logged_at_info(self) -> None:
        self.tokens.subject_of.side_effect = TokenExpiredError("Token has expired")
        with self.assertLogs("taskboard.api.gate", level="INFO") as logs:
            self.assertIsNone(asyncio.run(self.gate.authenticate(_request("Bearer old"))))
        self.assertEqual(logs.records[0].levelname, "INFO")

    def test_invalid_token_logged_at_warning(self) -> None:
        self.tokens.subject_of.side_effect = TokenInvalidError("Invalid token: bad signature")
        with self.assertLogs("taskboard.api.gate", level="WARNING") as logs:
            self.assertIsNone(asyncio.run(self.gate.authenticate(_request("Bearer forged"))))
        self.assertIn("bad signature", logs.output[0])

    def test_valid_token_resolves_principal_and_closes_session(self) -> None:
        self.tokens.subject_of.return_value = "alice@example.com"
        with patch("taskboard.api.gate.user_service.load_principal", return_value=ALICE) as load:
            principal = asyncio.run(self.gate.authenticate(_request("Bearer good")))
        self.assertIs(principal, ALICE)
        load.assert_called_once_with(self.db, "alice@example.com")
        self.db.close.assert_called_once()

    def test_unknown_subject_is_unauthenticated(self) -> None:
        self.tokens.subject_of.return_value = "gone@example.com"
        with patch("taskboard.api.gate.user_service.load_principal", return_value=None):
            self.assertIsNone(asyncio.run(self.gate.authenticate(_request("Bearer good"))))


class TestGateCall(unittest.TestCase):
    """The gate always hands the request on, authenticated or not."""

    def test_invalid_token_still_reaches_next_handler(self) -> None:
        tokens = MagicMock()
        tokens.subject_of.side_effect = TokenInvalidError("Invalid token")
        gate = AuthenticationGate(tokens, MagicMock())
        request = _request("Bearer junk")
        seen = []

        async def call_next(req: Request) -> Response:
            seen.append(req.state.principal)
            return Response(status_code=204)

        with self.assertLogs("taskboard.api.gate", level="WARNING"):
            response = asyncio.run(gate(request, call_next))
        self.assertEqual(response.status_code, 204)
        self.assertEqual(seen, [None])


if __name__ == "__main__":
    unittest.main()
