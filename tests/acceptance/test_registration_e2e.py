"""
End-to-end acceptance tests: a user-registration service built on rop.

Exercises validation (ensure_all), lookups (ensure_found_async), chaining
(bind / bind_and_conserve / tap) and the HTTP adapter together, using an
in-memory repository and mailer.

Each test follows Given/When/Then BDD structure in its docstring.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

import pytest

from rop import Result, ResultAssertions, StatusCode, TypedResult
from rop.combinators import bind_and_conserve_async, bind_async, tap_async
from rop.http_support import build_response

pytestmark = pytest.mark.acceptance


# ── Domain ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class RegisterCommand:
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class User:
    id: int
    email: str


@dataclass
class InMemoryUsers:
    rows: dict[str, User] = field(default_factory=dict)

    async def find_by_email(self, email: str) -> User | None:
        await asyncio.sleep(0)
        return self.rows.get(email)

    def add(self, email: str) -> TypedResult[User]:
        user = User(id=len(self.rows) + 1, email=email)
        self.rows[email] = user
        return TypedResult.success(user, "User registered")


@dataclass
class FakeMailer:
    sent: list[str] = field(default_factory=list)
    fail: bool = False

    async def send_welcome(self, user: User) -> Result:
        if self.fail:
            return Result.conflict("Welcome email could not be sent")
        self.sent.append(user.email)
        return Result.success("Welcome email sent")


# ── Service under test ───────────────────────────────────────────────────────


class RegistrationService:
    def __init__(self, users: InMemoryUsers, mailer: FakeMailer) -> None:
        self._users = users
        self._mailer = mailer
        self.audit: list[str] = []

    async def _reject_taken(self, command: RegisterCommand) -> TypedResult[RegisterCommand]:
        if await self._users.find_by_email(command.email) is not None:
            return TypedResult.conflict(f"{command.email} is already registered")
        return TypedResult.success(command)

    async def register(self, command: RegisterCommand) -> TypedResult[User]:
        validated = TypedResult.success(command).ensure_all(
            (lambda c: "@" in c.email, "Email", "Email is invalid"),
            (lambda c: len(c.password) >= 8, "Password", "Password must have at least 8 characters"),
            (lambda c: c.password != c.email, "Password", "Password must differ from email"),
        )
        return await tap_async(
            bind_and_conserve_async(
                bind_async(
                    bind_async(validated, self._reject_taken),
                    lambda c: self._users.add(c.email),
                ),
                self._mailer.send_welcome,
            ),
            lambda user: self.audit.append(f"registered {user.id}"),
        )

    async def profile(self, email: str) -> TypedResult[dict]:
        found = await TypedResult.ensure_found_async(
            self._users.find_by_email(email), f"No user with email {email}"
        )
        return found.map(lambda u: {"id": u.id, "email": u.email})


@pytest.fixture()
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture()
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture()
def service(users: InMemoryUsers, mailer: FakeMailer) -> RegistrationService:
    return RegistrationService(users, mailer)


# ── Scenarios ────────────────────────────────────────────────────────────────


class TestRegistration:
    @pytest.mark.asyncio
    async def test_successful_registration(self, service, mailer) -> None:
        """
        GIVEN a valid command for a new email
        WHEN the user registers
        THEN the user is stored, welcomed, audited and returned with the mailer's message.
        """
        result = await service.register(RegisterCommand("alice@example.com", "s3cret-pass"))

        user = ResultAssertions.assert_success(result)
        assert user == User(1, "alice@example.com")
        assert result.message == "Welcome email sent"
        assert mailer.sent == ["alice@example.com"]
        assert service.audit == ["registered 1"]

    @pytest.mark.asyncio
    async def test_invalid_command_collects_all_errors(self, service, users, mailer) -> None:
        """
        GIVEN a command breaking every rule
        WHEN the user registers
        THEN one BadRequest lists every violated rule and nothing else runs.
        """
        result = await service.register(RegisterCommand("bob", "bob"))

        ResultAssertions.assert_failure(result, StatusCode.BAD_REQUEST)
        ResultAssertions.assert_validation_error(result, "Email", "Email is invalid")
        ResultAssertions.assert_validation_error(
            result, "Password", "Password must have at least 8 characters"
        )
        ResultAssertions.assert_validation_error(
            result, "Password", "Password must differ from email"
        )
        assert users.rows == {}
        assert mailer.sent == []
        assert service.audit == []

        body, status = build_response(result)
        assert status == 400
        assert body["errors"]["Password"] == [
            "Password must have at least 8 characters",
            "Password must differ from email",
        ]

    @pytest.mark.asyncio
    async def test_duplicate_email_is_a_conflict(self, service) -> None:
        """
        GIVEN an already registered email
        WHEN the same email registers again
        THEN a Conflict comes back and maps to HTTP 409.
        """
        await service.register(RegisterCommand("alice@example.com", "s3cret-pass"))
        result = await service.register(RegisterCommand("alice@example.com", "other-pass"))

        ResultAssertions.assert_failure_message_equals(
            result, "alice@example.com is already registered"
        )
        assert build_response(result)[1] == 409

    @pytest.mark.asyncio
    async def test_mailer_failure_propagates(self, service, mailer, users) -> None:
        """
        GIVEN a mailer that fails
        WHEN the user registers
        THEN the mailer's failure is the outcome and no audit entry is written.
        """
        mailer.fail = True
        result = await service.register(RegisterCommand("carol@example.com", "s3cret-pass"))

        ResultAssertions.assert_failure(result, StatusCode.CONFLICT)
        assert "carol@example.com" in users.rows
        assert service.audit == []


class TestProfileLookup:
    @pytest.mark.asyncio
    async def test_found_profile(self, service) -> None:
        await service.register(RegisterCommand("dave@example.com", "s3cret-pass"))
        body, status = build_response(await service.profile("dave@example.com"))
        assert status == 200
        assert body == {"id": 1, "email": "dave@example.com"}

    @pytest.mark.asyncio
    async def test_missing_profile(self, service) -> None:
        """
        GIVEN no user with the email
        WHEN the profile is requested
        THEN a NotFound problem document is produced.
        """
        body, status = build_response(await service.profile("nobody@example.com"))
        assert status == 404
        assert body["detail"] == "No user with email nobody@example.com"
        assert body["title"] == "Not Found"
