from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from geo_attendance.core.exceptions import (
    AuthenticationError,
    AuthExpiredError,
    AuthInvalidError,
    AuthRequiredError,
    NotFoundError,
    ValidationError,
)
from geo_attendance.employees.model import CurrentEmployee

PASSWORD = "password123"


def test_login_issues_token_for_active_employee(container):
    result = container.auth_service.authenticate("EMP001", PASSWORD)

    assert result.user.nip == "EMP001"
    body = result.to_dict()
    assert set(body) == {"token", "user"}
    assert "password" not in str(body["user"])

    payload = jwt.decode(result.token, "test-jwt-secret", algorithms=["HS256"])
    assert payload["id"] == 1
    assert payload["nip"] == "EMP001"
    assert payload["exp"] - payload["iat"] == 24 * 3600


def test_login_wrong_password(container):
    with pytest.raises(AuthenticationError, match="Invalid NIP or password"):
        container.auth_service.authenticate("EMP001", "wrong")


def test_login_unknown_and_inactive_look_the_same(container):
    with pytest.raises(AuthenticationError, match="Invalid NIP or password"):
        container.auth_service.authenticate("EMP999", PASSWORD)
    with pytest.raises(AuthenticationError, match="Invalid NIP or password"):
        container.auth_service.authenticate("EMP003", PASSWORD)


@pytest.mark.parametrize("nip,password", [(None, PASSWORD), ("EMP001", None), ("", ""), ("  ", PASSWORD)])
def test_login_requires_both_fields(container, nip, password):
    with pytest.raises(ValidationError, match="NIP and password are required"):
        container.auth_service.authenticate(nip, password)


def test_verify_header_resolves_employee(container):
    token = container.auth_service.authenticate("EMP001", PASSWORD).token

    current = container.identity_verifier.verify_header(f"Bearer {token}")

    assert isinstance(current, CurrentEmployee)
    assert (current.id, current.nip, current.name) == (1, "EMP001", "Budi Santoso")


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   ", "Token abc", "bearer abc"])
def test_verify_header_requires_bearer_token(container, header):
    with pytest.raises(AuthRequiredError, match="No token provided. Please login first."):
        container.identity_verifier.verify_header(header)


def test_verify_header_rejects_garbage(container):
    with pytest.raises(AuthInvalidError, match="Invalid token"):
        container.identity_verifier.verify_header("Bearer not-a-jwt")


def test_verify_header_rejects_foreign_signature(container):
    forged = jwt.encode(
        {"id": 1, "exp": datetime.now(timezone.utc) + timedelta(hours=1)}, "someone-else", algorithm="HS256"
    )
    with pytest.raises(AuthInvalidError, match="Invalid token"):
        container.identity_verifier.verify_header(f"Bearer {forged}")


def test_verify_header_rejects_expired_token(container, employees_repo):
    issued = datetime.now(timezone.utc) - timedelta(hours=25)
    token = container.identity_verifier.issue(employees_repo.get_by_id(1), now=issued)

    with pytest.raises(AuthExpiredError, match="Token expired. Please login again."):
        container.identity_verifier.verify_header(f"Bearer {token}")


def test_verify_header_rejects_deactivated_employee(container, employees_repo):
    token = container.identity_verifier.issue(employees_repo.get_by_id(3))

    with pytest.raises(AuthInvalidError, match="User not found or inactive"):
        container.identity_verifier.verify_header(f"Bearer {token}")


def test_profile_of_missing_employee(container):
    ghost = CurrentEmployee(id=42, nip="EMP042", name="Ghost")
    with pytest.raises(NotFoundError, match="User not found"):
        container.auth_service.get_profile(ghost)
