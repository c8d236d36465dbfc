from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash

from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_TOKEN_HOURS
from ..core.exceptions import (
    AuthenticationError,
    AuthExpiredError,
    AuthInvalidError,
    AuthRequiredError,
    NotFoundError,
    ValidationError,
)
from .model import CurrentEmployee, Employee
from .repository import EmployeeRepository

JWT_ALGORITHM = "HS256"


class IdentityVerifier:
    """Issues signed identity tokens and resolves bearer headers back to employees."""

    def __init__(self, employees: EmployeeRepository, *, secret: str, expires_hours: int = DEFAULT_TOKEN_HOURS):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._employees = employees
        self._secret = secret
        self._lifetime = timedelta(hours=int(expires_hours))

    def issue(self, employee: Employee, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "id": employee.id,
            "nip": employee.nip,
            "name": employee.name,
            "iat": issued_at,
            "exp": issued_at + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> dict:
        try:
            return jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM], options={"require": ["exp", "id"]})
        except jwt.ExpiredSignatureError:
            raise AuthExpiredError("Token expired. Please login again.")
        except jwt.InvalidTokenError:
            raise AuthInvalidError("Invalid token")

    def verify_header(self, authorization: Optional[str]) -> CurrentEmployee:
        scheme, _, token = (authorization or "").partition(" ")
        if scheme != "Bearer" or not token.strip():
            raise AuthRequiredError("No token provided. Please login first.")

        payload = self.decode(token.strip())
        try:
            employee_id = int(payload["id"])
        except (TypeError, ValueError):
            raise AuthInvalidError("Invalid token")

        employee = self._employees.get_by_id(employee_id)
        if not employee or not employee.is_active:
            raise AuthInvalidError("User not found or inactive")
        return CurrentEmployee.from_employee(employee)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: CurrentEmployee

    def to_dict(self) -> dict:
        return {"token": self.token, "user": self.user.to_dict()}


class AuthService:
    """Use case: authenticate employee (login) and read the own profile."""

    def __init__(self, employees: EmployeeRepository, verifier: IdentityVerifier):
        self._employees = employees
        self._verifier = verifier

    def authenticate(self, nip: Optional[str], password: Optional[str]) -> LoginResult:
        try:
            nip = require_non_empty(nip, "NIP")
            require_non_empty(password, "Password")
        except ValidationError:
            raise ValidationError("NIP and password are required")

        employee = self._employees.get_active_by_nip(nip)
        if not employee:
            raise AuthenticationError("Invalid NIP or password")

        try:
            ok = check_password_hash(employee.password_hash, password)
        except (TypeError, ValueError):
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid NIP or password")

        return LoginResult(token=self._verifier.issue(employee), user=CurrentEmployee.from_employee(employee))

    def get_profile(self, current: CurrentEmployee) -> Employee:
        employee = self._employees.get_by_id(current.id)
        if not employee:
            raise NotFoundError("User not found")
        return employee
