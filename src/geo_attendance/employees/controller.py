from __future__ import annotations

from flask import Flask

from ..common.http import domain_failure, internal_failure, json_body, success, token_required
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.identity_verifier)

    @app.route("/api/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        payload = json_body()
        try:
            result = container.auth_service.authenticate(payload.get("nip"), payload.get("password"))
            return success(result.to_dict(), message="Login successful")
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Internal server error", e)

    @app.route("/api/auth/profile", methods=["GET"], endpoint="auth_profile")
    @auth_required
    def profile(current):
        try:
            employee = container.auth_service.get_profile(current)
            return success(employee.to_public_dict())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Internal server error", e)

    @app.route("/api/auth/logout", methods=["POST"], endpoint="auth_logout")
    @auth_required
    def logout(current):
        # Tokens are stateless; the client discards its copy.
        return success(None, message="Logout successful. Please remove token from client.")
