from __future__ import annotations

from flask import Flask

from ..common.http import domain_failure, internal_failure, success, token_required
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    auth_required = token_required(container.identity_verifier)

    @app.route("/api/locations", methods=["GET"], endpoint="locations_list")
    @auth_required
    def list_locations(current):
        try:
            locations = container.office_directory.list()
            return success([loc.to_dict() for loc in locations], total=len(locations))
        except Exception as e:
            return internal_failure("Failed to get locations", e)

    @app.route("/api/locations/<location_id>", methods=["GET"], endpoint="locations_detail")
    @auth_required
    def get_location(current, location_id: str):
        try:
            return success(container.office_directory.get(location_id).to_dict())
        except DomainError as e:
            return domain_failure(e)
        except Exception as e:
            return internal_failure("Failed to get location", e)
