"""
Service and catalog routes.

Blueprint: services_bp
Prefix: /api

Endpoints:
    GET    /services             — list services
    POST   /services             — add a service (Service JSON)
    GET    /services/<name>      — service details
    PUT    /services/<name>      — replace a service
    DELETE /services/<name>      — remove a service
    GET    /catalog              — predefined services
    POST   /catalog/<name>       — add a predefined service
"""

from __future__ import annotations

from flask import Blueprint, jsonify
from pydantic import ValidationError

from devenv.core.models.service import Service
from devenv.core.use_cases import services
from devenv.ui.web.server import json_body, workspace

services_bp = Blueprint("services", __name__)


def _parse_service(data: dict | None) -> Service | tuple:
    if data is None:
        return jsonify({"error": "Expected a JSON object", "kind": "invalid_service"}), 400
    try:
        return Service.model_validate(data)
    except ValidationError as e:
        return jsonify({"error": f"Invalid service: {e}", "kind": "invalid_service"}), 400


@services_bp.route("/services")
def list_services():  # type: ignore[no-untyped-def]
    return jsonify([s.model_dump(by_alias=True) for s in services.list_services(workspace())])


@services_bp.route("/services", methods=["POST"])
def add_service():  # type: ignore[no-untyped-def]
    parsed = _parse_service(json_body())
    if not isinstance(parsed, Service):
        return parsed
    svc = services.add_service(workspace(), parsed)
    return jsonify(svc.model_dump(by_alias=True)), 201


@services_bp.route("/services/<name>")
def get_service(name: str):  # type: ignore[no-untyped-def]
    svc = services.get_service(workspace(), name)
    if svc is None:
        return jsonify({"error": f"Service '{name}' does not exist", "kind": "not_found"}), 404
    return jsonify(svc.model_dump(by_alias=True))


@services_bp.route("/services/<name>", methods=["PUT"])
def update_service(name: str):  # type: ignore[no-untyped-def]
    data = json_body()
    if data is not None:
        data["name"] = name
    parsed = _parse_service(data)
    if not isinstance(parsed, Service):
        return parsed
    svc = services.update_service(workspace(), parsed)
    return jsonify(svc.model_dump(by_alias=True))


@services_bp.route("/services/<name>", methods=["DELETE"])
def remove_service(name: str):  # type: ignore[no-untyped-def]
    detached = services.remove_service(workspace(), name)
    return jsonify({"ok": True, "detached_from": detached})


@services_bp.route("/catalog")
def list_catalog():  # type: ignore[no-untyped-def]
    return jsonify([t.model_dump() for t in services.list_catalog()])


@services_bp.route("/catalog/<name>", methods=["POST"])
def add_catalog_service(name: str):  # type: ignore[no-untyped-def]
    svc = services.add_catalog_service(workspace(), name)
    return jsonify(svc.model_dump(by_alias=True)), 201
