"""
Project routes.

Blueprint: projects_bp
Prefix: /api

Endpoints:
    GET    /projects                              — list projects
    POST   /projects                              — add {name, environment}
    GET    /projects/<name>                       — project details
    PUT    /projects/<name>                       — replace {environment}
    DELETE /projects/<name>                       — remove project
    POST   /projects/<name>/services/<service>    — attach service
    DELETE /projects/<name>/services/<service>    — detach service
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from devenv.core.use_cases import projects
from devenv.ui.web.server import json_body, workspace

projects_bp = Blueprint("projects", __name__)


_NOT_AN_OBJECT = {"error": "Expected a JSON object", "kind": "invalid_request"}


def _environment(data: dict) -> dict[str, str]:
    env = data.get("environment") or {}
    if not isinstance(env, dict):
        return {}
    return {str(k): str(v) for k, v in env.items()}


@projects_bp.route("/projects")
def list_projects():  # type: ignore[no-untyped-def]
    return jsonify([p.model_dump() for p in projects.list_projects(workspace())])


@projects_bp.route("/projects", methods=["POST"])
def add_project():  # type: ignore[no-untyped-def]
    data = json_body()
    if data is None:
        return jsonify(_NOT_AN_OBJECT), 400
    name = (data.get("name") or "").strip()
    if not name:
        return jsonify({"error": "Missing 'name'"}), 400

    project = projects.add_project(workspace(), name, _environment(data))
    return jsonify(project.model_dump()), 201


@projects_bp.route("/projects/<name>")
def get_project(name: str):  # type: ignore[no-untyped-def]
    project = projects.get_project(workspace(), name)
    if project is None:
        return jsonify({"error": f"Project '{name}' does not exist", "kind": "not_found"}), 404
    return jsonify(project.model_dump())


@projects_bp.route("/projects/<name>", methods=["PUT"])
def update_project(name: str):  # type: ignore[no-untyped-def]
    data = json_body()
    if data is None:
        return jsonify(_NOT_AN_OBJECT), 400
    project = projects.update_project(workspace(), name, _environment(data))
    return jsonify(project.model_dump())


@projects_bp.route("/projects/<name>", methods=["DELETE"])
def remove_project(name: str):  # type: ignore[no-untyped-def]
    project = projects.remove_project(workspace(), name)
    return jsonify({"ok": True, "slug": project.slug})


@projects_bp.route("/projects/<name>/services/<service>", methods=["POST"])
def attach_service(name: str, service: str):  # type: ignore[no-untyped-def]
    changed = projects.attach_service(workspace(), name, service)
    return jsonify({"ok": True, "changed": changed})


@projects_bp.route("/projects/<name>/services/<service>", methods=["DELETE"])
def detach_service(name: str, service: str):  # type: ignore[no-untyped-def]
    changed = projects.detach_service(workspace(), name, service)
    return jsonify({"ok": True, "changed": changed})
