"""
Environment routes — compose file, proxy, start/stop, host checks.

Blueprint: environment_bp
Prefix: /api

Endpoints:
    GET  /compose                — compiled docker-compose.yml (text)
    POST /compose                — write docker-compose.yml
    GET  /compose/exists         — whether the file is on disk
    POST /proxy/bootstrap        — traefik.toml + certificate if missing
    GET  /environment/status     — docker + environment state
    POST /environment/start      — compose up
    POST /environment/stop       — compose down
    GET  /hosts                  — required hosts entries and presence
    GET  /hosts/block            — missing entries as text to append
    GET  /system                 — machine facts
    POST /reset                  — forget all services and projects
"""

from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify

from devenv.core.use_cases import environment, system
from devenv.ui.web.server import json_body, workspace

environment_bp = Blueprint("environment", __name__)


@environment_bp.route("/compose")
def get_compose():  # type: ignore[no-untyped-def]
    return Response(environment.generate_manifest(workspace()), mimetype="application/yaml")


@environment_bp.route("/compose", methods=["POST"])
def write_compose():  # type: ignore[no-untyped-def]
    path = environment.write_manifest(workspace())
    return jsonify({"ok": True, "path": str(path)})


@environment_bp.route("/compose/exists")
def compose_exists():  # type: ignore[no-untyped-def]
    return jsonify({"exists": environment.manifest_exists(workspace())})


@environment_bp.route("/proxy/bootstrap", methods=["POST"])
def proxy_bootstrap():  # type: ignore[no-untyped-def]
    return jsonify(environment.bootstrap_proxy(workspace()).to_dict())


@environment_bp.route("/environment/status")
def environment_status():  # type: ignore[no-untyped-def]
    return jsonify(environment.environment_status(workspace()).to_dict())


@environment_bp.route("/environment/start", methods=["POST"])
def environment_start():  # type: ignore[no-untyped-def]
    data = json_body()
    if data is None:
        return jsonify({"error": "Expected a JSON object", "kind": "invalid_request"}), 400
    output = environment.start_environment(
        workspace(),
        regenerate=bool(data.get("regenerate", True)),
        guard=current_app.config.get("SHUTDOWN_GUARD"),
    )
    return jsonify({"ok": True, "message": "Environment started successfully", "output": output})


@environment_bp.route("/environment/stop", methods=["POST"])
def environment_stop():  # type: ignore[no-untyped-def]
    output = environment.stop_environment(
        workspace(), guard=current_app.config.get("SHUTDOWN_GUARD"),
    )
    return jsonify({"ok": True, "message": "Environment stopped successfully", "output": output})


@environment_bp.route("/hosts")
def hosts_entries():  # type: ignore[no-untyped-def]
    entries = system.check_hosts(workspace())
    return jsonify([{"entry": entry, "present": present} for entry, present in entries])


@environment_bp.route("/hosts/block")
def hosts_block():  # type: ignore[no-untyped-def]
    return Response(system.missing_hosts_block(workspace()), mimetype="text/plain")


@environment_bp.route("/system")
def system_info():  # type: ignore[no-untyped-def]
    return jsonify(system.system_info(workspace()))


@environment_bp.route("/reset", methods=["POST"])
def reset():  # type: ignore[no-untyped-def]
    system.reset(workspace())
    return jsonify({"ok": True})
