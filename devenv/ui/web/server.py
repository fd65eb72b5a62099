"""
Web API server — Flask app factory.

Exposes the same commands as the CLI as JSON endpoints under /api,
for the desktop front-end. All state lives in the Workspace handed to
``create_app``.
"""

from __future__ import annotations

import logging

from flask import Flask, current_app, jsonify, request

from devenv.core.context import Workspace
from devenv.core.errors import (
    DependencyCycleError,
    DevEnvError,
    DuplicateNameError,
    DuplicateSlugError,
    EngineUnavailableError,
    IOFailure,
    NotFoundError,
    SerializationError,
    ServiceInUseError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[DevEnvError], int], ...] = (
    (DuplicateNameError, 409),
    (DuplicateSlugError, 409),
    (ServiceInUseError, 409),
    (DependencyCycleError, 409),
    (NotFoundError, 404),
    (EngineUnavailableError, 503),
    (IOFailure, 500),
    (SerializationError, 500),
)


def http_status(error: DevEnvError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def create_app(workspace: Workspace, guard: object | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        workspace: The workspace every route operates on.
        guard: Optional ShutdownGuard armed by /api/environment/start.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    app.config["WORKSPACE"] = workspace
    app.config["SHUTDOWN_GUARD"] = guard

    from devenv.ui.web.routes_environment import environment_bp
    from devenv.ui.web.routes_projects import projects_bp
    from devenv.ui.web.routes_services import services_bp

    app.register_blueprint(projects_bp, url_prefix="/api")
    app.register_blueprint(services_bp, url_prefix="/api")
    app.register_blueprint(environment_bp, url_prefix="/api")

    @app.errorhandler(DevEnvError)
    def _devenv_error(error: DevEnvError):  # type: ignore[no-untyped-def]
        status = http_status(error)
        if status >= 500:
            logger.error("%s: %s", error.kind, error)
        return jsonify(error.to_dict()), status

    logger.info("Web API app created (config=%s)", workspace.layout.config_dir)
    return app


def workspace() -> Workspace:
    return current_app.config["WORKSPACE"]


def json_body() -> dict | None:
    """The request's JSON object, {} without a body, None for any other JSON value."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    return data if isinstance(data, dict) else None


def run_server(
    app: Flask,
    host: str = "127.0.0.1",
    port: int = 1420,
    debug: bool = False,
) -> None:
    """Run the Flask development server."""
    logger.info("Starting web API on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False)
