"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from dynaschema.interfaces.api.errors import register_error_handlers
from dynaschema.interfaces.api.resources.health import HealthResource


def create_app(health_resource: HealthResource | None = None) -> App:
    """Create Falcon ASGI app that renders engine errors as JSON."""
    app = falcon.asgi.App()
    register_error_handlers(app)
    app.add_route("/v1/health", health_resource or HealthResource())
    return app
