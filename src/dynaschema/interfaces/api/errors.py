"""Rendering of engine errors at the HTTP boundary."""

import logging

import falcon
import falcon.asgi

from dynaschema.domain.exceptions import DynaSchemaError

logger = logging.getLogger(__name__)


def error_body(error: DynaSchemaError) -> dict[str, str]:
    return {"type": error.kind, "code": error.code, "message": error.message}


async def handle_dynaschema_error(
    req: falcon.asgi.Request,
    resp: falcon.asgi.Response,
    ex: DynaSchemaError,
    params: dict,
) -> None:
    """Render ``ex`` with its suggested status code."""
    if ex.status_code >= 500:
        logger.error("request_failed", extra={"path": req.path, "code": ex.code})
    resp.status = falcon.code_to_http_status(ex.status_code)
    resp.media = error_body(ex)


def register_error_handlers(app: falcon.asgi.App) -> None:
    app.add_error_handler(DynaSchemaError, handle_dynaschema_error)
