"""Health check endpoint."""

import falcon.asgi


class HealthResource:
    """GET /v1/health - liveness."""

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        resp.media = {"status": "ok"}
        resp.status = falcon.HTTP_200
