"""JSON:API error handling middleware."""

from typing import Any

from fastapi_jsonapi_versioned.config import log
from fastapi_jsonapi_versioned.core.errors import Error
from fastapi_jsonapi_versioned.rendering.renderer import DocumentRenderer


class ErrorHandlerMiddleware:
    """Convert exceptions into JSON:API error documents.

    :class:`Error` exceptions keep their status and members, anything else
    becomes a ``500`` error without leaking the exception text.
    """

    def __init__(self, app: Any, owner: Any = "") -> None:
        """Store the ASGI app for middleware chaining."""
        self.app = app
        self.owner = owner

    async def __call__(self, scope: dict[str, Any], receive: Any, send: Any) -> None:
        """Handle exceptions and serialize JSON:API error documents."""
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return
        try:
            await self.app(scope, receive, send)
        except Error as exc:
            log.warning("%s: %s", type(exc).__name__, exc)
            response = DocumentRenderer(self.owner).render_response(exc)
            await response(scope, receive, send)
        except Exception:
            log.exception("Unhandled error in %s", scope.get("path"))
            error = Error(status_code=500, title="Internal Server Error")
            response = DocumentRenderer(self.owner).render_response(error)
            await response(scope, receive, send)
