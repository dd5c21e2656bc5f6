"""JSON:API error objects."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any


class JSONAPIErrorBuilder:
    """Build JSON:API error objects and error documents."""

    def error_object(
        self,
        *,
        status: str | None = None,
        code: str | None = None,
        title: str | None = None,
        detail: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API error object."""
        error: dict[str, Any] = {}
        if status is not None:
            error["status"] = status
        if code is not None:
            error["code"] = code
        if title is not None:
            error["title"] = title
        if detail is not None:
            error["detail"] = detail
        if source is not None:
            error["source"] = source
        if meta is not None:
            error["meta"] = meta
        if not error:
            raise ValueError("Error object must include at least one field.")
        return error

    def error_document(self, errors: list[dict[str, Any]]) -> dict[str, Any]:
        """Return a JSON:API document with an errors array."""
        return {"errors": errors}


def _phrase(status_code: int) -> str | None:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


class Error(Exception):
    """
    An error rendered as a JSON:API error object.
    Errors can be raised from request handlers or passed to the renderer directly.
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value

    def __init__(
        self,
        detail: str | None = None,
        *,
        status_code: int | None = None,
        code: str | None = None,
        title: str | None = None,
        source: dict[str, Any] | None = None,
        meta: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(detail or title or "")
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail
        self.code = code
        self.title = title if title is not None else _phrase(self.status_code)
        self.source = source
        self.meta = meta

    def to_dict(self) -> dict[str, Any]:
        return JSONAPIErrorBuilder().error_object(
            status=str(self.status_code),
            code=self.code,
            title=self.title,
            detail=self.detail,
            source=self.source,
            meta=self.meta,
        )


class NotFoundError(Error):
    status_code = HTTPStatus.NOT_FOUND.value


class ValidationError(Error):
    """Invalid client input, ``source`` should point at the offending member."""

    status_code = HTTPStatus.BAD_REQUEST.value
