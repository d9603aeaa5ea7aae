"""
Shared plumbing for the async JSON views.

Views return `OrjsonResponse`, raise `BadRequest` or `Http404` for client errors
and let anything else bubble up to `BaseAsyncView.dispatch`, which turns it into
a logged 500.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import orjson
import structlog
from django.http import Http404, HttpRequest, HttpResponse
from django.views import View
from pydantic import BaseModel, ValidationError

log = structlog.get_logger(__name__).bind(component="ViewsUtils")


class BadRequest(ValueError):
    """The request body is missing, malformed or fails validation."""


def _orjson_default(obj: Any) -> Any:
    # Board types (TeamRow, IndexPath, cells) expose to_dict().
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    msg = f"Cannot encode {type(obj).__name__} as JSON"
    raise TypeError(msg)


class OrjsonResponse(HttpResponse):
    def __init__(self, data: Any, *, status: int = 200, **kw: Any) -> None:
        kw.setdefault("content_type", "application/json")
        body = orjson.dumps(data, default=_orjson_default, option=orjson.OPT_NAIVE_UTC)
        super().__init__(content=body, status=status, **kw)


def _detail(message: str, status: int) -> OrjsonResponse:
    return OrjsonResponse({"detail": message}, status=status)


class BaseAsyncView(View):
    """Async class-based view with JSON errors and pydantic body parsing."""

    async def dispatch(self, request: HttpRequest, *args: Any, **kw: Any):  # type: ignore[override]
        self.request = request
        handler = getattr(self, request.method.lower(), None)
        if handler is None:
            return await self.http_method_not_allowed(request, *args, **kw)

        try:
            return await handler(request, *args, **kw)
        except BadRequest as exc:
            log.info("request_rejected", path=request.path, reason=str(exc))
            return _detail(str(exc), 400)
        except Http404 as exc:
            log.info("resource_missing", path=request.path, reason=str(exc))
            return _detail(str(exc) or "Not found.", 404)
        except Exception:
            log.exception("view_failed", method=request.method, path=request.path)
            return _detail("An internal server error occurred.", 500)

    async def http_method_not_allowed(self, request: HttpRequest, *a: Any, **k: Any) -> HttpResponse:
        log.warning("method_not_allowed", method=request.method, path=request.path)
        return _detail(f'Method "{request.method}" not allowed.', 405)

    @staticmethod
    def parse_body[M: BaseModel](request: HttpRequest, model: type[M]) -> M:
        """Validates the JSON body as *model*. An empty body counts as `{}`."""
        try:
            data = orjson.loads(request.body or b"{}")
        except orjson.JSONDecodeError as e:
            msg = f"Request body is not valid JSON: {e}"
            raise BadRequest(msg) from e
        try:
            return model.model_validate(data)
        except ValidationError as e:
            msg = f"Invalid request body: {e.errors()[0]['msg']}"
            raise BadRequest(msg) from e


class BaseAppView(BaseAsyncView, ABC):
    """
    GET as two steps: `_get_params` reads what the view needs from the URL and
    query string, `_produce_payload` builds the JSON body from those params.
    """

    @abstractmethod
    def _get_params(self, request: HttpRequest, **kwargs) -> dict[str, Any]: ...

    @abstractmethod
    async def _produce_payload(self, params: dict[str, Any]) -> Any: ...

    async def get(self, request: HttpRequest, **kwargs) -> OrjsonResponse:
        return OrjsonResponse(await self._produce_payload(self._get_params(request, **kwargs)))
