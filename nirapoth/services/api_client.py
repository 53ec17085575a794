"""
Authenticated HTTP client for the NiraPoth REST backend.

``ApiClient.request`` never raises for HTTP failures: it returns an
``ApiResponse`` envelope whose ``error`` is a ``RequestError``. Thunks use
``ApiClient.call``, which unwraps the envelope and raises instead.
"""
import enum
import logging
import time
from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel

from nirapoth.core.config import settings
from nirapoth.core.errors import ClientValidationError, RequestError
from nirapoth.core.security import Credentials
from nirapoth.schemas.common import ApiResponse, ResourceList

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

TIMEOUT_MESSAGE = "The server took too long to respond. Please try again."

_UNSET: Any = object()


def flatten_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Render query params as a flat key -> primitive mapping.

    ``None`` values are dropped, booleans become ``true``/``false``, enums
    their value. Nested mappings are rejected.
    """
    flat: Dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        if isinstance(value, Mapping):
            raise ClientValidationError(key, f"Query parameter '{key}' must be a primitive value")
        if isinstance(value, (list, tuple)):
            flat[key] = [_primitive(v) for v in value]
        else:
            flat[key] = _primitive(value)
    return flat


def _primitive(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _parse_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _page_number(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def normalize_list(
    payload: Any,
    items_key: str,
    model: Type[M],
    page: int = 1,
    limit: Optional[int] = None,
) -> ResourceList[M]:
    """Turn any list response shape into a ``ResourceList``.

    Accepted shapes: a bare list; ``{items_key: [...], pagination: {...}}``;
    and a flat ``{items_key: [...], total, page, limit, totalPages}``.
    ``pages`` is accepted for ``totalPages``.
    """
    limit = limit or settings.DEFAULT_PAGE_LIMIT

    if payload is None:
        payload = []

    if isinstance(payload, list):
        raw_items: List[Any] = payload
        meta: Mapping[str, Any] = {"total": len(payload), "page": page, "limit": max(limit, len(payload))}
    elif isinstance(payload, Mapping):
        raw_items = payload.get(items_key)
        if raw_items is None:
            raw_items = payload.get("items") or payload.get("data") or []
        meta = payload.get("pagination") or payload
    else:
        raise RequestError(f"Unexpected list payload for '{items_key}'", status_code=200, details=payload)

    items = [model.model_validate(item) for item in raw_items]
    total_pages = meta.get("totalPages", meta.get("pages"))

    return ResourceList[model].build(
        items,
        total=_page_number(meta.get("total"), len(items)),
        page=_page_number(meta.get("page"), page),
        limit=_page_number(meta.get("limit"), limit),
        total_pages=None if total_pages is None else _page_number(total_pages, 0),
    )


class ApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` carrying explicit credentials."""

    def __init__(
        self,
        credentials: Optional[Credentials] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = _UNSET,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials or Credentials()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/") + "/"
        self.timeout = settings.request_timeout if timeout is _UNSET else timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> ApiResponse:
        query = flatten_params(params)
        if isinstance(json, BaseModel):
            json = json.model_dump(by_alias=True, exclude_none=True, mode="json")

        started = time.perf_counter()
        try:
            response = await self._client.request(
                method.upper(),
                path.lstrip("/"),
                params=query,
                json=json,
                headers=self.credentials.authorization_header(),
            )
        except httpx.TimeoutException as e:
            logger.warning("[API] %s %s timed out after %.1fs", method.upper(), path, time.perf_counter() - started)
            return ApiResponse(success=False, error=RequestError(TIMEOUT_MESSAGE, status_code=0, details=repr(e)),
                               message=TIMEOUT_MESSAGE)
        except httpx.HTTPError as e:
            logger.warning("[API] %s %s failed: %s", method.upper(), path, e)
            error = RequestError.network(e)
            return ApiResponse(success=False, error=error, message=error.message)

        duration_ms = (time.perf_counter() - started) * 1000
        body = _parse_body(response)

        if response.is_success:
            logger.debug("[API] %s %s - %d in %.0fms", method.upper(), path, response.status_code, duration_ms)
            if isinstance(body, dict) and "success" in body:
                if not body["success"]:
                    error = RequestError.from_response_body(response.status_code, body)
                    return ApiResponse(success=False, status_code=response.status_code, error=error,
                                       message=error.message)
                return ApiResponse(success=True, status_code=response.status_code, data=body.get("data"),
                                   message=body.get("message"))
            return ApiResponse(success=True, status_code=response.status_code, data=body)

        error = RequestError.from_response_body(response.status_code, body)
        logger.warning("[API] %s %s - %d in %.0fms: %s", method.upper(), path, response.status_code,
                       duration_ms, error.message)
        return ApiResponse(success=False, status_code=response.status_code, error=error, message=error.message)

    async def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> ApiResponse:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> ApiResponse:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> ApiResponse:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> ApiResponse:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> ApiResponse:
        return await self.request("DELETE", path)

    async def call(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Like ``request`` but returns ``data`` or raises ``RequestError``."""
        response = await self.request(method, path, params=params, json=json)
        if not response.success:
            raise response.error
        return response.data


class ResourceApi:
    """Base for the per-family API classes."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def _list(
        self,
        path: str,
        items_key: str,
        model: Type[M],
        params: Optional[Mapping[str, Any]] = None,
    ) -> ResourceList[M]:
        params = dict(params or {})
        data = await self.client.call("GET", path, params=params)
        return normalize_list(
            data,
            items_key,
            model,
            page=_page_number(params.get("page"), 1),
            limit=_page_number(params.get("limit"), settings.DEFAULT_PAGE_LIMIT),
        )

    async def _many(self, path: str, model: Type[M], params: Optional[Mapping[str, Any]] = None) -> List[M]:
        data = await self.client.call("GET", path, params=params)
        return [model.model_validate(item) for item in data or []]

    async def _one(
        self,
        method: str,
        path: str,
        model: Type[M],
        json: Any = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> M:
        data = await self.client.call(method, path, params=params, json=json)
        return model.model_validate(data)
