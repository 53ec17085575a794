import json

import httpx
import pytest

from nirapoth.core.constants import ReportStatus
from nirapoth.core.errors import NETWORK_ERROR_MESSAGE, ClientValidationError, RequestError
from nirapoth.core.security import Credentials
from nirapoth.schemas.report import CitizenReport
from nirapoth.services.api_client import TIMEOUT_MESSAGE, ApiClient, flatten_params, normalize_list
from nirapoth.services.report_service import CitizenReportApi

REPORT = {"id": "r1", "vehiclePlate": "DHAKA-1", "violationType": "OTHER", "status": "PENDING"}


def client_for(handler, token=None) -> ApiClient:
    return ApiClient(Credentials(token), base_url="http://api.test/api", transport=httpx.MockTransport(handler))


def test_flatten_params_drops_none_and_renders_primitives():
    params = flatten_params({
        "status": ReportStatus.PENDING,
        "unreadOnly": True,
        "archived": False,
        "search": None,
        "page": 2,
    })
    assert params == {"status": "PENDING", "unreadOnly": "true", "archived": "false", "page": 2}


def test_flatten_params_rejects_nested_values():
    with pytest.raises(ClientValidationError) as exc_info:
        flatten_params({"filters": {"status": "PENDING"}})
    assert exc_info.value.field == "filters"


def test_normalize_list_with_nested_pagination():
    payload = {"reports": [REPORT], "pagination": {"page": 2, "limit": 1, "total": 3, "totalPages": 3}}
    result = normalize_list(payload, "reports", CitizenReport)
    assert [r.id for r in result.items] == ["r1"]
    assert (result.total, result.page, result.limit, result.total_pages) == (3, 2, 1, 3)


def test_normalize_list_with_flat_meta_and_pages_alias():
    payload = {"items": [REPORT, {**REPORT, "id": "r2"}], "total": 5, "page": 1, "limit": 2, "pages": 3}
    result = normalize_list(payload, "reports", CitizenReport)
    assert len(result.items) == 2
    assert result.total_pages == 3


def test_normalize_list_computes_total_pages_when_missing():
    payload = {"reports": [REPORT], "total": 41, "page": 1, "limit": 20}
    assert normalize_list(payload, "reports", CitizenReport).total_pages == 3


def test_normalize_list_accepts_bare_list():
    result = normalize_list([REPORT, {**REPORT, "id": "r2"}], "reports", CitizenReport)
    assert result.total == 2
    assert result.total_pages == 1


async def test_request_unwraps_success_envelope_and_sends_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["auth"] = request.headers.get("Authorization")
        seen["status"] = request.url.params.get("status")
        return httpx.Response(200, json={"success": True, "data": {"reports": [REPORT]}, "message": "ok"})

    async with client_for(handler, token="abc") as client:
        response = await client.get("/citizen-reports/my-reports", params={"status": "PENDING"})

    assert response.success
    assert response.data == {"reports": [REPORT]}
    assert seen == {"path": "/api/citizen-reports/my-reports", "auth": "Bearer abc", "status": "PENDING"}


async def test_request_without_token_sends_no_authorization_header():
    def handler(request: httpx.Request) -> httpx.Response:
        assert "Authorization" not in request.headers
        return httpx.Response(200, json=[1, 2])

    async with client_for(handler) as client:
        response = await client.get("/anything")
    assert response.data == [1, 2]


async def test_error_body_message_is_kept_verbatim():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"success": False, "message": "Report has already been reviewed"})

    async with client_for(handler) as client:
        response = await client.post("/police/review/r1", json={"action": "APPROVED"})

    assert not response.success
    assert response.status_code == 400
    assert response.error.message == "Report has already been reviewed"
    assert response.error.server_message == "Report has already been reviewed"


async def test_success_false_in_2xx_body_is_an_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"success": False, "message": "Quota exceeded"})

    async with client_for(handler) as client:
        response = await client.get("/analytics/dashboard-stats")
    assert not response.success
    assert response.error.message == "Quota exceeded"


async def test_network_failure_becomes_request_error_with_status_zero():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with client_for(handler) as client:
        response = await client.get("/notifications")
    assert response.error.is_network_error
    assert response.error.message == NETWORK_ERROR_MESSAGE
    assert response.error.server_message is None


async def test_timeout_becomes_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("too slow", request=request)

    async with client_for(handler) as client:
        response = await client.get("/notifications")
    assert response.error.status_code == 0
    assert response.error.message == TIMEOUT_MESSAGE


async def test_call_raises_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Report not found"})

    async with client_for(handler) as client:
        with pytest.raises(RequestError) as exc_info:
            await client.call("GET", "/citizen-reports/missing")
    assert exc_info.value.status_code == 404


async def test_resource_api_serialises_models_by_alias():
    bodies = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"success": True, "data": {**REPORT, "status": "APPROVED"}})

    from nirapoth.schemas.report import ReviewReportData

    async with client_for(handler) as client:
        updated = await CitizenReportApi(client).review_report(
            "r1", ReviewReportData(action="APPROVED", review_notes="Plate clearly visible")
        )

    assert bodies == [{"action": "APPROVED", "reviewNotes": "Plate clearly visible"}]
    assert updated.status == ReportStatus.APPROVED
