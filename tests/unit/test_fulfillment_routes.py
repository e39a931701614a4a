"""
API tests for the CJ fulfill endpoint.

Run: pytest tests/unit/test_fulfillment_routes.py -v
"""

from unittest.mock import patch

import pytest

from config.settings import Settings, get_settings
from tests.factories import CJFactory, make_response


FULFILL_URL = "/api/cj-fulfill"


@pytest.fixture
def mock_requests():
    """Patch outbound HTTP so no test reaches CJ."""
    with patch("integrations.cj_dropshipping.requests.post") as post, \
            patch("integrations.cj_dropshipping.requests.get") as get:
        yield post, get


class TestFulfillGuards:
    """Method and shared-secret checks."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "PATCH", "DELETE"])
    def test_non_post_returns_405(self, test_client, auth_headers, mock_requests, method):
        post, get = mock_requests

        response = test_client.request(method, FULFILL_URL, headers=auth_headers)

        assert response.status_code == 405
        assert response.json()["error"]["message"] == "POST only"
        post.assert_not_called()
        get.assert_not_called()

    def test_missing_secret_returns_401(self, test_client, fulfill_payload, mock_requests):
        post, get = mock_requests

        response = test_client.post(FULFILL_URL, json=fulfill_payload)

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
        post.assert_not_called()
        get.assert_not_called()

    def test_wrong_secret_returns_401(self, test_client, fulfill_payload, mock_requests):
        post, _ = mock_requests

        response = test_client.post(
            FULFILL_URL,
            json=fulfill_payload,
            headers={"x-fulfill-secret": "nope"},
        )

        assert response.status_code == 401
        post.assert_not_called()

    def test_secret_checked_before_body(self, test_client):
        """A bad caller gets 401 even with an invalid body."""
        response = test_client.post(FULFILL_URL, json={"unexpected": True})

        assert response.status_code == 401

    def test_malformed_json_without_secret_returns_401(self, test_client, mock_requests):
        """The body isn't read until the secret checks out."""
        post, get = mock_requests

        response = test_client.post(
            FULFILL_URL,
            content=b"{not json",
            headers={"content-type": "application/json"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"
        post.assert_not_called()
        get.assert_not_called()

    def test_unconfigured_secret_rejects_everyone(self, test_client, auth_headers, fulfill_payload):
        from main import app

        app.dependency_overrides[get_settings] = lambda: Settings(
            _env_file=None, orders_secret=None, cj_api_key="key"
        )

        response = test_client.post(
            FULFILL_URL,
            json=fulfill_payload,
            headers=auth_headers,
        )

        assert response.status_code == 401


class TestFulfillManual:
    """No CJ key configured."""

    def test_manual_status_with_display_names(
        self, test_client_without_cj, auth_headers, fulfill_payload, mock_requests
    ):
        post, get = mock_requests

        response = test_client_without_cj.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "manual"
        assert data["reason"] == "CJ_API_KEY not configured"
        assert data["sessionId"] == "cs_test_abcdef1234567890"
        assert data["items"] == [
            {"id": "vr_lite", "name": "VR Phone Headset"},
            {"id": "unknown_sku", "name": "unknown_sku"},
        ]
        assert data["shipping"] == {
            "name": "Ada Lovelace",
            "address": "12 Analytical Way",
            "city": "London",
            "state": "Greater London",
            "zip": "NW1 6XE",
            "country": "GB",
        }
        assert "unmapped" not in data
        post.assert_not_called()
        get.assert_not_called()


class TestFulfillWithCJ:
    """CJ key configured, outbound calls mocked at the HTTP layer."""

    def test_auto_fulfillment(self, test_client, auth_headers, fulfill_payload, mock_requests):
        post, get = mock_requests
        post.side_effect = [
            make_response(CJFactory.token("tok-1")),
            make_response(CJFactory.order(code=200)),
        ]
        get.return_value = make_response(CJFactory.search(
            CJFactory.product(vid="vid-vr", name="VR Box", variant_price=9.5)
        ))

        response = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "auto"
        assert data["cjResponse"] == CJFactory.order(code=200)
        assert data["itemsOrdered"] == [{"name": "VR Box", "cost": 9.5}]
        assert data["unmapped"] == ["unknown_sku"]

        order_call = post.call_args_list[1]
        assert order_call.kwargs["headers"] == {"CJ-Access-Token": "tok-1"}
        assert order_call.kwargs["json"]["orderNumber"] == "ef1234567890"
        assert order_call.kwargs["json"]["products"] == [{"vid": "vid-vr", "quantity": 1}]
        assert order_call.kwargs["json"]["shippingPhone"] == "0000000000"
        assert order_call.kwargs["json"]["remark"] == "SkillzStorm | ada@example.com"

    def test_unmapped_omitted_when_everything_resolves(
        self, test_client, auth_headers, fulfill_payload, mock_requests
    ):
        post, get = mock_requests
        post.side_effect = [
            make_response(CJFactory.token()),
            make_response(CJFactory.order(code=200)),
        ]
        get.return_value = make_response(CJFactory.search(CJFactory.product()))
        fulfill_payload["items"] = ["vr_lite", "fidget_cube"]

        data = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers).json()

        assert data["status"] == "auto"
        assert "unmapped" not in data
        assert len(data["itemsOrdered"]) == 2

    def test_partial_when_cj_rejects_order(
        self, test_client, auth_headers, fulfill_payload, mock_requests
    ):
        post, get = mock_requests
        rejection = CJFactory.order(code=1603001, message="Balance insufficient")
        post.side_effect = [make_response(CJFactory.token()), make_response(rejection)]
        get.return_value = make_response(CJFactory.search(CJFactory.product()))

        response = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "partial"
        assert data["cjResponse"] == rejection

    def test_no_matches_is_manual(self, test_client, auth_headers, fulfill_payload, mock_requests):
        post, get = mock_requests
        post.return_value = make_response(CJFactory.token())
        get.return_value = make_response(CJFactory.search())

        data = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers).json()

        assert data["status"] == "manual"
        assert "no matching supplier products" in data["reason"].lower()
        assert data["unmapped"] == ["vr_lite", "unknown_sku"]
        assert data["shipping"]["city"] == "London"
        assert post.call_count == 1  # token only, no order

    def test_auth_failure_is_error_with_echo(
        self, test_client, auth_headers, fulfill_payload, mock_requests
    ):
        post, get = mock_requests
        post.return_value = make_response(CJFactory.token(None, code=1600001))

        response = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "error"
        assert data["error"].startswith("CJ auth failed")
        assert data["sessionId"] == "cs_test_abcdef1234567890"
        assert [item["id"] for item in data["items"]] == ["vr_lite", "unknown_sku"]
        assert data["shipping"]["name"] == "Ada Lovelace"
        get.assert_not_called()

    def test_odd_cj_product_fields_still_ordered(
        self, test_client, auth_headers, fulfill_payload, mock_requests
    ):
        """An image list and a NaN price don't sink the order."""
        post, get = mock_requests
        post.side_effect = [
            make_response(CJFactory.token()),
            make_response(CJFactory.order(code=200)),
        ]
        product = CJFactory.product(vid="vid-vr", name="VR Box", variant_price="NaN", product_price=None)
        product["productImage"] = ["https://cj.example/a.jpg"]
        get.return_value = make_response(CJFactory.search(product))

        data = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers).json()

        assert data["status"] == "auto"
        assert data["itemsOrdered"] == [{"name": "VR Box", "cost": 0.0}]

    def test_missing_session_id_is_422(self, test_client, auth_headers, fulfill_payload, mock_requests):
        post, _ = mock_requests
        del fulfill_payload["sessionId"]

        response = test_client.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        post.assert_not_called()


class TestFulfillBody:
    """Request body parsing, after the secret check."""

    def test_malformed_json_with_secret_is_422(self, test_client, auth_headers, mock_requests):
        post, _ = mock_requests

        response = test_client.post(
            FULFILL_URL,
            content=b"{not json",
            headers={**auth_headers, "content-type": "application/json"},
        )

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_JSON"
        post.assert_not_called()

    def test_numeric_zip_accepted(
        self, test_client_without_cj, auth_headers, fulfill_payload, mock_requests
    ):
        fulfill_payload["shippingZip"] = 94105
        fulfill_payload["shippingState"] = None

        response = test_client_without_cj.post(FULFILL_URL, json=fulfill_payload, headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "manual"
        assert data["shipping"]["zip"] == "94105"
        assert data["shipping"]["state"] is None


class TestHealth:
    """Tests for /health"""

    def test_health_reports_manual_mode_without_key(self, test_client_without_cj):
        with patch("main.get_settings") as mock_settings:
            mock_settings.return_value = Settings(_env_file=None, cj_api_key=None)

            data = test_client_without_cj.get("/health").json()

        assert data["status"] == "healthy"
        assert data["cj"] == {"configured": False, "mode": "manual"}
