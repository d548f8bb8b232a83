"""Tests for the REST catalog gateway."""

import asyncio
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
import requests

from catalogcart.exceptions import GatewayError
from catalogcart.gateway.config import GatewaySettings
from catalogcart.gateway.rest import RestGateway
from catalogcart.model import CatalogItemDraft
from catalogcart.protocol import Gateway


def make_response(payload=None, content=b"x", error=None):
    """Build a mocked requests response."""
    response = Mock()
    response.content = content
    response.json.return_value = payload
    if error:
        response.raise_for_status.side_effect = error
    else:
        response.raise_for_status.return_value = None
    return response


class TestGatewaySettings:
    """Test cases for GatewaySettings."""

    def test_defaults(self):
        """Test default configuration."""
        settings = GatewaySettings()
        assert settings.endpoint == "http://localhost:3000/articles"
        assert settings.timeout == 30

    def test_settings_with_env_vars(self, monkeypatch):
        """Test settings loading from environment variables."""
        monkeypatch.setenv("CATALOGCART_GATEWAY_ENDPOINT", "http://shop.test/items")
        monkeypatch.setenv("CATALOGCART_GATEWAY_TIMEOUT", "5")

        settings = GatewaySettings()
        assert settings.endpoint == "http://shop.test/items"
        assert settings.timeout == 5


class TestRestGateway:
    """Test cases for RestGateway."""

    @pytest.fixture
    def settings(self):
        return GatewaySettings(endpoint="http://test.example.com/articles/", timeout=5)

    @pytest.fixture
    def gateway(self, settings):
        return RestGateway(settings)

    @pytest.fixture
    def item_payload(self):
        return {
            "id": "1",
            "name": "Runner",
            "brand": "Acme",
            "price": 59.99,
            "category": "Shoes",
            "description": "Light running shoe",
            "stock": 4,
            "image": "https://example.com/default.jpg",
        }

    def test_implements_protocol(self, gateway):
        """Test that RestGateway satisfies the Gateway protocol."""
        assert isinstance(gateway, Gateway)

    def test_endpoint_strips_trailing_slash(self, gateway):
        """Test endpoint normalization."""
        assert gateway.endpoint == "http://test.example.com/articles"

    @patch("requests.Session.request")
    def test_list_items(self, mock_request, gateway, item_payload):
        """Test listing items."""
        mock_request.return_value = make_response([item_payload])

        items = asyncio.run(gateway.list_items())

        assert len(items) == 1
        assert items[0].name == "Runner"
        mock_request.assert_called_once_with(
            "GET", "http://test.example.com/articles", json=None, timeout=5
        )

    @patch("requests.Session.request")
    def test_list_items_not_a_list(self, mock_request, gateway):
        """Test that a non-list payload is a gateway error."""
        mock_request.return_value = make_response({"articles": []})

        with pytest.raises(GatewayError):
            asyncio.run(gateway.list_items())

    @patch("requests.Session.request")
    def test_http_error(self, mock_request, gateway):
        """Test that a non-success status raises GatewayError."""
        mock_request.return_value = make_response(
            error=requests.HTTPError("500 Server Error")
        )

        with pytest.raises(GatewayError, match="500 Server Error"):
            asyncio.run(gateway.list_items())

    @patch("requests.Session.request")
    def test_network_error(self, mock_request, gateway):
        """Test that transport failures raise GatewayError."""
        mock_request.side_effect = requests.ConnectionError("Network error")

        with pytest.raises(GatewayError):
            asyncio.run(gateway.list_items())

    @patch("requests.Session.request")
    def test_invalid_json(self, mock_request, gateway):
        """Test that unparsable bodies raise GatewayError."""
        response = make_response()
        response.json.side_effect = ValueError("Expecting value")
        mock_request.return_value = response

        with pytest.raises(GatewayError, match="invalid JSON"):
            asyncio.run(gateway.list_items())

    @patch("requests.Session.request")
    def test_invalid_item_payload(self, mock_request, gateway, item_payload):
        """Test that payloads failing validation raise GatewayError."""
        item_payload["stock"] = -3
        mock_request.return_value = make_response([item_payload])

        with pytest.raises(GatewayError, match="CatalogItem"):
            asyncio.run(gateway.list_items())

    @patch("requests.Session.request")
    def test_create_item_fills_default_image(self, mock_request, gateway, item_payload):
        """Test that new items without an image get the default one."""
        mock_request.return_value = make_response(item_payload)
        draft = CatalogItemDraft(
            name="Runner",
            brand="Acme",
            category="Shoes",
            description="Light running shoe",
            price=Decimal("59.99"),
            stock=4,
        )

        created = asyncio.run(gateway.create_item(draft))

        assert created.id == "1"
        method, url = mock_request.call_args.args
        sent = mock_request.call_args.kwargs["json"]
        assert (method, url) == ("POST", "http://test.example.com/articles")
        assert sent["image"] == "https://example.com/default.jpg"
        assert sent["price"] == 59.99
        assert "id" not in sent

    @patch("requests.Session.request")
    def test_create_item_keeps_given_image(self, mock_request, gateway, item_payload):
        """Test that an explicit image is sent unchanged."""
        mock_request.return_value = make_response(item_payload)
        draft = CatalogItemDraft(
            name="Runner",
            brand="Acme",
            category="Shoes",
            price=Decimal("1"),
            stock=1,
            image="https://cdn.test/runner.png",
        )

        asyncio.run(gateway.create_item(draft))

        assert mock_request.call_args.kwargs["json"]["image"] == "https://cdn.test/runner.png"

    @patch("requests.Session.request")
    def test_update_item(self, mock_request, gateway, item_payload, make_item):
        """Test that updates PUT the whole item to its URL."""
        item_payload["name"] = "Runner 2"
        mock_request.return_value = make_response(item_payload)
        item = make_item("1", name="Runner 2")

        updated = asyncio.run(gateway.update_item("1", item))

        assert updated.name == "Runner 2"
        mock_request.assert_called_once_with(
            "PUT",
            "http://test.example.com/articles/1",
            json=item.model_dump(mode="json"),
            timeout=5,
        )

    @patch("requests.Session.request")
    def test_delete_item_echoes_id(self, mock_request, gateway, item_payload):
        """Test parsing a delete response that returns the deleted object."""
        mock_request.return_value = make_response(item_payload)

        deletion = asyncio.run(gateway.delete_item("1"))

        assert deletion.id == "1"
        assert mock_request.call_args.args == ("DELETE", "http://test.example.com/articles/1")

    @patch("requests.Session.request")
    def test_delete_item_empty_object(self, mock_request, gateway):
        """Test a delete response of {}."""
        mock_request.return_value = make_response({})

        deletion = asyncio.run(gateway.delete_item("1"))

        assert deletion.id is None

    @patch("requests.Session.request")
    def test_delete_item_empty_body(self, mock_request, gateway):
        """Test a delete response without a body."""
        mock_request.return_value = make_response(content=b"")

        deletion = asyncio.run(gateway.delete_item("1"))

        assert deletion.id is None
