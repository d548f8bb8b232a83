"""Shared fixtures."""

from decimal import Decimal

import pytest

from catalogcart.model import CatalogItem
from catalogcart.state.errors import ErrorChannel, reset_error_channel


@pytest.fixture(autouse=True)
def fresh_error_channel():
    """Make sure no test sees the process-wide channel of another test."""
    reset_error_channel()
    yield
    reset_error_channel()


@pytest.fixture
def errors():
    """Error channel with a recording subscriber attached."""
    channel = ErrorChannel()
    channel.received = []
    channel.subscribe(channel.received.append)
    return channel


@pytest.fixture
def make_item():
    """Build catalog items with sensible defaults."""

    def _make(item_id="1", **fields):
        data = {
            "id": item_id,
            "name": f"Item {item_id}",
            "brand": "Acme",
            "category": "Shoes",
            "description": "A test item",
            "price": Decimal("10.00"),
            "stock": 5,
            "image": "https://example.com/default.jpg",
        }
        data.update(fields)
        return CatalogItem(**data)

    return _make
