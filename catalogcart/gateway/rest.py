"""Catalog gateway backed by a json-server style REST resource."""

import asyncio
import logging
from typing import Any

import requests
from pydantic import ValidationError

from ..exceptions import GatewayError
from ..model import CatalogItem, CatalogItemDraft, Deletion
from .config import GatewaySettings, get_settings


class RestGateway:
    """Performs catalog CRUD against ``settings.endpoint``.

    ``requests`` is blocking, so every call runs in a worker thread and the
    event loop is free while a request is in flight.
    """

    def __init__(
        self,
        settings: GatewaySettings | None = None,
        session: requests.Session | None = None,
    ):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.logger = logging.getLogger(__name__)

    @property
    def endpoint(self) -> str:
        return self.settings.endpoint.rstrip("/")

    def _item_url(self, item_id: str) -> str:
        return f"{self.endpoint}/{item_id}"

    async def list_items(self) -> list[CatalogItem]:
        data = await self._request("GET", self.endpoint)
        if not isinstance(data, list):
            raise GatewayError(f"Expected a list from {self.endpoint}, got {type(data).__name__}")
        return [self._parse(CatalogItem, entry) for entry in data]

    async def create_item(self, draft: CatalogItemDraft) -> CatalogItem:
        payload = draft.model_dump(mode="json")
        if not payload.get("image"):
            payload["image"] = self.settings.default_image
        data = await self._request("POST", self.endpoint, payload)
        return self._parse(CatalogItem, data)

    async def update_item(self, item_id: str, item: CatalogItem) -> CatalogItem:
        data = await self._request("PUT", self._item_url(item_id), item.model_dump(mode="json"))
        return self._parse(CatalogItem, data)

    async def delete_item(self, item_id: str) -> Deletion:
        data = await self._request("DELETE", self._item_url(item_id))
        # Older json-server versions answer a delete with {} or nothing at all
        if not data:
            return Deletion()
        return self._parse(Deletion, data)

    async def _request(self, method: str, url: str, payload: dict | None = None) -> Any:
        return await asyncio.to_thread(self._send, method, url, payload)

    def _send(self, method: str, url: str, payload: dict | None) -> Any:
        self.logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method, url, json=payload, timeout=self.settings.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise GatewayError(f"{method} {url} failed: {e}") from e

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise GatewayError(f"{method} {url} returned invalid JSON: {e}") from e

    def _parse(self, model, data: Any):
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise GatewayError(f"Unexpected {model.__name__} payload: {e}") from e
