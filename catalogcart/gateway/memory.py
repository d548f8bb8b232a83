"""Catalog gateway that keeps items in a dict."""

import json
import logging
from pathlib import Path

from ..exceptions import GatewayError
from ..model import CatalogItem, CatalogItemDraft, Deletion

logger = logging.getLogger(__name__)


class InMemoryGateway:
    """Gateway with no remote side, for tests and offline runs."""

    def __init__(self, items: list[CatalogItem] | None = None):
        self._items: dict[str, CatalogItem] = {}
        self._next_id = 1
        for item in items or []:
            self._items[item.id] = item
            if item.id.isdigit():
                self._next_id = max(self._next_id, int(item.id) + 1)

    @classmethod
    def from_file(cls, path: str | Path) -> "InMemoryGateway":
        """Seed from a JSON array, or a json-server db file with an ``articles`` key."""
        with open(path) as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("articles", [])
        items = [CatalogItem.model_validate(entry) for entry in data]
        logger.info(f"Seeded {len(items)} items from {path}")
        return cls(items)

    async def list_items(self) -> list[CatalogItem]:
        return list(self._items.values())

    async def get_item(self, item_id: str) -> CatalogItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise GatewayError(f"No catalog item with id {item_id}")

    async def create_item(self, draft: CatalogItemDraft) -> CatalogItem:
        item_id = str(self._next_id)
        self._next_id += 1
        item = CatalogItem(id=item_id, **draft.model_dump())
        self._items[item_id] = item
        return item

    async def update_item(self, item_id: str, item: CatalogItem) -> CatalogItem:
        if item_id not in self._items:
            raise GatewayError(f"No catalog item with id {item_id}")
        updated = item.model_copy(update={"id": item_id})
        self._items[item_id] = updated
        return updated

    async def delete_item(self, item_id: str) -> Deletion:
        try:
            deleted = self._items.pop(item_id)
        except KeyError:
            raise GatewayError(f"No catalog item with id {item_id}")
        return Deletion(id=deleted.id)
