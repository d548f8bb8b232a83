from typing import runtime_checkable, Protocol

from .model import CatalogItem, CatalogItemDraft, Deletion


@runtime_checkable
class Gateway(Protocol):
    async def list_items(self) -> list[CatalogItem]: ...
    async def create_item(self, draft: CatalogItemDraft) -> CatalogItem: ...
    async def update_item(self, item_id: str, item: CatalogItem) -> CatalogItem: ...
    async def delete_item(self, item_id: str) -> Deletion: ...
