"""Catalog state: the full item set, the category filter and the visible items."""

import logging

from ..model import CatalogItem, CatalogItemDraft
from ..protocol import Gateway
from .channel import Publication
from .errors import ErrorChannel, get_error_channel

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "all"


class CatalogStore:
    """Owns the canonical list of catalog items.

    Every change to the item set or to the category filter republishes
    ``visible_items``. Gateway failures never escape: they are logged and
    reported on the error channel, and the state stays as it was.

    Results of gateway calls are applied to whatever the state is when
    they complete, so concurrent calls resolve last-settled-wins.
    """

    def __init__(self, gateway: Gateway, errors: ErrorChannel | None = None):
        self.gateway = gateway
        self.errors = errors if errors is not None else get_error_channel()
        self._all_items: tuple[CatalogItem, ...] = ()
        self._selected_category = ALL_CATEGORIES
        self.visible_items: Publication[tuple[CatalogItem, ...]] = Publication(
            "visible_items", ()
        )

    @property
    def all_items(self) -> tuple[CatalogItem, ...]:
        return self._all_items

    async def load(self) -> None:
        """Replace the catalog with the gateway's current item list."""
        try:
            items = await self.gateway.list_items()
        except Exception as e:
            logger.error(f"Failed to load catalog items: {e}")
            self.errors.publish("Failed to load catalog items")
            return

        self._all_items = self._unique(items)
        logger.info(f"Loaded {len(self._all_items)} catalog items")
        self._publish()

    async def create(self, draft: CatalogItemDraft) -> None:
        try:
            created = await self.gateway.create_item(draft)
        except Exception as e:
            logger.error(f"Failed to create catalog item {draft.name!r}: {e}")
            self.errors.publish("Failed to create catalog item")
            return

        if self.find(created.id) is not None:
            logger.warning(f"Created item {created.id} already in catalog, replacing it")
            self._all_items = self._replace(created)
        else:
            self._all_items = self._all_items + (created,)
        logger.info(f"Created catalog item {created.id}")
        self._publish()

    async def update(self, item: CatalogItem) -> None:
        """Send the whole item and adopt the server's representation."""
        try:
            updated = await self.gateway.update_item(item.id, item)
        except Exception as e:
            logger.error(f"Failed to update catalog item {item.id}: {e}")
            self.errors.publish("Failed to update catalog item")
            return

        self._all_items = self._replace(updated)
        logger.info(f"Updated catalog item {updated.id}")
        self._publish()

    async def remove(self, item_id: str) -> None:
        """Delete an item.

        The entry removed locally is the one whose id the delete response
        echoes back, which is not necessarily ``item_id``.
        """
        try:
            deletion = await self.gateway.delete_item(item_id)
        except Exception as e:
            logger.error(f"Failed to delete catalog item {item_id}: {e}")
            self.errors.publish("Failed to delete catalog item")
            return

        if deletion.id is None:
            logger.warning(f"Delete response for {item_id} did not echo an id")
        elif deletion.id != item_id:
            logger.warning(
                f"Delete response for {item_id} echoed {deletion.id}, removing that"
            )

        self._all_items = tuple(i for i in self._all_items if i.id != deletion.id)
        self._publish()

    def set_category_filter(self, category: str) -> None:
        self._selected_category = category
        logger.debug(f"Category filter set to {category!r}")
        self._publish()

    def reset_filter(self) -> None:
        self.set_category_filter(ALL_CATEGORIES)

    def current_category(self) -> str:
        return self._selected_category

    def categories(self) -> list[str]:
        """Distinct non-blank categories in the order they first appear."""
        seen: list[str] = []
        for item in self._all_items:
            if item.category.strip() and item.category not in seen:
                seen.append(item.category)
        return seen

    def find(self, item_id: str) -> CatalogItem | None:
        for item in self._all_items:
            if item.id == item_id:
                return item
        return None

    def _filtered(self) -> tuple[CatalogItem, ...]:
        if self._selected_category == ALL_CATEGORIES:
            return self._all_items

        wanted = self._selected_category.lower()
        return tuple(i for i in self._all_items if i.category.lower() == wanted)

    def _publish(self) -> None:
        self.visible_items.publish(self._filtered())

    def _replace(self, replacement: CatalogItem) -> tuple[CatalogItem, ...]:
        return tuple(
            replacement if i.id == replacement.id else i for i in self._all_items
        )

    def _unique(self, items: list[CatalogItem]) -> tuple[CatalogItem, ...]:
        unique: dict[str, CatalogItem] = {}
        for item in items:
            if item.id in unique:
                logger.warning(f"Ignoring duplicate catalog item id {item.id}")
                continue
            unique[item.id] = item
        return tuple(unique.values())
