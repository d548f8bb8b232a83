"""In-memory REST resource for local development."""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request

from ..exceptions import GatewayError
from ..gateway.memory import InMemoryGateway
from ..model import CatalogItem, CatalogItemDraft
from .config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifespan events."""
    # Startup
    settings = get_settings()
    if settings.seed_file:
        app.state.store = InMemoryGateway.from_file(settings.seed_file)
    else:
        app.state.store = InMemoryGateway()
    logger.info("Catalog development server started")

    yield

    # Shutdown
    logger.info("Catalog development server stopped")


app = FastAPI(
    title="Catalog development server",
    description="In-memory articles resource for the catalogcart client",
    version="1.0.0",
    lifespan=lifespan,
)


def get_store(request: Request) -> InMemoryGateway:
    return request.app.state.store


@app.get("/articles", response_model=list[CatalogItem])
async def list_articles(store: InMemoryGateway = Depends(get_store)):
    return await store.list_items()


@app.get("/articles/{item_id}", response_model=CatalogItem)
async def get_article(item_id: str, store: InMemoryGateway = Depends(get_store)):
    try:
        return await store.get_item(item_id)
    except GatewayError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/articles", response_model=CatalogItem, status_code=201)
async def create_article(
    draft: CatalogItemDraft, store: InMemoryGateway = Depends(get_store)
):
    item = await store.create_item(draft)
    logger.info(f"Created article {item.id}")
    return item


@app.put("/articles/{item_id}", response_model=CatalogItem)
async def update_article(
    item_id: str, draft: CatalogItemDraft, store: InMemoryGateway = Depends(get_store)
):
    # Any id in the body is ignored, the path decides
    item = CatalogItem(id=item_id, **draft.model_dump())
    try:
        return await store.update_item(item_id, item)
    except GatewayError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/articles/{item_id}", response_model=CatalogItem)
async def delete_article(item_id: str, store: InMemoryGateway = Depends(get_store)):
    try:
        item = await store.get_item(item_id)
        await store.delete_item(item_id)
    except GatewayError as e:
        raise HTTPException(status_code=404, detail=str(e))
    logger.info(f"Deleted article {item_id}")
    return item


def run_server() -> None:
    """Entry point for the console script."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logger.info(f"Serving articles on http://{settings.host}:{settings.port}/articles")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run_server()
