"""CLI interface for the catalog and cart manager."""

import asyncio
import logging
import sys

import typer
from pydantic import ValidationError

from .gateway.config import GatewaySettings, get_settings
from .gateway.memory import InMemoryGateway
from .gateway.rest import RestGateway
from .model import CatalogItem, CatalogItemDraft
from .state import ALL_CATEGORIES, ErrorChannel, StoreContext

app = typer.Typer(help="Catalog and shopping cart manager")


def setup_logging(settings: GatewaySettings) -> None:
    """Configure logging for the CLI."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper()),
        format=settings.log_format,
        handlers=[
            logging.StreamHandler(sys.stderr),
        ],
    )

    logging.getLogger("urllib3").setLevel(logging.WARNING)


class ErrorReporter:
    """Echoes error channel messages to stderr while a command runs."""

    def __init__(self, errors: ErrorChannel):
        self.errors = errors
        self.messages: list[str] = []
        self._subscription = None

    def __enter__(self) -> "ErrorReporter":
        self._subscription = self.errors.subscribe(self._report)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._subscription.release()

    def _report(self, message: str) -> None:
        self.messages.append(message)
        typer.echo(f"Error: {message}", err=True)

    def exit_on_errors(self) -> None:
        if self.messages:
            raise typer.Exit(1)


def format_item(item: CatalogItem) -> str:
    return (
        f"{item.id}: {item.name} ({item.brand}) [{item.category}] "
        f"{item.price:.2f} - {item.stock} in stock"
    )


@app.callback()
def main(
    ctx: typer.Context,
    endpoint: str | None = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="URL of the articles resource. Defaults to CATALOGCART_GATEWAY_ENDPOINT.",
    ),
    offline: bool = typer.Option(
        False,
        "--offline",
        help="Work against an in-memory catalog instead of the remote resource.",
    ),
    seed: str | None = typer.Option(
        None,
        "--seed",
        "-s",
        help="JSON file used to fill the in-memory catalog (implies --offline).",
    ),
):
    """Manage a remote catalog and build a shopping cart from it."""
    settings = get_settings()
    if endpoint:
        settings = settings.model_copy(update={"endpoint": endpoint})

    setup_logging(settings)

    if seed:
        gateway = InMemoryGateway.from_file(seed)
    elif offline:
        gateway = InMemoryGateway()
    else:
        gateway = RestGateway(settings)

    ctx.obj = StoreContext(gateway, ErrorChannel())


@app.command()
def items(
    ctx: typer.Context,
    category: str = typer.Option(
        ALL_CATEGORIES,
        "--category",
        "-c",
        help="Only show items of this category (case-insensitive).",
    ),
):
    """List catalog items."""
    context: StoreContext = ctx.obj

    with ErrorReporter(context.errors) as reporter:
        asyncio.run(context.catalog.load())
        context.catalog.set_category_filter(category)

    for item in context.catalog.visible_items.value:
        typer.echo(format_item(item))
    reporter.exit_on_errors()


@app.command()
def categories(ctx: typer.Context):
    """List the categories present in the catalog."""
    context: StoreContext = ctx.obj

    with ErrorReporter(context.errors) as reporter:
        asyncio.run(context.catalog.load())

    for name in context.catalog.categories():
        typer.echo(f"  - {name}")
    reporter.exit_on_errors()


@app.command()
def add(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Item name"),
    brand: str = typer.Option(..., "--brand", help="Brand"),
    price: str = typer.Option(..., "--price", help="Unit price"),
    category: str = typer.Option(..., "--category", help="Category"),
    description: str = typer.Option("", "--description", help="Description"),
    stock: int = typer.Option(..., "--stock", help="Units in stock"),
    image: str = typer.Option("", "--image", help="Image URL"),
):
    """Create a catalog item."""
    context: StoreContext = ctx.obj

    try:
        draft = CatalogItemDraft(
            name=name,
            brand=brand,
            price=price,
            category=category,
            description=description,
            stock=stock,
            image=image,
        )
    except ValidationError as e:
        typer.echo(f"Error: invalid item: {e}", err=True)
        raise typer.Exit(1)

    with ErrorReporter(context.errors) as reporter:
        before = {item.id for item in context.catalog.all_items}
        asyncio.run(context.catalog.create(draft))

    for item in context.catalog.all_items:
        if item.id not in before:
            typer.echo(f"Created {format_item(item)}")
    reporter.exit_on_errors()


@app.command()
def update(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., help="Id of the item to change"),
    name: str | None = typer.Option(None, "--name"),
    brand: str | None = typer.Option(None, "--brand"),
    price: str | None = typer.Option(None, "--price"),
    category: str | None = typer.Option(None, "--category"),
    description: str | None = typer.Option(None, "--description"),
    stock: int | None = typer.Option(None, "--stock"),
    image: str | None = typer.Option(None, "--image"),
):
    """Replace a catalog item, changing the given fields."""
    context: StoreContext = ctx.obj
    changes = {
        key: value
        for key, value in {
            "name": name,
            "brand": brand,
            "price": price,
            "category": category,
            "description": description,
            "stock": stock,
            "image": image,
        }.items()
        if value is not None
    }

    with ErrorReporter(context.errors) as reporter:
        asyncio.run(context.catalog.load())
        current = context.catalog.find(item_id)
        if current is None:
            context.errors.publish(f"Unknown catalog item {item_id}")
        else:
            try:
                item = CatalogItem.model_validate({**current.model_dump(), **changes})
            except ValidationError as e:
                context.errors.publish(f"Invalid item: {e}")
            else:
                asyncio.run(context.catalog.update(item))

    updated = context.catalog.find(item_id)
    if updated is not None and not reporter.messages:
        typer.echo(f"Updated {format_item(updated)}")
    reporter.exit_on_errors()


@app.command()
def delete(
    ctx: typer.Context,
    item_id: str = typer.Argument(..., help="Id of the item to delete"),
):
    """Delete a catalog item."""
    context: StoreContext = ctx.obj

    with ErrorReporter(context.errors) as reporter:
        asyncio.run(context.catalog.remove(item_id))

    if not reporter.messages:
        typer.echo(f"Deleted {item_id}")
    reporter.exit_on_errors()


@app.command()
def cart(
    ctx: typer.Context,
    entries: list[str] = typer.Argument(..., help="Items to add, as ID=QUANTITY"),
):
    """Fill a cart from the catalog and show its total."""
    context: StoreContext = ctx.obj

    with ErrorReporter(context.errors) as reporter:
        asyncio.run(context.catalog.load())

        for entry in entries:
            item_id, _, quantity = entry.partition("=")
            item = context.catalog.find(item_id)
            if item is None:
                context.errors.publish(f"Unknown catalog item {item_id}")
                continue
            try:
                count = int(quantity or "1")
            except ValueError:
                context.errors.publish(f"Invalid quantity {quantity!r} for {item_id}")
                continue
            context.cart.add_item(item, count)

    for line in context.cart.lines.value:
        typer.echo(f"{line.quantity} x {line.item.name} @ {line.item.price:.2f} = {line.subtotal:.2f}")
    typer.echo(f"Total: {context.cart.total.value}")
    reporter.exit_on_errors()


if __name__ == "__main__":
    app()
