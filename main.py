"""CLI interface for the catalog and cart manager."""

from catalogcart.cli import app

if __name__ == "__main__":
    app()
