"""CLI entry point for Sassify.

Invoked as::

    sassify [OPTIONS] COMMAND [ARGS]...

Commands
--------
generate-blog   Generate one AI blog article and publish it
serve           Run the HTTP server
"""

from __future__ import annotations

import asyncio
import sys
from typing import Optional

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from sassify.core.logging_config import get_logger, setup_logging
from sassify.core.text import excerpt

logger = get_logger(__name__)

console = Console()
err_console = Console(stderr=True)

PREVIEW_LENGTH = 200


def _session_factory():
    from sassify.core.database.session import async_session_maker

    return async_session_maker


def _openai_service():
    from sassify.server.services.deps import get_openai_service

    return get_openai_service()


async def _generate_article(topic: Optional[str]):
    from sassify.core.database.repositories.blogs import BlogRepository
    from sassify.core.database.session import init_db
    from sassify.server.services.blog_generator import BlogGeneratorService

    await init_db()
    openai_service = _openai_service()
    try:
        async with _session_factory()() as session:
            generator = BlogGeneratorService(openai_service, BlogRepository(session))
            return await generator.generate_blog_article(topic)
    finally:
        await openai_service.aclose()


@click.group()
@click.version_option(package_name="sassify")
@click.option("--log-level", default=None, help="Override the configured log level")
def cli(log_level: Optional[str]) -> None:
    """Sassify administration commands."""
    setup_logging(log_level=log_level, log_format="simple", enable_file=False)


@cli.command(name="generate-blog")
@click.option("--topic", "-t", default=None, help="Subject of the article (a default topic is picked when omitted)")
def generate_blog_command(topic: Optional[str]) -> None:
    """Generate a blog article with the chat-completion API and publish it."""
    from sassify.server.services.errors import ServiceError

    console.print("[bold]Automatic blog article generation[/bold]")
    if topic:
        console.print(f"Topic: {topic}")

    try:
        article = asyncio.run(_generate_article(topic))
    except Exception as exc:
        logger.debug("Blog generation failed", exc_info=True)
        message = exc.message if isinstance(exc, ServiceError) else str(exc)
        err_console.print("[red]Error:[/red]", Text(message))
        sys.exit(1)

    console.print("[green]Article generated successfully![/green]")

    table = Table(show_header=True, header_style="bold")
    table.add_column("Property")
    table.add_column("Value")
    table.add_row("Title", Text(article.title))
    table.add_row("Slug", Text(article.slug))
    table.add_row("Author", Text(article.author))
    table.add_row("Content preview", Text(excerpt(article.content, PREVIEW_LENGTH)))
    console.print(table)


@cli.command(name="serve")
def serve_command() -> None:
    """Run the HTTP server with the configured host and port."""
    from sassify.server.main import run

    run()


if __name__ == "__main__":
    cli()
