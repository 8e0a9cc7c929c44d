"""Command-line interface for filegate.

This module provides the CLI commands for managing the filegate database
and checking filter rule decisions.
"""

import asyncio
from typing import NoReturn

import click

from filegate.core.config import get_settings
from filegate.core.logging import LoggingContext, configure_logging, get_logger
from filegate.domain.entities.filter_rule import FilterMode


@click.group()
@click.version_option(version="0.1.0", prog_name="filegate")
def cli() -> None:
    """filegate - storage source filter rules and OneDrive adapters."""


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Initialize the database.

    Creates all database tables. Use this only in development.
    In production, use migrations instead.
    """
    from filegate.infrastructure.persistence.database import get_db_manager, init_database

    settings = get_settings()
    configure_logging(settings)

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init_db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create all database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        try:
            await init_database()
            click.echo("Database initialized successfully.")
        finally:
            await get_db_manager().disconnect()

    asyncio.run(initialize())


@cli.command()
@click.option("--storage-id", type=int, required=True, help="Storage source ID")
@click.option("--path", "candidate", type=str, required=True, help="File name or path to test")
@click.option(
    "--mode",
    type=click.Choice([mode.value for mode in FilterMode]),
    default=FilterMode.HIDDEN.value,
    show_default=True,
    help="Which filter rules to evaluate",
)
@click.option("--user-id", type=str, default=None, help="Evaluate on behalf of this user")
def check(storage_id: int, candidate: str, mode: str, user_id: str | None) -> None:
    """Check whether a path is filtered on a storage source.

    Prints 'filtered' or 'allowed'. Exits with status 1 when filtered.
    """
    from filegate.core.context import request_context
    from filegate.domain.services import FilterRuleService, UserStorageSourceService
    from filegate.infrastructure.persistence.database import get_db_manager

    settings = get_settings()
    configure_logging(settings)
    logger = get_logger(__name__)
    filter_mode = FilterMode(mode)

    async def run() -> bool:
        db = get_db_manager()
        try:
            service = FilterRuleService(
                db.session_factory,
                UserStorageSourceService(db.session_factory),
            )
            with request_context(user_id), LoggingContext(
                storage_id=str(storage_id), filter_mode=filter_mode.value
            ):
                if filter_mode is FilterMode.DISABLE_DOWNLOAD:
                    return await service.check_disable_download(storage_id, candidate)
                return await service.decide(storage_id, candidate, filter_mode)
        finally:
            await db.disconnect()

    filtered = asyncio.run(run())
    logger.info(
        "Filter check completed",
        storage_id=storage_id,
        candidate=candidate,
        mode=filter_mode.value,
        user_id=user_id,
        filtered=filtered,
    )
    click.echo("filtered" if filtered else "allowed")
    if filtered:
        raise SystemExit(1)


@cli.command()
def info() -> None:
    """Display filegate configuration and system information."""
    settings = get_settings()

    click.echo(f"""
filegate v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}

Database:
  URL:          {settings.database_url}
  Pool Size:    {settings.db_pool_size}
  Echo:         {settings.db_echo}

Filter Rules:
  Cache TTL:    {settings.filter_cache_ttl_seconds} seconds
  Case Sens.:   {settings.filter_case_sensitive}

OneDrive China:
  Client ID:    {settings.onedrive_china.client_id or '(not set)'}
  Redirect URI: {settings.onedrive_china.redirect_uri or '(not set)'}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `filegate` command is run
    or when using `python -m filegate`.
    """
    cli()


if __name__ == "__main__":
    main()
