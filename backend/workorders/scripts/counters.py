"""Admin CLI for work order number counters.

Usage:
    workorders-counters show Electrical
    workorders-counters preview Electrical
    workorders-counters reset --code E
    workorders-counters reset --all
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from workorders.config import settings
from workorders.logging import setup_logging
from workorders.services.numbering import WorkOrderNumberService
from workorders.services.work_types import derive_work_type_code

T = TypeVar("T")


def run_with_service(database_url: str, fn: Callable[[WorkOrderNumberService], Awaitable[T]]) -> T:
    """Run fn against a fresh engine bound to this command's event loop."""

    async def _run() -> T:
        engine = create_async_engine(database_url, echo=False, pool_pre_ping=True)
        try:
            session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
            return await fn(WorkOrderNumberService(session_maker))
        finally:
            await engine.dispose()

    return asyncio.run(_run())


@click.group()
@click.option(
    "--database-url",
    envvar="DATABASE_URL",
    default=settings.database_url,
    show_default=False,
    help="Async SQLAlchemy database URL (defaults to application settings).",
)
@click.pass_context
def cli(ctx: click.Context, database_url: str) -> None:
    """Inspect and reset work order number counters."""
    setup_logging()
    ctx.obj = database_url


@cli.command()
@click.argument("work_type")
@click.pass_obj
def show(database_url: str, work_type: str) -> None:
    """Show the stored counter for WORK_TYPE."""
    counter = run_with_service(database_url, lambda s: s.get_work_type_counter(work_type))
    click.echo(f"{work_type} ({derive_work_type_code(work_type)}): {counter}")


@cli.command()
@click.argument("work_type")
@click.pass_obj
def preview(database_url: str, work_type: str) -> None:
    """Show the next number WORK_TYPE would get (nothing is reserved)."""
    click.echo(run_with_service(database_url, lambda s: s.preview_next_work_order_number(work_type)))


@cli.command()
@click.option("--code", "work_type_code", help="Work type code to reset, e.g. E.")
@click.option("--all", "reset_all", is_flag=True, help="Reset every counter.")
@click.pass_obj
def reset(database_url: str, work_type_code: str | None, reset_all: bool) -> None:
    """Reset one counter (--code) or all counters (--all) to 0.

    Work orders are kept, so numbering still continues after the highest issued number.
    """
    if bool(work_type_code) == reset_all:
        raise click.UsageError("Pass exactly one of --code or --all.")

    if work_type_code:
        run_with_service(database_url, lambda s: s.reset_work_type_counter(work_type_code))
        click.echo(f"Counter for work type code {work_type_code.strip().upper()} reset")
    else:
        run_with_service(database_url, lambda s: s.reset_all_work_type_counters())
        click.echo("All work type counters reset")


if __name__ == "__main__":
    cli()
