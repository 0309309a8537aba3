#!/usr/bin/env python3
"""
Command-line interface for checking résumé content.

Commands:
    check   - Report translation coverage per collection and locale
    resolve - Show which record an entry resolves to in a locale
"""

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from vitae.contexts.content import (
    LOCALIZABLE_COLLECTIONS,
    ContentLoadError,
    ContentNotFoundError,
    ContentStore,
    resolve_localized_entry,
)
from vitae.contexts.content.audit import audit_translations
from vitae.contexts.content.logger import setup_content_logger
from vitae.contexts.rendering import ConfigurationError, create_render_context, load_site_settings
from vitae.contexts.rendering.settings import supported_secondary_locales

load_dotenv()
LOGS_PATH = Path(os.getenv("VITAE_LOG_DIR", "outs/logs"))

app = typer.Typer(
    add_completion=False,
    help="Check résumé content and its translations",
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_settings(config: Optional[Path]):
    try:
        return load_site_settings(config)
    except ConfigurationError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command("check")
def check_command(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Site settings YAML"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="List ids that fall back and show debug logging"),
):
    """
    Report translation coverage of every localizable collection.

    Exits with code 1 when a translation has no primary-locale record.

    Examples:\n

        $ check_content.py check

        $ check_content.py check -v --config config/site.yaml
    """
    settings = _load_settings(config)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = setup_content_logger(LOGS_PATH / f"check_{timestamp}", settings, verbose=verbose)
    typer.echo(f"Log file: {log_file}\n")

    locales = supported_secondary_locales(settings)
    if not locales:
        typer.secho("Only the primary locale is configured, nothing to check", fg=typer.colors.YELLOW)
        raise typer.Exit()

    store = ContentStore(settings.content_path)
    try:
        report = audit_translations(store, locales)
    except ContentLoadError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    for locale, coverages in report.by_locale().items():
        typer.secho(f"\nLocale: {locale}", fg=typer.colors.BLUE, bold=True)
        for coverage in coverages:
            color = typer.colors.GREEN if coverage.ratio == 1.0 else typer.colors.YELLOW
            typer.secho(
                f"  {coverage.collection:<13} {len(coverage.translated)}/{coverage.total} translated",
                fg=color,
            )
            if verbose and coverage.fallback:
                typer.echo(f"    falls back: {', '.join(coverage.fallback)}")
            for orphan in coverage.orphaned:
                typer.secho(
                    f"    ✗ {orphan}: translated but has no '{settings.locales.primary}' record",
                    fg=typer.colors.RED,
                )

    for collection, extra in report.unconfigured.items():
        typer.secho(
            f"\n⚠ {collection}: translations for unconfigured locale(s) {', '.join(extra)} are never used",
            fg=typer.colors.YELLOW,
        )

    if report.has_orphans:
        raise typer.Exit(code=1)

    typer.secho("\n✓ Every translation has a primary record", fg=typer.colors.GREEN)


@app.command("resolve")
def resolve_command(
    collection: str = typer.Argument(..., help=f"One of: {', '.join(LOCALIZABLE_COLLECTIONS)}"),
    entry_id: str = typer.Argument(..., help="Entry id without locale suffix"),
    locale: str = typer.Option(None, "--locale", "-l", help="Locale (defaults to the primary locale)"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Site settings YAML"),
):
    """
    Show which record an entry resolves to.

    Examples:\n

        $ check_content.py resolve jobs senior-developer --locale es
    """
    settings = _load_settings(config)
    store = ContentStore(settings.content_path)

    try:
        context = create_render_context(locale or settings.locales.primary, settings=settings)
        record = resolve_localized_entry(context, collection, entry_id, store)
    except (ConfigurationError, ContentNotFoundError, ContentLoadError, ValueError) as e:
        typer.secho(f"✗ {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ {collection}/{record.slug}", fg=typer.colors.GREEN)
    if record.source:
        typer.echo(f"  Source: {record.source}")


if __name__ == "__main__":
    app()
