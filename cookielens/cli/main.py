#!/usr/bin/env python3
"""Main CLI entry point for cookielens using Typer.

Classifies a browser cookie export for a site, prints the site's risk
score, and inspects the knowledge base and effective configuration.
"""

import logging
from enum import IntEnum
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

import typer

from .. import __version__
from ..classification.collection import load_cookie_export
from ..classification.config import (
    OUTPUT_FORMATS,
    ClassifierConfiguration,
    build_classifier,
    load_configuration,
    load_configured_knowledge_base,
    print_configuration,
)
from ..classification.exceptions import CookieLensError, RestrictedPageError
from ..classification.models import CategoryCounts
from ..classification.risk import aggregate
from ..classification.service import CookieScanService
from .summary import ReportFormatter


class ExitCode(IntEnum):
    """CLI exit codes."""
    SUCCESS = 0
    INPUT_ERROR = 2       # Bad configuration, dataset or cookie export
    RESTRICTED_PAGE = 3   # URL is not an http(s) page


app = typer.Typer(
    name="cookielens",
    help="cookielens - classify cookies by consent category and score site risk",
    add_completion=False,
    rich_markup_mode="rich"
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(getattr(logging, level, logging.WARNING))


def _load_config(config_file: Optional[Path], overrides: Dict[str, Any]) -> ClassifierConfiguration:
    try:
        config = load_configuration(config_file=config_file, overrides=overrides)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"❌ Configuration error: {e}", err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR.value)

    _configure_logging(config.log_level)
    return config


@app.callback()
def main():
    """
    cookielens - cookie consent classification.

    Classifies cookies as Strictly Necessary, Functional, Performance or
    Targeting using a known-cookie database with a heuristic fallback.
    """
    pass


@app.command(name="version")
def show_version():
    """Show version information."""
    typer.echo(f"cookielens v{__version__}")


@app.command()
def scan(
    cookies_file: Annotated[
        Path,
        typer.Argument(help="JSON export of the cookies observed on the page")
    ],

    hostname: Annotated[
        Optional[str],
        typer.Option("--hostname", "-H", help="Hostname of the visited page")
    ] = None,

    url: Annotated[
        Optional[str],
        typer.Option("--url", "-u", help="URL of the visited page (alternative to --hostname)")
    ] = None,

    knowledge_base: Annotated[
        Optional[Path],
        typer.Option("--knowledge-base", "-k", help="Cookie dataset to use instead of the bundled one")
    ] = None,

    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,

    output_format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format (text, json, yaml)")
    ] = None,

    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-cookie details")
    ] = False,
):
    """
    Classify every cookie of a page and score the site's risk.

    Examples:

        # Scan an exported cookie jar for a hostname
        cookielens scan cookies.json --hostname example.com

        # Scan with a custom dataset and JSON output
        cookielens scan cookies.json --url https://example.com/ -k open-cookie-database.json --format json
    """
    if bool(hostname) == bool(url):
        typer.echo("❌ Provide exactly one of --hostname or --url", err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR.value)

    config = _load_config(config_file, {
        "knowledge_base_path": knowledge_base,
        "output_format": output_format,
        "log_level": "DEBUG" if verbose else None,
    })

    try:
        classifier = build_classifier(config)
        cookies = load_cookie_export(cookies_file)
    except CookieLensError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR.value)

    service = CookieScanService(classifier)

    try:
        if url:
            report = service.scan_url(url, cookies)
        else:
            report = service.scan(cookies, hostname)
    except RestrictedPageError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(code=ExitCode.RESTRICTED_PAGE.value)

    formatter = ReportFormatter(format_type=config.output_format, verbose=verbose)
    typer.echo(formatter.format_report(report))


@app.command()
def risk(
    functional: Annotated[
        int,
        typer.Option("--functional", min=0, help="Number of functional cookies")
    ] = 0,

    performance: Annotated[
        int,
        typer.Option("--performance", min=0, help="Number of performance cookies")
    ] = 0,

    targeting: Annotated[
        int,
        typer.Option("--targeting", min=0, help="Number of targeting cookies")
    ] = 0,

    strict: Annotated[
        int,
        typer.Option("--strict", min=0, help="Number of strictly necessary cookies")
    ] = 0,

    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json, yaml)")
    ] = "text",
):
    """Compute the risk score for a set of category counts."""
    if output_format.lower() not in OUTPUT_FORMATS:
        typer.echo(f"❌ Invalid output format: {output_format}. Choose from: text, json, yaml", err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR.value)

    counts = CategoryCounts(
        functional=functional,
        performance=performance,
        targeting=targeting,
        strictly_necessary=strict,
    )
    formatter = ReportFormatter(format_type=output_format)
    typer.echo(formatter.format_risk(aggregate(counts), counts))


@app.command(name="kb-stats")
def kb_stats(
    knowledge_base: Annotated[
        Optional[Path],
        typer.Option("--knowledge-base", "-k", help="Cookie dataset to inspect instead of the bundled one")
    ] = None,

    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,
):
    """Show how many exact and pattern definitions the knowledge base holds."""
    config = _load_config(config_file, {"knowledge_base_path": knowledge_base})

    try:
        loaded = load_configured_knowledge_base(config)
    except CookieLensError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(code=ExitCode.INPUT_ERROR.value)

    source = config.knowledge_base_path or "bundled dataset"
    typer.echo(f"Knowledge base: {source}")
    typer.echo(f"Exact matches: {loaded.exact_count}")
    typer.echo(f"Patterns: {loaded.pattern_count}")


@app.command(name="show-config")
def show_config(
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to configuration file")
    ] = None,

    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (yaml, json)")
    ] = "yaml",
):
    """Print the effective configuration."""
    config = _load_config(config_file, {})
    typer.echo("# Loaded from: " + " -> ".join(config.loaded_from))
    typer.echo(print_configuration(config, output_format))


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
