"""Typer CLI for the Website Profile Engine.

Profiles a live URL or a saved HTML file and prints either a Rich summary
or the JSON document produced by ``WebsiteProfile.to_dict()``.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from profile_engine.app import ProfileEngineApp
from profile_engine.models import WebsiteProfile
from profile_engine.utils.helpers import check_page_url, normalise_input_url

console = Console()
app = typer.Typer(
    name="profile-engine",
    help="Website Profile Engine -- metadata, technical SEO, readability, links & local signals for one page.",
    add_completion=False,
    no_args_is_help=True,
)


def _setup_logging(verbose: bool = False, level_name: str = "INFO") -> None:
    """Configure logging level and format."""
    level = logging.DEBUG if verbose else getattr(logging, str(level_name).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _yes_no(value: bool) -> str:
    return "[green]✔ yes[/green]" if value else "[red]✘ no[/red]"


def _print_profile(profile: WebsiteProfile, url: str) -> None:
    """Pretty-print the key facets of a profile using Rich."""
    tech = profile.technical_seo
    content = profile.content_metrics
    links = profile.link_metrics
    local = profile.local_seo_signals

    console.print(Panel(
        f"[bold cyan]{profile.title or url}[/bold cyan]\n"
        f"Category: [magenta]{profile.detected_category.value}[/magenta]\n\n"
        f"{profile.summary}"
    ))

    table = Table(title="Page Profile", show_header=True, header_style="bold magenta")
    table.add_column("Facet", style="cyan", min_width=20)
    table.add_column("Check", min_width=26)
    table.add_column("Value", max_width=60)

    table.add_row("Technical SEO", "HTTPS", _yes_no(tech.is_https))
    table.add_row("", "Title / description", f"{_yes_no(tech.has_title)} / {_yes_no(tech.has_meta_description)}")
    table.add_row("", "H1 count (proper hierarchy)", f"{tech.h1_count} ({_yes_no(tech.has_proper_heading_hierarchy)})")
    table.add_row("", "Image alt coverage", f"{tech.alt_coverage}%")
    table.add_row("", "Schema types", ", ".join(tech.schema_types) or "-")
    table.add_row("Content", "Words / sentences", f"{content.word_count} / {content.sentence_count}")
    table.add_row("", "Reading ease", f"{content.flesch_kincaid_score} ({content.reading_level.value}, {content.reading_grade})")
    table.add_row("", "Top keywords", ", ".join(k.keyword for k in content.keyword_density[:5]) or "-")
    table.add_row("Links", "Internal / external", f"{links.total_internal_links} / {links.total_external_links}")
    table.add_row("", "Orphan risk", _yes_no(links.orphan_risk))
    table.add_row("Local SEO", "Address / phone", f"{local.address_text or '-'} / {local.phone_text or '-'}")
    table.add_row("", "Local schema", local.local_schema_type or "-")
    table.add_row("", "Local score", str(local.overall_score))
    console.print(table)


def _emit(profile: WebsiteProfile, url: str, as_json: bool, indent: int) -> None:
    if as_json:
        typer.echo(json.dumps(profile.to_dict(), indent=indent, ensure_ascii=False))
    else:
        _print_profile(profile, url)


# ------------------------------------------------------------------
# analyze
# ------------------------------------------------------------------
@app.command()
def analyze(
    url: str = typer.Argument(..., help="Page to profile (e.g. example.com or https://example.com/about)."),
    as_json: bool = typer.Option(False, "--json", help="Print the profile as JSON."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help="Path to settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Fetch a page and print its website profile."""
    engine = ProfileEngineApp(config_path=config)
    engine.initialize()
    _setup_logging(verbose, engine.config["app"].get("log_level", "INFO"))

    ok, message = check_page_url(url)
    if not ok:
        console.print(f"[red]Invalid URL:[/red] {message}")
        raise typer.Exit(code=1)

    fetch, profile = asyncio.run(engine.fetch_and_profile(url))
    if not fetch.ok and not as_json:
        console.print(f"[yellow]⚠ Could not fetch {fetch.requested_url}: {fetch.error}[/yellow]")
    _emit(profile, fetch.final_url, as_json, engine.config["output"].get("json_indent", 2))


# ------------------------------------------------------------------
# analyze-file
# ------------------------------------------------------------------
@app.command("analyze-file")
def analyze_file(
    path: Path = typer.Argument(..., help="Saved HTML file."),
    url: str = typer.Option(..., "--url", "-u", help="URL the HTML was fetched from."),
    as_json: bool = typer.Option(False, "--json", help="Print the profile as JSON."),
    config: str = typer.Option("config/settings.yaml", "--config", "-c", help="Path to settings YAML."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Profile a saved HTML file without any network access."""
    engine = ProfileEngineApp(config_path=config)
    engine.initialize()
    _setup_logging(verbose, engine.config["app"].get("log_level", "INFO"))

    ok, message = check_page_url(url)
    if not ok:
        console.print(f"[red]Invalid URL:[/red] {message}")
        raise typer.Exit(code=1)
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)

    html = path.read_text(encoding="utf-8", errors="replace")
    page_url = normalise_input_url(url)
    profile = engine.analyze_html(page_url, html)
    _emit(profile, page_url, as_json, engine.config["output"].get("json_indent", 2))


def main(argv: Optional[list[str]] = None) -> None:
    """Console-script entry point."""
    app(args=argv)


if __name__ == "__main__":
    main()
