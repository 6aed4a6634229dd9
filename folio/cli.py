"""CLI entry point for Folio."""

from __future__ import annotations

import html
from pathlib import Path
from typing import Annotated, Any

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from folio.config import FolioConfig, load_config
from folio.config.loader import DEFAULT_CONFIG_TEMPLATE
from folio.errors import ContentError
from folio.logging_setup import configure_logging
from folio.markup import render_html
from folio.pipeline import ContentPipeline, filter_by_title, sort_by_published

app = typer.Typer(
    name="folio",
    help="Content pipeline for a portfolio/blog: front matter, MDX-style markup, highlighting.",
)

config_app = typer.Typer(help="Manage Folio configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: FolioConfig | None = None


def _get_config() -> FolioConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to folio.yaml")
    ] = None,
    root: Annotated[
        str | None, typer.Option("--root", "-r", help="Override content.root_dir")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        cfg = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    if root is not None:
        cfg = cfg.model_copy(update={"content": cfg.content.model_copy(update={"root_dir": root})})
    configure_logging(cfg)
    _config = cfg


class _Placeholder:
    """Stand-in renderer for components named on the command line."""

    def __init__(self, name: str) -> None:
        self.name = name

    def render(self, props: dict[str, Any], children: str) -> str:
        attrs = "".join(f' data-{k.lower()}="{html.escape(str(v), quote=True)}"' for k, v in props.items())
        return f'<div data-component="{self.name}"{attrs}>{children}</div>'


def _pipeline(components: list[str] | None = None) -> ContentPipeline:
    table = {name: _Placeholder(name) for name in components or []}
    return ContentPipeline(_get_config(), table)


@app.command("list")
def list_cmd(
    content_type: str = typer.Argument(..., help="Content type, e.g. blog"),
) -> None:
    """List the documents of a content type."""
    try:
        names = _pipeline().list_items(content_type)
    except ContentError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not names:
        rprint(f"[yellow]No documents under {content_type}.[/yellow]")
        return
    for name in sorted(names):
        rprint(name)


@app.command()
def show(
    content_type: str = typer.Argument(..., help="Content type, e.g. blog"),
    slug: str | None = typer.Argument(None, help="Document slug; omit for a singleton page"),
    format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: json or html")
    ] = "json",
    component: Annotated[
        list[str] | None,
        typer.Option("--component", help="Bind a placeholder renderer for this component name"),
    ] = None,
) -> None:
    """Fetch and compile one document."""
    if format not in ("json", "html"):
        rprint(f"[red]Error:[/red] unknown format {format!r} (expected json or html)")
        raise typer.Exit(1)

    pipeline = _pipeline(component)
    try:
        envelope = pipeline.fetch_item(content_type, slug)
        if format == "html":
            typer.echo(render_html(envelope.compiled, pipeline.components))
        else:
            typer.echo(envelope.model_dump_json(indent=2))
    except ContentError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def summaries(
    content_type: str = typer.Argument(..., help="Content type, e.g. blog"),
    search: Annotated[
        str, typer.Option("--search", "-s", help="Only titles containing this text")
    ] = "",
) -> None:
    """Show the front matter of every document of a type, newest first."""
    cfg = _get_config()
    try:
        report = _pipeline().fetch_all_summaries(content_type)
    except ContentError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    posts = filter_by_title(sort_by_published(report.summaries, cfg.summaries.sort_key), search)

    table = Table(title=f"{content_type} ({len(posts)})")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Published", style="green")
    table.add_column("Words", justify="right")
    for fm in posts:
        table.add_row(
            str(fm.get("slug") or "-"),
            escape(str(fm.get("title", "-"))),
            str(fm.get(cfg.summaries.sort_key, "-")),
            str(fm.get("wordCount", 0)),
        )
    rprint(table)

    for err in report.errors:
        rprint(f"[red]FAIL[/red] {escape(err.file)}: {escape(err.error)}")
    if report.errors:
        raise typer.Exit(1)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default folio.yaml in current directory."""
    target = Path("folio.yaml")
    if target.exists() and not force:
        rprint("[yellow]folio.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
