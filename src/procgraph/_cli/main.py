import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from procgraph._catalog import ModuleInfo, catalog, module_info
from procgraph._config import ConfigError, SamplerSettings, find_pyproject_toml, load_config
from procgraph._enums import ModuleCategory
from procgraph._errors import UnknownModuleError

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Procgraph CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _ports_table(title: str, info: ModuleInfo, *, inputs: bool) -> Table:
    table = Table(title=title, show_header=True, header_style="bold cyan", box=None)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Kind")
    if inputs:
        table.add_column("Default", style="yellow")
    for port in info.inputs if inputs else info.outputs:
        row = [str(port.index), escape(port.name), port.kind.value]
        if inputs:
            row.append(escape(port.default))
        table.add_row(*row)
    return table


def _parameters_table(info: ModuleInfo) -> Table | None:
    properties: dict[str, dict] = info.parameters.get("properties", {})
    if not properties:
        return None
    table = Table(title="Parameters", show_header=True, header_style="bold cyan", box=None)
    table.add_column("Name", style="bold")
    table.add_column("Type")
    table.add_column("Default", style="yellow")
    for name, schema in properties.items():
        kind = schema.get("type", "array" if "prefixItems" in schema else "-")
        table.add_row(name, str(kind), escape(json.dumps(schema.get("default"))))
    return table


@app.command(name="catalog")
def catalog_cmd(
    category: Annotated[
        ModuleCategory | None,
        typer.Option("--category", "-c", help="Only list modules of this category"),
    ] = None,
) -> None:
    """List every available module type."""
    infos = [info for info in catalog() if category is None or info.category is category]

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Type", style="bold", no_wrap=True)
    table.add_column("Category")
    table.add_column("Name")
    table.add_column("Inputs", justify="right", style="yellow")
    table.add_column("Outputs", justify="right", style="yellow")
    table.add_column("Description", style="dim")
    for info in infos:
        table.add_row(
            info.type_name,
            info.category.value,
            escape(info.display_name),
            str(len(info.inputs)),
            str(len(info.outputs)),
            escape(info.description),
        )

    out_console.print(table)
    err_console.print(f"[cyan]{len(infos)} module type(s)[/cyan]")


@app.command()
def describe(
    type_name: Annotated[str, typer.Argument(help="Module type name, e.g. NoiseModule")],
    *,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the metadata as JSON"),
    ] = False,
) -> None:
    """Show the ports and parameters of a module type."""
    try:
        info = module_info(type_name)
    except UnknownModuleError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    if as_json:
        typer.echo(info.model_dump_json(indent=2))
        return

    out_console.print(
        Panel(
            escape(info.description) or "[dim]No description[/dim]",
            title=f"[bold]{escape(info.display_name)}[/bold] ({info.type_name})",
            subtitle=info.category.value,
            border_style="cyan",
        ),
    )
    if info.inputs:
        out_console.print(_ports_table("Inputs", info, inputs=True))
    out_console.print(_ports_table("Outputs", info, inputs=False))
    parameters = _parameters_table(info)
    if parameters is not None:
        out_console.print(parameters)


@app.command()
def config(
    path: Annotated[
        Path | None,
        typer.Option("--path", help="pyproject.toml to read instead of searching upwards"),
    ] = None,
) -> None:
    """Show the sampler settings in effect."""
    pyproject_path = path if path is not None else find_pyproject_toml()

    if pyproject_path is None:
        err_console.print("[yellow]No pyproject.toml found, using defaults[/yellow]")
        settings = SamplerSettings()
    else:
        err_console.print(f"[cyan]Reading configuration from:[/cyan] {pyproject_path}")
        try:
            settings = load_config(pyproject_path)
        except (ConfigError, OSError) as e:
            err_console.print(f"[red]✗ {escape(str(e))}[/red]")
            raise typer.Exit(code=1) from e

    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="yellow")
    table.add_column("Description", style="dim")
    for name, field in SamplerSettings.model_fields.items():
        table.add_row(name, str(getattr(settings, name)), field.description or "")
    out_console.print(Panel(table, title="[bold]Sampler settings[/bold]", border_style="cyan"))


def main() -> None:
    app()
