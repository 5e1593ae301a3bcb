import importlib
import json
import os
from typing import List, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from kompl.application import CompletionConfig, CompletionEngine
from kompl.core.matching import MatchPolicy
from kompl.core.types import MetadataFlag
from kompl.infrastructure.search_path import SymbolIndex, get_layout
from kompl.logger import get_logger, setup_logger
from kompl.utils import split_csv

load_dotenv()

console = Console()

cli = typer.Typer(
    name="kompl",
    help="Fuzzy identifier completion over the Python search path",
    epilog="""
    Examples:
    $ kompl complete co.ab
    $ kompl complete st --scope mymodule --context "greeting.__prefix__"
    $ kompl doc os.path.join
    """,
    add_completion=False,
)


def build_engine(
    policy: Optional[str],
    no_archives: bool,
    meta: Optional[str],
    path: Optional[List[str]],
    layout: Optional[str] = None,
) -> CompletionEngine:
    """Create an engine from environment defaults plus command-line overrides."""
    config = CompletionConfig.from_env()
    try:
        overrides = {
            "policy": MatchPolicy.parse(policy) if policy else None,
            "metadata": MetadataFlag.parse_many(split_csv(meta)) if meta else None,
        }
    except ValueError as error:
        raise typer.BadParameter(str(error)) from error
    config = config.with_overrides(
        scan_archives=False if no_archives else None,
        layout=layout,
        **overrides,
    )
    index = SymbolIndex(
        search_path=path or None,
        layout=get_layout(config.layout),
        scan_archives=config.scan_archives,
    )
    return CompletionEngine(config=config, index=index)


def import_scope(scope: Optional[str]) -> None:
    """Import the scope module; the engine only looks scopes up among imported modules."""
    if not scope:
        return
    try:
        importlib.import_module(scope)
    except Exception as error:
        get_logger("cli").warning(f"Cannot import scope {scope!r}: {error}")


@cli.callback()
def main(
    debug: bool = typer.Option(os.getenv("DEBUG", "false").lower() == "true", "--debug", help="Enable debug logging"),
):
    """Configure logging before any command runs."""
    setup_logger(log_level="DEBUG" if debug else os.getenv("KOMPL_LOG_LEVEL", "INFO"))


@cli.command()
def complete(
    prefix: str = typer.Argument(..., help="Text typed so far"),
    scope: Optional[str] = typer.Option(None, "--scope", "-s", help="Imported module whose names are in scope"),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="Snippet with __prefix__ at the cursor"),
    policy: Optional[str] = typer.Option(None, "--policy", "-p", help="Matching policy: a (skip-fuzzy) or b (boundary)"),
    no_archives: bool = typer.Option(False, "--no-archives", help="Do not look inside archives"),
    meta: Optional[str] = typer.Option(None, "--meta", help="Comma-separated metadata: doc,arity,type"),
    path: Optional[List[str]] = typer.Option(None, "--path", help="Search-path root (repeatable, default sys.path)"),
    layout: Optional[str] = typer.Option(None, "--layout", help="Storage layout: python or jvm"),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of a list"),
):
    """Print completions for PREFIX, shortest first."""
    engine = build_engine(policy, no_archives, meta, path, layout)
    import_scope(scope)

    results = engine.complete(prefix, scope=scope, context=context)
    if as_json:
        payload = [item if isinstance(item, str) else item.to_dict() for item in results]
        console.print_json(json.dumps(payload))
        return

    if results and not isinstance(results[0], str):
        table = Table(title=f"Completions for {prefix!r}")
        table.add_column("candidate", style="cyan")
        table.add_column("origin", style="magenta")
        table.add_column("metadata")
        for item in results:
            details = item.metadata.to_dict() if item.metadata else {}
            table.add_row(item.text, item.origin.value, ", ".join(f"{k}={v}" for k, v in details.items()))
        console.print(table)
        return

    for item in results:
        console.print(item, highlight=False, markup=False)


@cli.command()
def doc(
    symbol: str = typer.Argument(..., help="Dotted symbol to document"),
    scope: Optional[str] = typer.Option(None, "--scope", "-s", help="Imported module to resolve names in"),
):
    """Print the signature and docstring of SYMBOL."""
    import_scope(scope)
    engine = CompletionEngine(config=CompletionConfig.from_env())
    text = engine.documentation(symbol, scope=scope)
    if text:
        console.print(text, highlight=False, markup=False)


@cli.command()
def scan(
    path: Optional[List[str]] = typer.Option(None, "--path", help="Search-path root (repeatable, default sys.path)"),
    no_archives: bool = typer.Option(False, "--no-archives", help="Do not look inside archives"),
    layout: Optional[str] = typer.Option(None, "--layout", help="Storage layout: python or jvm"),
):
    """Scan the search path and summarise the index views."""
    engine = build_engine(None, no_archives, None, path, layout)
    index = engine.index

    table = Table(title="Search-path index")
    table.add_column("view", style="cyan")
    table.add_column("entries", justify="right")
    table.add_row("roots", str(len(index.search_path_key())))
    table.add_row("all files", str(len(index.all_files())))
    table.add_row("type groups", str(len(index.grouped_names())))
    table.add_row("modules", str(len(index.module_names())))
    table.add_row("resources", str(len(index.resources())))
    console.print(table)


if __name__ == "__main__":
    cli()
