import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from locus import __version__
from locus.config import load_config
from locus.document import DocumentLoadError, SourceDocument
from locus.models import Position
from locus.parsers import get_parser_for_file
from locus.positions import PositionConverter
from locus.signatures import SignatureMode, signature
from locus.uris import path_to_uri, uri_to_path

app = typer.Typer(
    help="Locus - source positions and symbol signatures for Java code",
    no_args_is_help=True,
)

console = Console()


def _load(file_path: Path) -> tuple[SourceDocument, int]:
    config = load_config()
    return SourceDocument.from_path(file_path, config.encoding), config.indent


@app.command()
def locate(
    file_path: Path,
    cross: bool = typer.Option(
        False,
        "--cross",
        help="Print cross-representation signatures instead of canonical ones",
    ),
):
    """Locate every declaration in a source file.

    Prints, for each package, type, method, constructor, field and enum
    constant, the location of its name and its signature.

    Args:
        file_path: Source file to analyze
    """
    config = load_config()
    cross = cross or config.cross_representation
    mode = SignatureMode.CROSS_REPRESENTATION if cross else SignatureMode.CANONICAL

    parser = get_parser_for_file(file_path)
    if parser is None:
        typer.echo(f"Error: Unsupported file type: {file_path}", err=True)
        raise typer.Exit(code=1)

    try:
        document = SourceDocument.from_path(file_path, config.encoding)
        unit = parser.parse(document.content, str(file_path))
        resolver = unit.resolver()

        results = []
        for declaration in unit.declarations:
            element = unit.element(declaration)
            results.append({
                "kind": element.kind.name.lower(),
                "name": str(element),
                "location": asdict(resolver.location(declaration.node)),
                "signature": signature(element, unit.elements, mode).text,
            })
    except DocumentLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    typer.echo(json.dumps(results, indent=config.indent))


@app.command()
def position(file_path: Path, offset: int):
    """Convert a character offset into a zero-based line/character position.

    Prints {"line": -1, "character": -1} for offsets outside the file.
    """
    try:
        document, indent = _load(file_path)
    except DocumentLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    result = PositionConverter(document.content).to_position(offset)
    typer.echo(json.dumps(asdict(result), indent=indent))


@app.command()
def offset(file_path: Path, line: int, character: int):
    """Convert a zero-based line/character position into a character offset.

    Prints -1 if the file has fewer lines.
    """
    try:
        document, _ = _load(file_path)
    except DocumentLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(str(PositionConverter.to_offset(document.content, Position(line, character))))


@app.command()
def uri(path: str):
    """Print the file URI of a path."""
    typer.echo(path_to_uri(path))


@app.command()
def path(uri: str):
    """Print the path of a file URI."""
    typer.echo(uri_to_path(uri))


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"locus version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    )):
    pass
