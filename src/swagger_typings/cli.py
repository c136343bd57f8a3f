"""
Command-line interface for swagger-typings.
"""

import logging
import os
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .compiler import compile_document, compile_documents
from .config import SwaggerTypingsConfig, load_config
from .exceptions import ConfigError
from .fetcher import fetch_documents
from .formatter import create_formatter
from .models import Document, Resource
from .writer import write_artifact

app = typer.Typer(help="Generate TypeScript declarations from Swagger documents")


def _load_settings(config_file: Optional[Path], root: Path) -> SwaggerTypingsConfig:
    """Load the configuration.

    Raises:
        typer.Exit: If the configuration cannot be loaded
    """
    try:
        return load_config(config_file, search_dir=root)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _load_document(path: Path, resource: Resource) -> Document:
    """Load a local Swagger document (JSON or YAML).

    Raises:
        typer.Exit: If the file cannot be loaded
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return Document.model_validate(dict(data, resource=resource))
    except (OSError, TypeError, ValueError, yaml.YAMLError, ValidationError) as e:
        typer.echo(f"Error loading {path}: {str(e)}", err=True)
        raise typer.Exit(1)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Generate TypeScript declarations from Swagger documents."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def generate(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to the configuration file"
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="Project root; the output directory is relative to it"
    ),
) -> None:
    """Fetch every configured Swagger document and write its declarations."""
    root = root or Path.cwd()
    settings = _load_settings(config_file, root)

    documents, failures = fetch_documents(settings)
    for failure in failures:
        typer.secho(f"✖ {failure}", err=True, fg=typer.colors.RED)

    failed = len(failures)
    for result in compile_documents(documents, settings):
        source, name = result.key
        if not result.ok:
            failed += 1
            typer.secho(f"✖ {source}/{name}: {result.error}", err=True, fg=typer.colors.RED)
            continue
        try:
            path = write_artifact(result, settings, root)
        except (OSError, ValueError) as e:
            failed += 1
            typer.secho(f"✖ {source}/{name}: {e}", err=True, fg=typer.colors.RED)
            continue
        typer.secho(
            f"🚀 {result.title} {result.description} "
            f"{os.path.relpath(path, root)} {result.elapsed_ms}ms",
            fg=typer.colors.CYAN,
        )

    if failed:
        raise typer.Exit(1)


@app.command("compile")
def compile_command(
    input_file: Path = typer.Argument(..., help="Path to a Swagger JSON or YAML document"),
    source: str = typer.Option(..., "--source", "-s", help="Source group of the document"),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Resource name. Defaults to the input file name"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file for style and formatter options"
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the declarations here instead of stdout"
    ),
) -> None:
    """Compile one local Swagger document."""
    if not input_file.exists():
        typer.echo(f"Input file not found: {input_file}", err=True)
        raise typer.Exit(1)

    settings = SwaggerTypingsConfig()
    if config_file is not None:
        settings = _load_settings(config_file, input_file.parent)

    resource = Resource(
        source=source,
        name=name or input_file.name.split(".")[0],
        url=input_file.resolve().as_uri(),
    )
    document = _load_document(input_file, resource)
    result = compile_document(document, create_formatter(settings), settings.style)
    if not result.ok:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(1)

    if output_file is None:
        typer.echo(result.text, nl=False)
        return
    output_file.parent.mkdir(parents=True, exist_ok=True)
    output_file.write_text(result.text, encoding="utf-8")
    typer.echo(f"Successfully compiled {input_file} to {output_file}")


def main():
    """Entry point for the CLI."""
    app()
