"""Command-line interface for python-doc-a11y.

Checks a document file for accessibility issues and prints the results.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .config import CheckConfig, TabsPolicy, load_config
from .errors import DocA11yError
from .results import Status
from .runner import check_document

app = typer.Typer(
    name="doc-a11y",
    help="Check documents for accessibility issues from the command line.",
    no_args_is_help=True,
)

NO_ISSUES_MESSAGE = "No issues found."


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"doc-a11y version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output.")] = False,
) -> None:
    """Check documents for accessibility issues from the command line."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def check(
    file: Annotated[
        Path, typer.Argument(help="Document to check (.docx, .html, or Google Docs .json export)")
    ],
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="YAML/JSON configuration file")
    ] = None,
    policy: Annotated[
        TabsPolicy | None, typer.Option("--policy", "-p", help="Tabs block validation policy")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print results as JSON")] = False,
) -> None:
    """Check a document and print one line per finding.

    Exits with status 1 when any error is reported.
    """
    try:
        config = load_config(config_file) if config_file else CheckConfig()
        if policy is not None:
            config = replace(config, tabs_policy=policy)
        results = check_document(file, config=config)
    except (DocA11yError, FileNotFoundError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)

    if as_json:
        typer.echo(json.dumps([record.to_dict() for record in results], indent=2))
    elif not results:
        typer.echo(NO_ISSUES_MESSAGE)
    else:
        for record in results:
            typer.echo(str(record))

    if any(record.status is Status.ERROR for record in results):
        raise typer.Exit(1)


@app.command()
def rules() -> None:
    """List the registered rules in the order they run."""
    from .rules import RULE_REGISTRY

    for name, rule in RULE_REGISTRY.items():
        doc = (rule.__doc__ or "").strip()
        summary = doc.splitlines()[0] if doc else ""
        typer.echo(f"{name}: {summary}")


if __name__ == "__main__":
    app()
