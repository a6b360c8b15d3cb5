"""mdbook-template CLI interface.

mdBook drives the tool in two ways:
- ``mdbook-template supports <renderer>``: exit 0 if the renderer is supported
- ``mdbook-template``: read [context, book] from stdin, write the book to stdout

Developer commands:
- validate: Check chapter files for template syntax errors
- init: Print the book.toml section that enables the preprocessor

Global options (also read from MDBOOK_TEMPLATE_* environment variables,
since mdBook invokes the tool without flags):
- --verbose: Enable debug output with timestamps
- --quiet: Only report errors
- --log-json: Emit log lines as JSON
- --version: Show version and exit
"""

import sys
from pathlib import Path
from typing import Annotated

import typer

from mdbook_template import __version__
from mdbook_template.errors import FatalError
from mdbook_template.utils.logging import configure_from_cli, get_logger

app = typer.Typer(
    name="mdbook-template",
    help="mdBook preprocessor that renders chapters against JSON data files",
    add_completion=False,
    no_args_is_help=False,
)

_logger = get_logger()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"mdbook-template {__version__}")
        raise typer.Exit()


def run_preprocessor_io() -> None:
    """Run one preprocessing pass over stdin/stdout.

    Nothing is written to stdout unless the Loading phase succeeded.
    """
    from mdbook_template.pipeline import run_preprocessor
    from mdbook_template.preprocessor import parse_input, write_output

    try:
        ctx, book = parse_input(sys.stdin.buffer)
        result = run_preprocessor(ctx, book)
    except FatalError as e:
        _logger.error(str(e))
        raise typer.Exit(1)

    if result.has_failures:
        _logger.warning(
            "%d chapter(s) were left unrendered because of template errors",
            len(result.failures),
        )

    write_output(result.book, sys.stdout.buffer)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            envvar="MDBOOK_TEMPLATE_VERBOSE",
            help="Enable debug output with timestamps",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            envvar="MDBOOK_TEMPLATE_QUIET",
            help="Only report errors",
        ),
    ] = False,
    log_json: Annotated[
        bool,
        typer.Option(
            "--log-json",
            envvar="MDBOOK_TEMPLATE_LOG_JSON",
            help="Emit log lines as JSON",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """mdbook-template - render chapters against JSON data files.

    Without a command, runs as an mdBook preprocessor: reads the book from
    stdin and writes the rendered book to stdout.
    """
    configure_from_cli(verbose=verbose, quiet=quiet, json_output=log_json)

    if ctx.invoked_subcommand is None:
        run_preprocessor_io()


# =============================================================================
# supports command
# =============================================================================


@app.command()
def supports(
    renderer: Annotated[
        str,
        typer.Argument(help="Renderer name mdBook is asking about"),
    ] = "",
) -> None:
    """Report renderer support to mdBook.

    Every renderer is supported, so this always exits 0.
    """
    _logger.debug(f"Renderer supported: {renderer or '(none given)'}")
    raise typer.Exit(0)


# =============================================================================
# validate command
# =============================================================================


@app.command()
def validate(
    files: Annotated[
        list[Path],
        typer.Argument(
            help="Markdown chapters to check",
            exists=True,
            dir_okay=False,
        ),
    ],
) -> None:
    """Check chapter files for template syntax errors.

    ``${{ ... }}`` spans are ignored, as they are during a build.
    Exits 1 if any file fails to parse.
    """
    from jinja2 import TemplateSyntaxError

    from mdbook_template.templates import create_environment, protect_patterns

    env = create_environment()
    failed = 0

    for path in files:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            typer.echo(f"❌ {path}: {e}")
            failed += 1
            continue

        try:
            env.parse(protect_patterns(content).text)
        except TemplateSyntaxError as e:
            typer.echo(f"❌ {path}: syntax error at line {e.lineno}: {e.message}")
            failed += 1
            continue

        typer.echo(f"✅ {path}")

    if failed:
        _logger.error(f"{failed} of {len(files)} file(s) have template errors")
        raise typer.Exit(1)

    raise typer.Exit(0)


# =============================================================================
# init command
# =============================================================================


@app.command()
def init() -> None:
    """Print the book.toml section that enables the preprocessor."""
    from mdbook_template.config import create_default_config

    typer.echo(create_default_config(), nl=False)


if __name__ == "__main__":
    app()
