"""
mcc - minicc Command-Line Interface
===================================

Checks a source file against the minicc grammar and optionally dumps
its tokens or AST.

Usage Examples
--------------
Check a program:
    $ mcc return_2.c

Dump the token stream:
    $ mcc --tokens return_2.c

Dump the AST:
    $ mcc --ast return_2.c

Verbose mode:
    $ mcc -v return_2.c
"""

import logging
from pathlib import Path

import click

from minicc import __version__
from minicc.cli.errors import handle_cli_exception
from minicc.frontend import ASTPrinter, Frontend, FrontendOptions

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print the AST",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="mcc")
def main(input_file: Path, tokens: bool, ast: bool, verbose: bool) -> None:
    """
    Check a minicc source file.

    INPUT_FILE is the C source file (.c) to check.

    \b
    Examples:
        mcc return_2.c              # Check the program
        mcc --tokens return_2.c     # Print one token per line
        mcc --ast return_2.c        # Print the AST

    \b
    Supported C subset:
        int main() { return <integer>; }
    """
    setup_logging(verbose)
    options = FrontendOptions.from_env()
    frontend = Frontend(options)
    logger.debug(f"Front-end options: {options}")

    try:
        if verbose:
            click.echo(f"Checking {input_file}...")

        if tokens:
            source = frontend.read_source(input_file)
            for token in frontend.tokenize_source(source, str(input_file)):
                click.echo(repr(token))
            return

        result = frontend.compile_file(input_file)

        if ast:
            click.echo(ASTPrinter().print(result.ast.root))
            return

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")

        click.echo(f"OK: {input_file} ({result.function_count} function(s))")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
