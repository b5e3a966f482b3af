"""
sysyc - SysY Front End Command-Line Interface
=============================================

This module implements the command-line interface for the SysY front end.
It runs the lexer and parser over one source file and writes exactly one
artifact: the derivation trace when the program is well formed, or the
sorted error report when it is not.

Usage Examples
--------------
Classic layout (reads testfile.txt, writes parser.txt or error.txt):
    $ sysyc

Explicit files:
    $ sysyc prog.sy out/parser.txt out/error.txt

Also dump the token stream:
    $ sysyc prog.sy --tokens lexer.txt

Print to the terminal instead of writing files:
    $ sysyc prog.sy --stdout

Verbose mode:
    $ sysyc -v prog.sy
"""

import logging
from pathlib import Path
from typing import Optional

import click

from sysyc import __version__
from sysyc.cli.errors import handle_cli_exception
from sysyc.frontend import FrontendOptions, SysYFrontend


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def _write_output(path: Path, text: str) -> None:
    path.write_text(text, encoding="utf-8")


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "parser_output",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument(
    "error_output",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--no-trace",
    is_flag=True,
    help="Check only; do not write the derivation trace",
)
@click.option(
    "--tokens",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the token stream ('<KIND> <text>' per line) to this file",
)
@click.option(
    "--stdout", "to_stdout",
    is_flag=True,
    help="Print the trace or error report instead of writing files",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sysyc")
def main(
    input_file: Optional[Path],
    parser_output: Optional[Path],
    error_output: Optional[Path],
    no_trace: bool,
    tokens: Optional[Path],
    to_stdout: bool,
    verbose: bool,
) -> None:
    """
    Lex and parse a SysY program.

    INPUT_FILE is the SysY source (default: testfile.txt). PARSER_OUTPUT
    receives the derivation trace (default: parser.txt) and ERROR_OUTPUT
    the '<line> <code>' error report (default: error.txt). Only one of the
    two is written per run; the other is removed if present.

    The defaults can be changed with the SYSYC_INPUT, SYSYC_PARSER_OUTPUT
    and SYSYC_ERROR_OUTPUT environment variables.

    \b
    Exit codes:
        0  program is well formed
        1  program has errors (report written)
        2  input missing or undecodable
        3  internal error
    """
    setup_logging(verbose)

    options = FrontendOptions.from_env()
    if no_trace:
        options.emit_trace = False

    input_path = input_file or Path(options.input_file)
    parser_path = parser_output or Path(options.parser_output)
    error_path = error_output or Path(options.error_output)
    if tokens is not None:
        options.tokens_output = str(tokens)

    try:
        if verbose and not to_stdout:
            click.echo(f"Parsing {input_path}...")

        result = SysYFrontend(options).compile_file(input_path)

        if options.tokens_output:
            _write_output(Path(options.tokens_output), result.token_listing())
            if verbose and not to_stdout:
                click.echo(f"Wrote {result.token_count} tokens to {options.tokens_output}")

        if result.errors:
            if to_stdout:
                click.echo(result.error_report(), nl=False)
            else:
                _write_output(error_path, result.error_report())
                parser_path.unlink(missing_ok=True)
                click.echo(f"Wrote error report to {error_path}")
            result.raise_if_errors()

        if not to_stdout:
            # A clean run leaves no report from an earlier one behind
            error_path.unlink(missing_ok=True)

        if not options.emit_trace:
            if not to_stdout:
                click.echo(f"{input_path}: no errors")
            return

        if to_stdout:
            click.echo(result.trace_text(), nl=False)
        else:
            _write_output(parser_path, result.trace_text())
            if verbose:
                click.echo(f"Wrote {len(result.trace)} trace lines to {parser_path}")
            click.echo(f"Parsed {input_path} -> {parser_path}")

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
