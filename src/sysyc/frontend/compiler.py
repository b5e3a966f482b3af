"""
SysY Front-End Driver
=====================

This module provides the main interface for running the front end.
It orchestrates the complete process:

    Source file → Decode → Lex → Parse → Trace / Error report

Usage
-----
Command line:
    $ sysyc testfile.txt parser.txt error.txt

Programmatic:
    >>> from sysyc.frontend import compile_source
    >>> result = compile_source('int main() { return 0; }')
    >>> result.success
    True
    >>> result.trace[-1]
    '<CompUnit>'

Reporting Policy
----------------
A run yields exactly one meaningful artifact. If the lexer or parser
recorded any error, the output is the sorted '<line> <code>' report and the
derivation trace is discarded; otherwise the output is the trace.

Configuration
-------------
FrontendOptions holds every setting. Values come from:
- Default values (defined here)
- Environment variables, via FrontendOptions.from_env()
- Command-line flags, applied by the CLI on top
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence
import logging
import os

from sysyc.errors import SourceErrorsFound, SourceReadError
from sysyc.frontend.errors import ErrorCollector, ErrorRecord
from sysyc.frontend.lexer import Token, format_tokens, scan
from sysyc.frontend.parser import parse_tokens

logger = logging.getLogger(__name__)


# =============================================================================
# Options
# =============================================================================

DEFAULT_ENCODINGS = ("utf-8", "gbk")

_FALSE_VALUES = ("0", "false", "no", "off")
_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class FrontendOptions:
    """
    Front-end configuration options.

    Attributes:
        emit_trace: Record the derivation trace (the parser still runs and
                    reports errors when False)
        encodings: Encodings tried in order when reading a source file
        input_file: Default source file for the CLI
        parser_output: Default trace output file for the CLI
        error_output: Default error report file for the CLI
        tokens_output: Token listing output file, or None for no listing
    """
    emit_trace: bool = True
    encodings: tuple = DEFAULT_ENCODINGS
    input_file: str = "testfile.txt"
    parser_output: str = "parser.txt"
    error_output: str = "error.txt"
    tokens_output: Optional[str] = None

    @classmethod
    def from_env(cls) -> "FrontendOptions":
        """
        Create FrontendOptions from environment variables.

        Environment variables (all optional):
            SYSYC_EMIT_TRACE: 0/false/no/off disables the trace, 1/true/yes/on enables it
            SYSYC_ENCODINGS: Comma-separated encodings, e.g. "utf-8,gbk"
            SYSYC_INPUT: Default source file
            SYSYC_PARSER_OUTPUT: Default trace output file
            SYSYC_ERROR_OUTPUT: Default error report file

        Unrecognised values are ignored and the default kept.

        Returns:
            FrontendOptions with values from environment variables
        """
        options = cls()

        if emit := os.environ.get("SYSYC_EMIT_TRACE"):
            if emit.lower() in _FALSE_VALUES:
                options.emit_trace = False
            elif emit.lower() in _TRUE_VALUES:
                options.emit_trace = True

        if encodings := os.environ.get("SYSYC_ENCODINGS"):
            names = tuple(name.strip() for name in encodings.split(",") if name.strip())
            if names:
                options.encodings = names

        if input_file := os.environ.get("SYSYC_INPUT"):
            options.input_file = input_file

        if parser_output := os.environ.get("SYSYC_PARSER_OUTPUT"):
            options.parser_output = parser_output

        if error_output := os.environ.get("SYSYC_ERROR_OUTPUT"):
            options.error_output = error_output

        return options


# =============================================================================
# Source Reading
# =============================================================================

def read_source(path, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> str:
    """
    Read a source file, trying each encoding in turn.

    Args:
        path: Path to the source file
        encodings: Encodings to try, in order

    Returns:
        The decoded source text

    Raises:
        SourceReadError: If the file cannot be read or no encoding decodes it
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        raise SourceReadError("source file not found", filename=str(path))
    except OSError as e:
        raise SourceReadError(f"cannot read source file: {e.strerror}", filename=str(path))

    for encoding in encodings:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug("%s: not decodable as %s", path, encoding)
            continue
        logger.debug("%s: decoded as %s", path, encoding)
        return text

    raise SourceReadError(
        f"cannot decode source with {', '.join(encodings)}",
        filename=str(path),
        hint="re-save the file as UTF-8",
    )


# =============================================================================
# Compilation Result
# =============================================================================

@dataclass
class CompileResult:
    """
    Result of one front-end run.

    Attributes:
        filename: Source filename
        tokens: Token sequence produced by the lexer
        trace: Derivation trace lines (empty when the trace was disabled)
        errors: Error records sorted by line
    """
    filename: str = "<input>"
    tokens: tuple = ()
    trace: List[str] = field(default_factory=list)
    errors: List[ErrorRecord] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if no errors were recorded."""
        return not self.errors

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def trace_text(self) -> str:
        """The derivation trace, one newline-terminated line each."""
        return "".join(f"{line}\n" for line in self.trace)

    def error_report(self) -> str:
        """The '<line> <code>' report, one newline-terminated line each."""
        return "".join(f"{record}\n" for record in self.errors)

    def token_listing(self) -> str:
        """The scanner's '<KIND_NAME> <text>' listing."""
        return format_tokens(self.tokens)

    def output_text(self) -> str:
        """The one artifact the reporting policy selects."""
        if self.errors:
            return self.error_report()
        return self.trace_text()

    def raise_if_errors(self) -> None:
        """
        Raise if the run recorded any error.

        Raises:
            SourceErrorsFound: Carrying the formatted error report
        """
        if self.errors:
            raise SourceErrorsFound(
                self.error_report(), len(self.errors), filename=self.filename
            )


# =============================================================================
# Front End
# =============================================================================

class SysYFrontend:
    """
    Runs the SysY lexer and parser.

    Each compile call gets its own ErrorCollector, so one frontend object
    can be reused for any number of independent runs.

    Example:
        frontend = SysYFrontend()
        result = frontend.compile_file("testfile.txt")
        print(result.output_text(), end="")

    Attributes:
        options: Front-end configuration options
    """

    def __init__(self, options: Optional[FrontendOptions] = None):
        """
        Initialize the front end.

        Args:
            options: Configuration (uses defaults if None)
        """
        self.options = options or FrontendOptions()

    def compile_source(self, source: str, filename: str = "<input>") -> CompileResult:
        """
        Lex and parse SysY source.

        Source errors never raise; they end up in result.errors.

        Args:
            source: SysY source code string
            filename: Source filename for diagnostics

        Returns:
            CompileResult with tokens, trace and sorted errors
        """
        errors = ErrorCollector()

        # Stage 1: Lexical analysis
        tokens = self._lex(source, errors)

        # Stage 2: Parsing; runs even after lexical errors so that every
        # error in the file is reported in one go
        trace_lines = self._parse(tokens, errors)

        result = CompileResult(
            filename=filename,
            tokens=tokens,
            trace=trace_lines,
            errors=errors.records(),
        )

        logger.debug(
            "%s: %d tokens, %d errors",
            filename,
            result.token_count,
            len(result.errors),
        )
        return result

    def compile_file(self, filepath) -> CompileResult:
        """
        Read and compile a source file.

        Args:
            filepath: Path to the source file

        Returns:
            CompileResult for the file

        Raises:
            SourceReadError: If the file cannot be read or decoded
        """
        source = read_source(filepath, self.options.encodings)
        return self.compile_source(source, str(filepath))

    def _lex(self, source: str, errors: ErrorCollector) -> tuple[Token, ...]:
        """Tokenize source."""
        return scan(source, errors)

    def _parse(self, tokens: tuple[Token, ...], errors: ErrorCollector) -> List[str]:
        """Parse tokens into trace lines."""
        trace = parse_tokens(tokens, errors, emit_trace=self.options.emit_trace)
        return trace.lines


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_source(
    source: str,
    filename: str = "<input>",
    options: Optional[FrontendOptions] = None,
) -> CompileResult:
    """
    Run the front end over a source string.

    Args:
        source: SysY source code
        filename: Source filename for diagnostics
        options: Front-end options (defaults if None)

    Returns:
        CompileResult
    """
    return SysYFrontend(options).compile_source(source, filename)
