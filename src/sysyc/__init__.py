"""
SysYC - Compiler Front End for the SysY Teaching Language
=========================================================

This package provides the lexical and syntactic stages of a compiler for
SysY, a small C-like language used in compiler construction courses.

Main Components
---------------
- **frontend**: lexer, recursive descent parser, error collector
    Turns SysY source into a derivation trace or a sorted error report

- **cli**: the `sysyc` command
    Reads a source file (UTF-8, falling back to GBK) and writes
    parser.txt or error.txt

Quick Start
-----------
Check a program:
    >>> from sysyc import compile_source
    >>> result = compile_source("int main() { return 0; }")
    >>> result.success
    True

Or use the command-line tool:
    $ sysyc testfile.txt
    $ sysyc prog.sy out/parser.txt out/error.txt --tokens out/lexer.txt

Output Formats
--------------
- parser.txt: one '<KIND_NAME> <text>' line per token consumed and one
  '<Nonterminal>' line per completed grammar rule
- error.txt: one '<line> <code>' line per error, ascending by line

Version History
---------------
1.0.0 - Lexer, parser with error recovery, CLI
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from sysyc.errors import (
    SysYError,
    SourceReadError,
    SourceErrorsFound,
)
from sysyc.frontend import (
    SysYFrontend,
    FrontendOptions,
    CompileResult,
    compile_source,
    read_source,
    ErrorKind,
    ErrorRecord,
    ErrorCollector,
    TokenKind,
    Token,
    scan,
    parse_source,
)

__all__ = [
    # Version info
    "__version__",
    # Exception hierarchy
    "SysYError",
    "SourceReadError",
    "SourceErrorsFound",
    # Front end
    "SysYFrontend",
    "FrontendOptions",
    "CompileResult",
    "compile_source",
    "read_source",
    "ErrorKind",
    "ErrorRecord",
    "ErrorCollector",
    "TokenKind",
    "Token",
    "scan",
    "parse_source",
]
