"""
SysY Compiler Front End
=======================

This package implements the front end of a compiler for SysY, a small
C-like teaching language (int-only, one-dimensional arrays, printf with a
format string, a distinguished `int main()`).

It provides:

- A lexer (scanner) producing tokens and illegal-symbol errors
- A recursive descent parser producing a derivation trace
- Line-oriented error recovery that always consumes the whole input
- An error collector holding (line, kind) records

Pipeline
--------
    Source → Lexer → Tokens → Parser → Derivation trace
                 ↘                  ↘
                   ErrorCollector ←──

If any error was collected, the run reports the sorted error list instead
of the trace.

Usage
-----
>>> from sysyc.frontend import compile_source
>>> result = compile_source('int main() { return 0 }')
>>> print(result.output_text(), end="")
1 i

Not supported:
- Semantic analysis (symbol tables, type checks); the semantic error
  kinds exist only so that a later pass can share the report format
- AST construction and code generation
"""

# =============================================================================
# Public API Imports
# =============================================================================

from sysyc.frontend.compiler import (
    SysYFrontend,
    FrontendOptions,
    CompileResult,
    compile_source,
    read_source,
)
from sysyc.frontend.errors import (
    ErrorCategory,
    ErrorKind,
    ErrorRecord,
    ErrorCollector,
)
from sysyc.frontend.lexer import Lexer, TokenKind, Token, EndOfInput, KEYWORDS, scan
from sysyc.frontend.parser import (
    Parser,
    Consumed,
    Missing,
    ExpectResult,
    parse_tokens,
    parse_source,
)
from sysyc.frontend.trace import DerivationTrace

__all__ = [
    # Main API
    "SysYFrontend",
    "FrontendOptions",
    "CompileResult",
    "compile_source",
    "read_source",
    # Errors
    "ErrorCategory",
    "ErrorKind",
    "ErrorRecord",
    "ErrorCollector",
    # Lexer
    "Lexer",
    "TokenKind",
    "Token",
    "EndOfInput",
    "KEYWORDS",
    "scan",
    # Parser
    "Parser",
    "Consumed",
    "Missing",
    "ExpectResult",
    "parse_tokens",
    "parse_source",
    # Trace
    "DerivationTrace",
]
